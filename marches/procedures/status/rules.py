from dataclasses import dataclass

from django.db import models

from .conditions import TODAY, BoolOperator, Combinator, Condition, Default, Leaf, Operator


class ProcedureStatus(models.TextChoices):
    TERMINEE = "5 - Terminée"
    NOTIFICATION_EN_COURS = "4.4 - Notification en cours"
    VALIDATION_RP_EN_COURS = "4.3 - Validation RP en cours"
    ANALYSE_EN_COURS = "4.2 - Analyse en cours"
    EN_ATTENTE_OUVERTURE = "4.1 - En attente de d'ouverture"
    PUBLIEE = "3 - Publiée"
    REDACTION = "2 - Rédaction"
    INITIEE = "1 - Initiée"


@dataclass(frozen=True)
class StatusRule:
    status: ProcedureStatus
    condition: Condition

    @property
    def priority(self) -> int:
        """Rang de la règle (1 = évaluée en premier), déduit de sa position dans STATUS_RULES."""
        return STATUS_RULES.index(self) + 1


def all_of(*children: Condition) -> Combinator:
    return Combinator(BoolOperator.AND, children)


def any_of(*children: Condition) -> Combinator:
    return Combinator(BoolOperator.OR, children)


# Règles de calcul du statut, par ordre de priorité décroissante : la première qui s'applique l'emporte.
STATUS_RULES: tuple[StatusRule, ...] = (
    StatusRule(
        ProcedureStatus.TERMINEE,
        any_of(
            Leaf("finalite_consultation", Operator.EQ, "Abandonnée"),
            Leaf("date_publication_donnees_essentielles", Operator.IS_NOT_NULL),
            all_of(
                Leaf("date_avis_attribution", Operator.IS_NOT_NULL),
                Leaf("finalite", Operator.IS_NOT_NULL),
                Leaf("finalite", Operator.NE, "Attribuée"),
            ),
            all_of(
                Leaf("type_marche", Operator.EQ, "Subséquent"),
                Leaf("finalite", Operator.IN, ("Sans suite", "Infructueuse")),
            ),
            Leaf("Reprise_au_statut_Termine", Operator.EQ, True),
        ),
    ),
    StatusRule(
        ProcedureStatus.NOTIFICATION_EN_COURS,
        Leaf("statut_rapport_presentation", Operator.EQ, "3-Validé"),
    ),
    StatusRule(
        ProcedureStatus.VALIDATION_RP_EN_COURS,
        Leaf("statut_rapport_presentation", Operator.IN, ("2-En cours",)),
    ),
    StatusRule(
        ProcedureStatus.ANALYSE_EN_COURS,
        all_of(
            Leaf("date_ouverture_offres", Operator.IS_NOT_NULL),
            Leaf("date_ouverture_offres", Operator.LE, TODAY),
        ),
    ),
    StatusRule(
        ProcedureStatus.EN_ATTENTE_OUVERTURE,
        Leaf("date_remise_offres", Operator.LT, TODAY),
    ),
    StatusRule(
        ProcedureStatus.PUBLIEE,
        Leaf("date_publication", Operator.LE, TODAY),
    ),
    StatusRule(
        ProcedureStatus.REDACTION,
        all_of(
            Leaf("date_publication", Operator.GT, TODAY),
            Leaf("numero_afpa_consultation", Operator.IS_NOT_NULL),
        ),
    ),
    StatusRule(ProcedureStatus.INITIEE, Default()),
)

import datetime

from django.db import models
from django.db.models import Q
from django.utils import timezone

from marches.common.models import BaseModel

from .status import ProcedureStatus, compute_status

# Champ identifiant d'une procédure dans la base hébergée
ID_FIELD = "IDProjet"

SEARCH_FIELDS = [
    "Nom de la procédure",
    "Objet court",
    "Numéro de procédure (Afpa)",
]


class ProcedureQuerySet(models.QuerySet):
    def search(self, term: str):
        """Recherche insensible à la casse sur l'identifiant, le nom, l'objet et le numéro Afpa."""
        term = (term or "").strip()
        if not term:
            return self
        query = Q(id_projet__icontains=term)
        for field in SEARCH_FIELDS:
            query |= Q(**{f"data__{field}__icontains": term})
        return self.filter(query)

    def with_status(self, status: ProcedureStatus | str):
        return self.filter(statut_consultation=status)


class Procedure(BaseModel):
    id_projet = models.CharField("IDProjet", max_length=50, unique=True)
    data = models.JSONField(default=dict, blank=True)
    # Valeur dérivée de `data`, recalculée par refresh_status : jamais une valeur de référence
    statut_consultation = models.CharField(
        "statut de la consultation", max_length=50, choices=ProcedureStatus.choices, blank=True
    )
    statut_calcule_le = models.DateTimeField(null=True, blank=True)

    objects = ProcedureQuerySet.as_manager()

    class Meta:
        db_table = "procedures"

    def __str__(self):
        return f"{self.id_projet} - {self.statut_consultation or '?'}"

    def compute_status(self, now: datetime.datetime | None = None) -> ProcedureStatus:
        return compute_status(self.data or {}, now=now)

    def refresh_status(self, now: datetime.datetime | None = None, save: bool = True) -> bool:
        """
        Recalcule le statut et le met en cache. Retourne True si le statut a changé.
        """
        now = now or timezone.now()
        status = self.compute_status(now=now)
        changed = status != self.statut_consultation
        self.statut_consultation = status
        self.statut_calcule_le = now
        if save:
            self.save(update_fields=["statut_consultation", "statut_calcule_le", "updated_at"])
        return changed

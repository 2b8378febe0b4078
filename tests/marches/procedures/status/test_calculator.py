import datetime

import pytest
from freezegun import freeze_time

from marches.procedures.status import STATUS_RULES, ProcedureStatus, compute_status, explain_status


def test_empty_record_is_initiee(now):
    assert compute_status({}, now=now) == ProcedureStatus.INITIEE
    assert compute_status({}, now=now) == "1 - Initiée"


def test_abandonnee_is_terminee(now):
    assert compute_status({"Finalité de la consultation": "Abandonnée"}, now=now) == "5 - Terminée"


def test_donnees_essentielles_published_is_terminee(now):
    assert compute_status({"Données essentielles": "01/06/2025"}, now=now) == ProcedureStatus.TERMINEE


def test_avis_attribution_with_other_finalite_is_terminee(now):
    record = {"Avis d'attribution": "01/06/2025", "Finalité de la consultation": "Sans suite"}
    assert compute_status(record, now=now) == ProcedureStatus.TERMINEE


def test_avis_attribution_attribuee_is_not_terminee(now):
    record = {"Avis d'attribution": "01/06/2025", "Finalité de la consultation": "Attribuée"}
    assert compute_status(record, now=now) == ProcedureStatus.INITIEE


def test_avis_attribution_without_finalite_is_not_terminee(now):
    assert compute_status({"Avis d'attribution": "01/06/2025"}, now=now) == ProcedureStatus.INITIEE


@pytest.mark.parametrize("finalite", ["Sans suite", "infructueuse"])
def test_subsequent_without_attribution_is_terminee(now, finalite):
    record = {"Forme du marché": "Subséquent", "Finalité de la consultation": finalite}
    assert compute_status(record, now=now) == ProcedureStatus.TERMINEE


def test_sans_suite_without_subsequent_nor_avis_is_not_terminee(now):
    record = {"Forme du marché": "Simple", "Finalité de la consultation": "Sans suite"}
    assert compute_status(record, now=now) == ProcedureStatus.INITIEE


def test_reprise_au_statut_termine(now):
    assert compute_status({"Reprise_au_statut_Termine": True}, now=now) == ProcedureStatus.TERMINEE
    assert compute_status({"Reprise_au_statut_Termine": False}, now=now) == ProcedureStatus.INITIEE


def test_terminee_takes_precedence_over_every_other_rule(now):
    record = {
        "Finalité de la consultation": "Abandonnée",
        "RP - Statut": "3-Validé",
        "Date d'ouverture des offres": "01/06/2025",
        "Date de remise des offres": "01/06/2025",
        "date_de_lancement_de_la_consultation": "01/05/2025",
        "Numéro de procédure (Afpa)": "AF12345",
    }
    assert compute_status(record, now=now) == ProcedureStatus.TERMINEE


def test_rp_valide_is_notification_en_cours(now):
    record = {"RP - Statut": "3-Validé", "Date de remise des offres": "14/06/2025"}
    assert compute_status(record, now=now) == "4.4 - Notification en cours"


def test_rp_en_cours_is_validation_rp(now):
    record = {"RP - Statut": "2-En cours", "Date d'ouverture des offres": "01/06/2025"}
    assert compute_status(record, now=now) == ProcedureStatus.VALIDATION_RP_EN_COURS


def test_rp_initie_does_not_match_rp_rules(now):
    record = {"RP - Statut": "1-Initié", "Date d'ouverture des offres": "01/06/2025"}
    assert compute_status(record, now=now) == ProcedureStatus.ANALYSE_EN_COURS


def test_offers_opened_today_is_analyse_en_cours(now):
    assert compute_status({"Date d'ouverture des offres": "15/06/2025"}, now=now) == ProcedureStatus.ANALYSE_EN_COURS


def test_offers_opening_in_future_falls_through(now):
    record = {"Date d'ouverture des offres": "20/06/2025", "Date de remise des offres": "14/06/2025"}
    assert compute_status(record, now=now) == ProcedureStatus.EN_ATTENTE_OUVERTURE


def test_offers_received_yesterday_is_en_attente_ouverture(now):
    yesterday = (now - datetime.timedelta(days=1)).strftime("%d/%m/%Y")
    assert compute_status({"Date de remise des offres": yesterday}, now=now) == "4.1 - En attente de d'ouverture"


def test_published_is_publiee(now):
    record = {"date_de_lancement_de_la_consultation": "2025-06-15", "Date de remise des offres": "30/06/2025"}
    assert compute_status(record, now=now) == ProcedureStatus.PUBLIEE


def test_publication_planned_with_afpa_number_is_redaction(now):
    tomorrow = (now + datetime.timedelta(days=1)).strftime("%d/%m/%Y")
    record = {"date_de_lancement_de_la_consultation": tomorrow, "Numéro de procédure (Afpa)": "AF12345"}
    assert compute_status(record, now=now) == "2 - Rédaction"


def test_publication_planned_without_afpa_number_is_initiee(now):
    record = {"date_de_lancement_de_la_consultation": "16/06/2025", "Numéro de procédure (Afpa)": ""}
    assert compute_status(record, now=now) == ProcedureStatus.INITIEE


def test_malformed_fields_fall_through_to_initiee(now):
    record = {
        "Date d'ouverture des offres": "pas une date",
        "Date de remise des offres": "32/13/2025",
        "date_de_lancement_de_la_consultation": 12,
        "RP - Statut": None,
        "Finalité de la consultation": float("nan"),
    }
    assert compute_status(record, now=now) == ProcedureStatus.INITIEE


@pytest.mark.parametrize(
    "record",
    [
        {},
        {"Finalité de la consultation": "Abandonnée"},
        {"RP - Statut": "3-Validé"},
        {"Date de remise des offres": 45000},
        {"date_de_lancement_de_la_consultation": "16/06/2025", "Numéro de procédure (Afpa)": "AF1"},
    ],
)
def test_always_returns_a_known_label_and_is_idempotent(now, record):
    first = compute_status(record, now=now)
    assert first in ProcedureStatus.values
    assert compute_status(record, now=now) == first


def test_compute_status_does_not_mutate_record(now):
    record = {"RP - Statut": "3-Validé"}
    compute_status(record, now=now)
    assert record == {"RP - Statut": "3-Validé"}


def test_compute_status_accepts_aware_now():
    now = datetime.datetime(2025, 6, 15, 10, 0, tzinfo=datetime.timezone.utc)
    assert compute_status({"Date de remise des offres": "10/06/2025"}, now=now) == ProcedureStatus.EN_ATTENTE_OUVERTURE


@freeze_time("2025-06-15 12:00:00")
def test_compute_status_defaults_to_current_date():
    assert compute_status({"Date de remise des offres": "10/06/2025"}) == ProcedureStatus.EN_ATTENTE_OUVERTURE
    assert compute_status({"Date de remise des offres": "20/06/2025"}) == ProcedureStatus.INITIEE


def test_explain_status_returns_matching_rule(now):
    rule = explain_status({"RP - Statut": "2-En cours"}, now=now)
    assert rule.status == ProcedureStatus.VALIDATION_RP_EN_COURS
    assert rule.priority == 3


def test_explain_status_default_rule(now):
    rule = explain_status({}, now=now)
    assert rule is STATUS_RULES[-1]
    assert rule.priority == 8


def test_rules_cover_every_status_in_order():
    assert [rule.status for rule in STATUS_RULES] == list(ProcedureStatus)
    assert [rule.priority for rule in STATUS_RULES] == list(range(1, 9))


@pytest.mark.parametrize(
    "record",
    [
        {"Date de remise des offres": "9999-12-31T23:00:00-12:00"},
        {"Date d'ouverture des offres": "0001-01-01T00:00:00+14:00"},
        {"Finalité de la consultation": 10**400},
        {"RP - Statut": 10**400},
        {"Date de remise des offres": 10**400},
    ],
)
def test_out_of_range_values_fall_through_to_initiee(now, record):
    assert compute_status(record, now=now) == ProcedureStatus.INITIEE


def test_fallback_when_no_rule_matches(now, monkeypatch):
    monkeypatch.setattr("marches.procedures.status.calculator.STATUS_RULES", STATUS_RULES[:-1])

    assert explain_status({}, now=now) is None
    assert compute_status({}, now=now) == ProcedureStatus.INITIEE

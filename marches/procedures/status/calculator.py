"""
Calcul automatique du statut de la consultation d'une procédure.

Le statut n'est jamais stocké comme valeur de référence : il est recalculé à partir
des champs de la procédure et de la date du jour, en parcourant STATUS_RULES dans l'ordre.
"""

import datetime
import logging
from collections.abc import Mapping
from typing import Any

from .conditions import evaluate_condition
from .dates import to_naive_local
from .rules import STATUS_RULES, ProcedureStatus, StatusRule

logger = logging.getLogger(__name__)

FALLBACK_STATUS = ProcedureStatus.INITIEE


def _normalize_now(now: datetime.datetime | None) -> datetime.datetime:
    if now is None:
        return datetime.datetime.now()
    return to_naive_local(now)


def explain_status(record: Mapping[str, Any], now: datetime.datetime | None = None) -> StatusRule | None:
    """
    Retourne la première règle satisfaite par la procédure, ou None si aucune ne l'est.
    """
    now = _normalize_now(now)
    for rule in STATUS_RULES:
        if evaluate_condition(record, rule.condition, now):
            return rule
    return None


def compute_status(record: Mapping[str, Any], now: datetime.datetime | None = None) -> ProcedureStatus:
    """
    Calcule le statut de la consultation d'une procédure.

    `now` fixe la date de référence des comparaisons avec la date du jour ;
    par défaut l'heure locale courante est lue une seule fois pour toutes les règles.
    """
    rule = explain_status(record, now)
    if rule is None:
        return FALLBACK_STATUS
    logger.debug("Statut %s (règle %s)", rule.status, rule.priority)
    return rule.status

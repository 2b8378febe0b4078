import logging

import pandas as pd
from django.utils import timezone
from tqdm import tqdm

from .models import Procedure
from .status import STATUS_RULES, compute_status

logger = logging.getLogger(__name__)

BATCH_SIZE = 500


def refresh_statuses(queryset=None, now=None, show_progress=False, save=True):
    """
    Recalcule le statut de chaque procédure avec la même date de référence.

    Seules les procédures dont le statut change sont enregistrées.
    Retourne le nombre de procédures modifiées.
    """
    if queryset is None:
        queryset = Procedure.objects.all()
    now = now or timezone.now()

    procedures = queryset.only("id", "data", "statut_consultation", "statut_calcule_le").iterator(
        chunk_size=BATCH_SIZE
    )
    if show_progress:
        procedures = tqdm(procedures, total=queryset.count(), desc="Statuts")

    changed = []
    for procedure in procedures:
        if procedure.refresh_status(now=now, save=False):
            changed.append(procedure)

    if save and changed:
        Procedure.objects.bulk_update(changed, ["statut_consultation", "statut_calcule_le"], batch_size=BATCH_SIZE)

    logger.info("Statuts recalculés : %s procédures modifiées", len(changed))
    return len(changed)


def compute_statuses_dataframe(df: pd.DataFrame, now=None) -> pd.Series:
    """
    Calcule le statut de chaque ligne d'un DataFrame de procédures.

    Args:
        df (pd.DataFrame): une ligne par procédure, colonnes nommées comme les champs stockés
            ("Date de remise des offres", "RP - Statut", ...). Les cellules vides (NaN) sont
            considérées comme absentes.
        now (datetime): date de référence, commune à toutes les lignes.

    Returns:
        pd.Series: le statut de chaque ligne, même index que df.
    """
    now = now or timezone.now()
    if df.empty:
        return pd.Series([], index=df.index, dtype="object")
    return df.apply(lambda row: str(compute_status(row, now=now)), axis=1)


def status_counts(queryset=None, statuses=None) -> dict[str, int]:
    """
    Nombre de procédures par statut, dans l'ordre des règles (statuts absents à 0).

    `statuses` permet de compter une liste de statuts déjà calculés au lieu du cache en base.
    """
    counts = {str(rule.status): 0 for rule in STATUS_RULES}
    if statuses is None:
        if queryset is None:
            queryset = Procedure.objects.all()
        statuses = queryset.values_list("statut_consultation", flat=True)
    for status in statuses:
        status = str(status)
        if status in counts:
            counts[status] += 1
    return counts

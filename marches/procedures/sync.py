import json
import logging

from django.db import transaction
from django.utils import timezone

from .models import ID_FIELD, Procedure

logger = logging.getLogger(__name__)


def read_records(filename):
    """
    Lit un export JSON de la base hébergée.

    Deux formes sont acceptées : une liste de procédures, ou un objet
    {"records": [{"fields": {...}}, ...]}.
    """
    with open(filename, "r", encoding="utf-8") as file:
        content = json.load(file)

    if isinstance(content, dict):
        content = [record.get("fields", record) for record in content.get("records", [])]

    if not isinstance(content, list):
        raise ValueError(f"Format d'export non reconnu dans {filename}")

    return [record for record in content if isinstance(record, dict)]


def sync_procedures(records, now=None):
    """
    Insère ou met à jour les procédures par IDProjet, et calcule leur statut.

    Les procédures sans IDProjet sont ignorées. Retourne (créées, mises à jour).
    """
    now = now or timezone.now()
    by_id = {}
    for record in records:
        id_projet = str(record.get(ID_FIELD) or "").strip()
        if not id_projet:
            logger.warning("Procédure sans %s ignorée : %s", ID_FIELD, record)
            continue
        by_id[id_projet] = record

    existing = Procedure.objects.in_bulk(list(by_id), field_name="id_projet")

    to_create = []
    to_update = []
    for id_projet, record in by_id.items():
        procedure = existing.get(id_projet)
        if procedure is None:
            procedure = Procedure(id_projet=id_projet, data=record)
            to_create.append(procedure)
        else:
            procedure.data = record
            # bulk_update ne déclenche pas auto_now
            procedure.updated_at = now
            to_update.append(procedure)
        procedure.refresh_status(now=now, save=False)

    with transaction.atomic():
        created = Procedure.objects.bulk_create(to_create)
        Procedure.objects.bulk_update(
            to_update, ["data", "statut_consultation", "statut_calcule_le", "updated_at"], batch_size=500
        )

    logger.info("Synchronisation : %s procédures créées, %s mises à jour", len(created), len(to_update))
    return created, to_update

import logging

from celery import shared_task

from .refresh import refresh_statuses

logger = logging.getLogger(__name__)


@shared_task(name="marches.refresh_procedure_statuses")
def task_refresh_procedure_statuses() -> int:
    # Le statut dépend de la date du jour : le cache doit être recalculé chaque jour
    return refresh_statuses()

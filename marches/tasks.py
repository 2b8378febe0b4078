from .procedures.tasks import task_refresh_procedure_statuses  # noqa: F401

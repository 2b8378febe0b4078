import logging

from celery import current_task


class CeleryTaskFilter(logging.Filter):
    """Add `task_id` to log record."""

    def filter(self, record):
        record.task_id = ""
        record.task_name = ""
        if current_task:
            try:
                record.task_id = current_task.request.id or ""
                record.task_name = current_task.name
            except AttributeError:
                pass
        return True

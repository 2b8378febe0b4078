import logging
import os

from celery import Celery, signals

# Use same name as Celery is using for its task success logger
logger_celery = logging.getLogger("celery.app.trace")


# set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "marches.settings")

app = Celery("marches")

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# marches is a single Django app: its tasks live in marches.tasks
app.autodiscover_tasks(["marches"])


@signals.task_prerun.connect()
def task_prerun(task_id, task, **kwargs):
    logger_celery.info("Start task %s args=%s kwargs=%s", task.name, kwargs["args"], kwargs["kwargs"])

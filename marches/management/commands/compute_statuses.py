import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from marches.procedures.models import Procedure
from marches.procedures.refresh import refresh_statuses, status_counts


class Command(BaseCommand):
    help = "Recompute the consultation status of every procedure"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            help="Evaluate statuses as of this date (YYYY-MM-DD) instead of today",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            default=False,
            help="Display the resulting counts by status without saving",
        )
        parser.add_argument(
            "--no-progress",
            action="store_false",
            dest="show_progress",
            default=True,
            help="Hide progress bar",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        if options["date"]:
            try:
                day = datetime.date.fromisoformat(options["date"])
            except ValueError:
                raise CommandError(f"Invalid date \"{options['date']}\", expected YYYY-MM-DD")
            now = timezone.make_aware(datetime.datetime.combine(day, datetime.time.min))

        if options["dry_run"]:
            statuses = (procedure.compute_status(now=now) for procedure in Procedure.objects.iterator())
            counts = status_counts(statuses=statuses)
        else:
            changed = refresh_statuses(now=now, show_progress=options["show_progress"])
            self.stdout.write(self.style.SUCCESS(f"Successfully computed statuses ({changed} changed)"))
            counts = status_counts()

        for status, count in counts.items():
            self.stdout.write(f"{status}: {count}")

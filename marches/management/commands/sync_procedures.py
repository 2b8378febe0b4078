import json
import os

from django.core.management.base import BaseCommand, CommandError

from marches.procedures.sync import read_records, sync_procedures


class Command(BaseCommand):
    help = "Syncs procedures from a JSON export of the hosted database"

    def add_arguments(self, parser):
        parser.add_argument("filename", type=str, help="Path to the JSON file to import")

    def handle(self, *args, **options):
        filename = options["filename"]

        # Check if file exists
        if not os.path.exists(filename):
            raise CommandError(f'File "{filename}" does not exist')

        try:
            records = read_records(filename)
        except (json.JSONDecodeError, ValueError) as e:
            raise CommandError(f'Invalid export file "{filename}": {e}')
        self.stdout.write(self.style.SUCCESS(f"Found {len(records)} procedures in JSON file"))

        created, updated = sync_procedures(records)

        self.stdout.write(
            self.style.SUCCESS(f"Successfully synced procedures ({len(created)} created, {len(updated)} updated)")
        )

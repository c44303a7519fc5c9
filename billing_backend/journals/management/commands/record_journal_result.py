# journals/management/commands/record_journal_result.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from journals.models import Journal
from journals.services.exceptions import JournalError
from journals.services.journal_service import record_import_result, status


class Command(BaseCommand):
    help = "Record the general ledger import result (success/failure) of a pending journal."

    def add_arguments(self, parser):
        parser.add_argument("journal_id", type=int)
        outcome = parser.add_mutually_exclusive_group(required=True)
        outcome.add_argument("--succeeded", action="store_true")
        outcome.add_argument("--failed", action="store_true")
        parser.add_argument("--reference", required=True)
        parser.add_argument("--updated-by", dest="updated_by", required=True, help="Username")

    def handle(self, *args, **options):
        journal = Journal.objects.filter(pk=options["journal_id"]).first()
        if journal is None:
            self.stderr.write(self.style.ERROR(f"Unknown journal: {options['journal_id']}"))
            raise SystemExit(1)

        User = get_user_model()
        updated_by = User.objects.filter(**{User.USERNAME_FIELD: options["updated_by"]}).first()
        if updated_by is None:
            self.stderr.write(self.style.ERROR(f"Unknown user: {options['updated_by']}"))
            raise SystemExit(1)

        try:
            journal = record_import_result(
                journal,
                succeeded=bool(options.get("succeeded")),
                reference=options["reference"],
                updated_by=updated_by,
            )
        except JournalError as exc:
            self.stderr.write(self.style.ERROR(str(exc)))
            raise SystemExit(1)

        self.stdout.write(self.style.SUCCESS(f"Journal #{journal.pk}: {status(journal).label}"))

# journals/management/commands/create_journal.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from facilities.models import Facility
from journals.services.exceptions import JournalError
from journals.services.fiscal_year import spans_fiscal_years
from journals.services.journal_service import amount, create_journal
from orders.models import OrderDetail


class Command(BaseCommand):
    help = (
        "Batch fulfilled, un-journaled order details into a new pending journal. "
        "Without --order-detail, every complete detail of --facility is selected."
    )

    def add_arguments(self, parser):
        parser.add_argument("--created-by", dest="created_by", required=True, help="Username")
        parser.add_argument("--facility", dest="facility", type=int, help="Facility id (omit for multi-facility)")
        parser.add_argument(
            "--order-detail",
            dest="order_details",
            type=int,
            action="append",
            default=[],
            help="Order detail id (repeatable)",
        )
        parser.add_argument(
            "--allow-fiscal-year-span",
            action="store_true",
            help="Create the journal even if the details cross a fiscal year boundary.",
        )

    def _fail(self, message: str):
        self.stderr.write(self.style.ERROR(message))
        raise SystemExit(1)

    def handle(self, *args, **options):
        User = get_user_model()
        username = options["created_by"]
        created_by = User.objects.filter(**{User.USERNAME_FIELD: username}).first()
        if created_by is None:
            self._fail(f"Unknown user: {username}")

        facility = None
        if options.get("facility"):
            facility = Facility.objects.filter(pk=options["facility"]).first()
            if facility is None:
                self._fail(f"Unknown facility: {options['facility']}")

        qs = OrderDetail.objects.select_related(
            "order__user", "order__facility", "product__facility_account", "account"
        )
        ids = options.get("order_details") or []
        if ids:
            by_id = qs.in_bulk(ids)
            missing = [i for i in ids if i not in by_id]
            if missing:
                self._fail(f"Unknown order details: {missing}")
            details = [by_id[i] for i in ids]
        else:
            if facility is None:
                self._fail("Pass --facility or at least one --order-detail")
            details = list(
                qs.filter(
                    order__facility=facility,
                    state=OrderDetail.State.COMPLETE,
                    fulfilled_at__isnull=False,
                    journal__isnull=True,
                ).order_by("fulfilled_at", "id")
            )

        if not details:
            self.stdout.write(self.style.WARNING("Nothing to journal."))
            return

        try:
            if spans_fiscal_years(details) and not options.get("allow_fiscal_year_span"):
                self._fail(
                    "Selected order details span fiscal years. "
                    "Use --allow-fiscal-year-span to journal them anyway."
                )
            journal = create_journal(
                order_details=details, facility=facility, created_by=created_by
            )
        except JournalError as exc:
            self._fail(str(exc))

        self.stdout.write(
            self.style.SUCCESS(
                f"Journal #{journal.pk} created: {len(details)} order details, amount {amount(journal)}"
            )
        )

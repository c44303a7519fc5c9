# journals/tests/test_journal_service.py

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.db.models import Sum
from django.test import TestCase

from journals.models import Journal, JournalRow
from journals.services.exceptions import (
    AlreadyJournaledError,
    EmptySelectionError,
    FacilityHasPendingJournalError,
    FacilityMismatchError,
    InvalidAccountError,
    JournalStateError,
    RequiredFieldError,
)
from journals.services.journal_row_factory import create_journal_rows
from journals.services.journal_service import create_journal, record_import_result
from journals.services.pending_journals import has_pending_journal, pending_facility_ids
from journals.tests.utils import (
    aware,
    make_facility,
    make_funding_account,
    make_order_detail,
    make_product,
    make_user,
)
from orders.models import OrderDetail


class JournalCreationTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.facility = make_facility()
        self.confocal = make_product(self.facility, "Confocal hour", "REV-100")
        self.training = make_product(self.facility, "Training", "REV-200")
        self.account = make_funding_account("FA-1000")

    def _detail(self, product=None, total="100.00", account=None, **kwargs):
        return make_order_detail(
            product or self.confocal,
            account or self.account,
            user=self.user,
            total=total,
            **kwargs,
        )

    def test_rows_balance_per_product_and_details_are_stamped(self):
        details = [
            self._detail(self.confocal, "30.00"),
            self._detail(self.training, "50.00"),
            self._detail(self.confocal, "70.00"),
        ]

        journal = create_journal(
            order_details=details, facility=self.facility, created_by=self.user
        )

        self.assertEqual(journal.status, Journal.Status.PENDING)
        self.assertIsNone(journal.is_successful)

        rows = list(journal.journal_rows.order_by("id"))
        self.assertEqual(len(rows), 5)

        charges = [r for r in rows if r.is_charge]
        recharges = [r for r in rows if not r.is_charge]
        self.assertEqual(
            [r.amount for r in charges],
            [Decimal("30.00"), Decimal("50.00"), Decimal("70.00")],
        )
        self.assertTrue(all(r.account == "FA-1000" for r in charges))

        # first-seen product order
        self.assertEqual(
            [(r.account, r.amount, r.description) for r in recharges],
            [
                ("REV-100", Decimal("-100.00"), "Confocal hour"),
                ("REV-200", Decimal("-50.00"), "Training"),
            ],
        )

        total = journal.journal_rows.aggregate(total=Sum("amount"))["total"]
        self.assertEqual(total, Decimal("0.00"))

        for product in (self.confocal, self.training):
            charged = journal.journal_rows.filter(order_detail__product=product).aggregate(
                total=Sum("amount")
            )["total"]
            recharged = journal.journal_rows.get(
                order_detail__isnull=True, account=product.revenue_account
            ).amount
            self.assertEqual(charged + recharged, Decimal("0.00"))

        stamped = OrderDetail.objects.filter(pk__in=[od.pk for od in details])
        self.assertEqual(set(stamped.values_list("journal_id", flat=True)), {journal.pk})
        self.assertTrue(all(od.journal_id == journal.pk for od in details))

    def test_recharge_totals_do_not_depend_on_selection_order(self):
        details = [
            self._detail(self.training, "50.00"),
            self._detail(self.confocal, "70.00"),
            self._detail(self.confocal, "30.00"),
        ]

        journal = create_journal(
            order_details=details, facility=self.facility, created_by=self.user
        )

        recharges = journal.journal_rows.filter(order_detail__isnull=True).order_by("id")
        self.assertEqual(
            [(r.account, r.amount) for r in recharges],
            [("REV-200", Decimal("-50.00")), ("REV-100", Decimal("-100.00"))],
        )

    def test_charge_row_description(self):
        od = self._detail(quantity=3, fulfilled_at=aware(2023, 10, 15))

        journal = create_journal(
            order_details=[od], facility=self.facility, created_by=self.user
        )

        row = journal.journal_rows.get(order_detail=od)
        self.assertEqual(row.description, f"#{od}: billing: 10/15/2023: Confocal hour x3")

    def test_zero_sum_product_gets_no_recharge_row(self):
        details = [self._detail(total="25.00"), self._detail(total="-25.00")]

        journal = create_journal(
            order_details=details, facility=self.facility, created_by=self.user
        )

        self.assertEqual(journal.journal_rows.count(), 2)
        self.assertFalse(journal.journal_rows.filter(order_detail__isnull=True).exists())

    def test_already_journaled_detail_is_rejected(self):
        od = self._detail()
        first = create_journal(order_details=[od], facility=self.facility, created_by=self.user)
        record_import_result(first, succeeded=True, reference="GL-1", updated_by=self.user)

        rows_before = JournalRow.objects.count()
        fresh = OrderDetail.objects.get(pk=od.pk)

        with self.assertRaises(AlreadyJournaledError) as ctx:
            create_journal(order_details=[fresh], facility=self.facility, created_by=self.user)

        self.assertEqual(ctx.exception.order_detail.pk, od.pk)
        self.assertEqual(JournalRow.objects.count(), rows_before)
        self.assertEqual(Journal.objects.count(), 1)
        self.assertEqual(OrderDetail.objects.get(pk=od.pk).journal_id, first.pk)

    def test_detail_listed_twice_is_rejected(self):
        od = self._detail()

        with self.assertRaises(AlreadyJournaledError):
            create_journal(order_details=[od, od], facility=self.facility, created_by=self.user)

        self.assertEqual(JournalRow.objects.count(), 0)
        self.assertIsNone(OrderDetail.objects.get(pk=od.pk).journal_id)

    def test_invalid_account_rolls_back_the_whole_batch(self):
        suspended = make_funding_account("FA-2000", suspended_at=aware(2023, 1, 1))
        details = [
            self._detail(),
            self._detail(account=suspended),
            self._detail(),
        ]

        with self.assertRaises(InvalidAccountError) as ctx:
            create_journal(order_details=details, facility=self.facility, created_by=self.user)

        exc = ctx.exception
        self.assertEqual(exc.order_detail.pk, details[1].pk)
        self.assertEqual(exc.reason, "is suspended")
        self.assertEqual(
            str(exc),
            f"Account FA-2000 on order detail #{details[1]} is invalid. It is suspended.",
        )

        self.assertEqual(Journal.objects.count(), 0)
        self.assertEqual(JournalRow.objects.count(), 0)
        self.assertFalse(OrderDetail.objects.filter(journal__isnull=False).exists())
        self.assertFalse(has_pending_journal(self.facility.pk))

    def test_created_by_is_required(self):
        with self.assertRaises(RequiredFieldError) as ctx:
            create_journal(
                order_details=[self._detail()], facility=self.facility, created_by=None
            )

        self.assertEqual(ctx.exception.field, "created_by")
        self.assertEqual(Journal.objects.count(), 0)

    def test_empty_selection_is_rejected(self):
        with self.assertRaises(EmptySelectionError):
            create_journal(order_details=[], facility=self.facility, created_by=self.user)

    def test_factory_ignores_empty_selection(self):
        journal = Journal.objects.create(facility=self.facility, created_by=self.user)

        self.assertIs(create_journal_rows(journal, []), journal)
        self.assertEqual(journal.journal_rows.count(), 0)

    def test_factory_refuses_closed_journal(self):
        journal = Journal.objects.create(facility=self.facility, created_by=self.user)
        record_import_result(journal, succeeded=False, reference="GL-9", updated_by=self.user)
        journal.refresh_from_db()

        with self.assertRaises(JournalStateError):
            create_journal_rows(journal, [self._detail()])


class PendingJournalExclusivityTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.facility = make_facility()
        self.other_facility = make_facility("Genomics Core", "GEN")
        self.product = make_product(self.facility)
        self.other_product = make_product(self.other_facility, "Sequencing run", "REV-900")
        self.account = make_funding_account()

    def _detail(self, product=None):
        return make_order_detail(product or self.product, self.account, user=self.user)

    def test_second_pending_journal_for_facility_is_rejected(self):
        create_journal(order_details=[self._detail()], facility=self.facility, created_by=self.user)
        od = self._detail()

        with self.assertRaises(FacilityHasPendingJournalError) as ctx:
            create_journal(order_details=[od], facility=self.facility, created_by=self.user)

        self.assertEqual(ctx.exception.facility, self.facility)
        self.assertEqual(Journal.objects.filter(facility=self.facility).count(), 1)
        self.assertIsNone(OrderDetail.objects.get(pk=od.pk).journal_id)

    def test_multi_facility_journal_cannot_include_facility_with_pending_journal(self):
        create_journal(order_details=[self._detail()], facility=self.facility, created_by=self.user)

        with self.assertRaises(FacilityHasPendingJournalError):
            create_journal(
                order_details=[self._detail(self.other_product), self._detail()],
                created_by=self.user,
            )

        self.assertEqual(Journal.objects.count(), 1)
        self.assertFalse(JournalRow.objects.filter(journal__facility__isnull=True).exists())

    def test_storage_conflict_is_reported_as_pending_journal(self):
        create_journal(order_details=[self._detail()], facility=self.facility, created_by=self.user)

        # a concurrent creator that passed the registry check
        with mock.patch(
            "journals.services.journal_service.has_pending_journal", return_value=False
        ):
            with self.assertRaises(FacilityHasPendingJournalError):
                create_journal(
                    order_details=[self._detail()],
                    facility=self.facility,
                    created_by=self.user,
                )

        self.assertEqual(Journal.objects.filter(facility=self.facility).count(), 1)

    def test_closing_the_journal_frees_the_facility(self):
        journal = create_journal(
            order_details=[self._detail()], facility=self.facility, created_by=self.user
        )
        self.assertEqual(pending_facility_ids(), {self.facility.pk})

        record_import_result(journal, succeeded=False, reference="GL-REJ", updated_by=self.user)

        self.assertFalse(has_pending_journal(self.facility.pk))
        second = create_journal(
            order_details=[self._detail()], facility=self.facility, created_by=self.user
        )
        self.assertTrue(second.is_open)

    def test_scoped_journal_rejects_details_of_other_facilities(self):
        own = self._detail()
        foreign = self._detail(self.other_product)

        with self.assertRaises(FacilityMismatchError) as ctx:
            create_journal(
                order_details=[own, foreign], facility=self.facility, created_by=self.user
            )

        self.assertEqual(ctx.exception.order_detail.pk, foreign.pk)
        self.assertEqual(ctx.exception.facility, self.facility)
        self.assertFalse(Journal.objects.exists())
        self.assertFalse(JournalRow.objects.exists())
        self.assertFalse(OrderDetail.objects.filter(journal__isnull=False).exists())
        self.assertEqual(pending_facility_ids(), set())

    def test_multi_facility_journal(self):
        first = self._detail()
        second = self._detail(self.other_product)

        journal = create_journal(order_details=[first, second], created_by=self.user)

        self.assertIsNone(journal.facility_id)
        self.assertEqual(
            sorted(journal.facility_ids()),
            sorted([self.facility.pk, self.other_facility.pk]),
        )
        self.assertEqual(pending_facility_ids(), {self.facility.pk, self.other_facility.pk})

    def test_multi_facility_journals_over_disjoint_facilities_coexist(self):
        create_journal(order_details=[self._detail()], created_by=self.user)
        other = create_journal(
            order_details=[self._detail(self.other_product)], created_by=self.user
        )

        self.assertTrue(other.is_open)
        self.assertEqual(Journal.objects.pending().count(), 2)

    def test_for_facilities(self):
        scoped = create_journal(
            order_details=[self._detail()], facility=self.facility, created_by=self.user
        )
        multi = create_journal(
            order_details=[self._detail(self.other_product)], created_by=self.user
        )

        self.assertEqual(list(Journal.objects.for_facilities([self.facility])), [scoped])
        self.assertEqual(list(Journal.objects.for_facilities([self.other_facility])), [])
        self.assertEqual(
            list(Journal.objects.for_facilities([self.other_facility], include_multi=True)),
            [multi],
        )


class ImportResultTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.facility = make_facility()
        product = make_product(self.facility)
        od = make_order_detail(product, make_funding_account(), user=self.user)
        self.journal = create_journal(
            order_details=[od], facility=self.facility, created_by=self.user
        )

    def test_success_is_recorded(self):
        journal = record_import_result(
            self.journal, succeeded=True, reference=" GL-2024-001 ", updated_by=self.user
        )

        journal.refresh_from_db()
        self.assertEqual(journal.status, Journal.Status.SUCCEEDED)
        self.assertTrue(journal.is_successful)
        self.assertEqual(journal.reference, "GL-2024-001")
        self.assertEqual(journal.updated_by, self.user)

    def test_failure_is_recorded(self):
        journal = record_import_result(
            self.journal, succeeded=False, reference="GL-REJ", updated_by=self.user
        )

        self.assertIs(journal.is_successful, False)
        self.assertFalse(journal.is_open)

    def test_reference_and_updated_by_are_required(self):
        with self.assertRaises(RequiredFieldError) as ctx:
            record_import_result(self.journal, succeeded=True, reference="  ", updated_by=self.user)
        self.assertEqual(ctx.exception.field, "reference")

        with self.assertRaises(RequiredFieldError) as ctx:
            record_import_result(self.journal, succeeded=True, reference="GL-1", updated_by=None)
        self.assertEqual(ctx.exception.field, "updated_by")

        self.journal.refresh_from_db()
        self.assertTrue(self.journal.is_open)

    def test_outcome_is_final(self):
        record_import_result(self.journal, succeeded=True, reference="GL-1", updated_by=self.user)

        with self.assertRaises(JournalStateError):
            record_import_result(
                self.journal, succeeded=False, reference="GL-2", updated_by=self.user
            )

        self.journal.refresh_from_db()
        self.journal.status = Journal.Status.PENDING
        with self.assertRaises(ValidationError):
            self.journal.save()

    def test_closed_journal_requires_reference_at_model_level(self):
        self.journal.status = Journal.Status.SUCCEEDED
        with self.assertRaises(ValidationError):
            self.journal.save()

    def test_journal_cannot_be_deleted(self):
        with self.assertRaises(ValidationError):
            self.journal.delete()

# journals/services/journal_row_factory.py

"""
======================================================
PATH: journals/services/journal_row_factory.py
======================================================
JOURNAL ROW FACTORY (JOURNAL ENGINE)

This module is the ONLY place allowed to:
- Create JournalRow
- Stamp OrderDetail.journal

For every order detail:
- one charge row   (funding account, +total)
For every product of the batch:
- one recharge row (product revenue account, -sum of its charges)

So every product group, and the journal as a whole, sums to zero.

Each validation step returns an error value (or None); the batch raises
the first one. All-or-nothing: any failure rolls back every row created
and every stamp made by the call.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import transaction

from journals.models import Journal, JournalRow
from journals.services.account_validator import AccountValidator, get_account_validator
from journals.services.exceptions import (
    AlreadyJournaledError,
    FacilityHasPendingJournalError,
    FacilityMismatchError,
    InvalidAccountError,
    JournalError,
    JournalStateError,
)
from journals.services.pending_journals import pending_facility_ids
from orders.models import OrderDetail

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise JournalError(f"Invalid money value: {value!r}") from exc

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _charge_description(od: OrderDetail) -> str:
    fulfilled = od.fulfilled_at.strftime("%m/%d/%Y") if od.fulfilled_at else ""
    return f"#{od}: {od.order.user}: {fulfilled}: {od.product} x{od.quantity}"


def _check_not_journaled(
    od: OrderDetail, *, current_journal_ids: dict, seen_ids: set
) -> JournalError | None:
    if od.pk in seen_ids:
        return AlreadyJournaledError(od, f"Order detail #{od} is listed twice")
    if od.journal_id or current_journal_ids.get(od.pk):
        return AlreadyJournaledError(od)
    return None


def _check_facility(
    od: OrderDetail, *, journal: Journal, facility_ids_in_journal: set
) -> JournalError | None:
    facility_id = od.order.facility_id
    if journal.facility_id and facility_id != journal.facility_id:
        return FacilityMismatchError(od, journal.facility)

    if facility_id in facility_ids_in_journal:
        return None

    if facility_id in pending_facility_ids(exclude_journal=journal):
        return FacilityHasPendingJournalError(od.order.facility)

    facility_ids_in_journal.add(facility_id)
    return None


def _check_account(od: OrderDetail, *, validator: AccountValidator) -> JournalError | None:
    account = od.account
    result = validator.is_account_open(account.account_number, od.product)
    if result.is_open:
        return None
    return InvalidAccountError(od, account, result.reason)


@transaction.atomic
def create_journal_rows(
    journal: Journal,
    order_details,
    *,
    validator: AccountValidator | None = None,
) -> Journal:
    details = list(order_details)
    if not details:
        return journal

    if not journal.is_open:
        raise JournalStateError(f"Journal #{journal} is not pending; rows cannot be added")

    validator = validator or get_account_validator()

    detail_ids = [od.pk for od in details]
    current_journal_ids = dict(
        OrderDetail.objects.select_for_update()
        .filter(pk__in=detail_ids)
        .values_list("pk", "journal_id")
    )

    facility_ids_in_journal: set[int] = set()
    seen_ids: set[int] = set()
    recharge_by_product: dict[int, Decimal] = {}
    products = {}
    rows: list[JournalRow] = []

    for od in details:
        error = (
            _check_not_journaled(od, current_journal_ids=current_journal_ids, seen_ids=seen_ids)
            or _check_facility(od, journal=journal, facility_ids_in_journal=facility_ids_in_journal)
            or _check_account(od, validator=validator)
        )
        if error is not None:
            logger.error(
                "Journal row creation aborted",
                extra={
                    "journal_id": journal.pk,
                    "order_detail_id": od.pk,
                    "error": str(error),
                },
            )
            raise error

        seen_ids.add(od.pk)
        total = _money(od.total)

        rows.append(
            JournalRow(
                journal=journal,
                order_detail=od,
                account=od.account.account_number,
                amount=total,
                description=_charge_description(od),
            )
        )
        recharge_by_product[od.product_id] = (
            recharge_by_product.get(od.product_id, Decimal("0.00")) + total
        )
        products[od.product_id] = od.product

    # one recharge row per product, in first-seen order
    for product_id, total in recharge_by_product.items():
        if total == 0:
            continue
        product = products[product_id]
        rows.append(
            JournalRow(
                journal=journal,
                account=product.revenue_account,
                amount=-total,
                description=str(product),
            )
        )

    JournalRow.objects.bulk_create(rows)

    stamped = OrderDetail.objects.filter(
        pk__in=detail_ids, journal__isnull=True
    ).update(journal=journal)

    if stamped != len(seen_ids):
        # another journal stamped one of these details after we read them
        offender = (
            OrderDetail.objects.filter(pk__in=detail_ids)
            .exclude(journal=journal)
            .order_by("pk")
            .first()
        )
        logger.error(
            "Order detail stamping conflict",
            extra={"journal_id": journal.pk, "order_detail_id": getattr(offender, "pk", None)},
        )
        raise AlreadyJournaledError(offender)

    for od in details:
        od.journal = journal

    logger.info(
        "Journal rows created",
        extra={
            "journal_id": journal.pk,
            "order_details": len(details),
            "rows": len(rows),
        },
    )
    return journal

# journals/services/journal_service.py

"""
======================================================
PATH: journals/services/journal_service.py
======================================================
JOURNAL SERVICE (CALLER-FACING BATCH API)

Entry points used by the API views, management commands and batch jobs:
- create_journal()        -> pending Journal with rows, order details stamped
- record_import_result()  -> persist the downstream ledger's accept/reject
- status() / amount() / spans_fiscal_years() (read-only)

Concurrency:
- facilities involved are locked (select_for_update, id order) for the call
- the registry check gives an early, readable error
- the partial unique index on Journal is the source of truth; a violation
  is re-signalled as FacilityHasPendingJournalError
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from facilities.models import Facility
from journals.models import Journal
from journals.services.account_validator import AccountValidator
from journals.services.amounts import journal_amount
from journals.services.exceptions import (
    EmptySelectionError,
    FacilityHasPendingJournalError,
    JournalStateError,
    RequiredFieldError,
)
from journals.services.fiscal_year import spans_fiscal_years
from journals.services.journal_row_factory import create_journal_rows
from journals.services.pending_journals import has_pending_journal
from journals.services.reconciliation import ReconciliationStatus, status_string

logger = logging.getLogger(__name__)

__all__ = [
    "create_journal",
    "record_import_result",
    "status",
    "amount",
    "spans_fiscal_years",
]


def _lock_facilities(facility_ids) -> None:
    list(
        Facility.objects.select_for_update()
        .filter(pk__in=sorted(facility_ids))
        .order_by("pk")
    )


@transaction.atomic
def create_journal(
    *,
    order_details,
    created_by,
    facility: Facility | None = None,
    validator: AccountValidator | None = None,
) -> Journal:
    """
    Batch the given order details into a new pending journal.

    facility=None creates a multi-facility journal.

    Raises:
        RequiredFieldError, EmptySelectionError, AlreadyJournaledError,
        FacilityHasPendingJournalError, FacilityMismatchError, InvalidAccountError
    """
    if created_by is None:
        raise RequiredFieldError("created_by", "created_by is required to create a journal")

    details = list(order_details)
    if not details:
        raise EmptySelectionError("No order details selected for the journal")

    facility_ids = {od.order.facility_id for od in details}
    if facility is not None:
        facility_ids.add(facility.pk)
    _lock_facilities(facility_ids)

    if facility is not None and has_pending_journal(facility.pk):
        logger.warning(
            "Journal creation rejected: facility has a pending journal",
            extra={"facility_id": facility.pk},
        )
        raise FacilityHasPendingJournalError(facility)

    try:
        with transaction.atomic():
            journal = Journal.objects.create(facility=facility, created_by=created_by)
    except IntegrityError as exc:
        if facility is None:
            raise
        logger.error(
            "Pending journal uniqueness violated",
            extra={"facility_id": facility.pk},
        )
        raise FacilityHasPendingJournalError(facility) from exc

    create_journal_rows(journal, details, validator=validator)

    logger.info(
        "Journal created",
        extra={
            "journal_id": journal.pk,
            "facility_id": getattr(facility, "pk", None),
            "created_by": getattr(created_by, "pk", None),
            "order_details": len(details),
        },
    )
    return journal


@transaction.atomic
def record_import_result(
    journal: Journal,
    *,
    succeeded: bool,
    reference: str,
    updated_by,
) -> Journal:
    """
    Move a pending journal to SUCCEEDED or FAILED. Terminal states are final.
    """
    reference = (reference or "").strip()
    if not reference:
        raise RequiredFieldError("reference", "reference is required to close a journal")
    if updated_by is None:
        raise RequiredFieldError("updated_by", "updated_by is required to close a journal")

    locked = Journal.objects.select_for_update().get(pk=journal.pk)
    if not locked.is_open:
        raise JournalStateError(
            f"Journal #{locked} is already {locked.get_status_display().lower()}"
        )

    locked.status = Journal.Status.SUCCEEDED if succeeded else Journal.Status.FAILED
    locked.reference = reference
    locked.updated_by = updated_by
    locked.save()

    logger.info(
        "Journal import result recorded",
        extra={
            "journal_id": locked.pk,
            "status": locked.status,
            "reference": reference,
        },
    )
    return locked


def status(journal: Journal) -> ReconciliationStatus:
    return status_string(journal)


def amount(journal: Journal):
    return journal_amount(journal)

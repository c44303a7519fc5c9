# journals/services/reconciliation.py

"""
RECONCILIATION TRACKER

A journal's reconciliation status is never stored: it is derived from
the journal's import outcome plus the states of its order details.
"""

from __future__ import annotations

from django.db import models

from journals.models import Journal
from orders.models import OrderDetail


class ReconciliationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    FAILED = "failed", "Failed"
    SUCCESSFUL_RECONCILED = "successful_reconciled", "Successful, reconciled"
    SUCCESSFUL_UNRECONCILED = "successful_unreconciled", "Successful, not reconciled"


def is_reconciled(journal: Journal) -> bool:
    # a failed journal has nothing left to reconcile
    if journal.status == Journal.Status.PENDING:
        return False
    if journal.status == Journal.Status.FAILED:
        return True

    return not (
        OrderDetail.objects.filter(journal=journal)
        .exclude(state=OrderDetail.State.RECONCILED)
        .exists()
    )


def status_string(journal: Journal) -> ReconciliationStatus:
    if journal.status == Journal.Status.PENDING:
        return ReconciliationStatus.PENDING
    if journal.status == Journal.Status.FAILED:
        return ReconciliationStatus.FAILED
    if is_reconciled(journal):
        return ReconciliationStatus.SUCCESSFUL_RECONCILED
    return ReconciliationStatus.SUCCESSFUL_UNRECONCILED

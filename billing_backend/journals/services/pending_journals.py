# journals/services/pending_journals.py

"""
PENDING JOURNAL REGISTRY

Which facilities currently have a journal awaiting its import result?

Always computed from committed database state, never cached: a stale
answer would let two pending journals exist for one facility. The
partial unique index on Journal is the real guarantee; this lookup gives
callers an early, readable error.
"""

from __future__ import annotations

from journals.models import Journal, JournalRow


def pending_facility_ids(*, exclude_journal=None) -> set[int]:
    pending = Journal.objects.pending()
    if exclude_journal is not None:
        pending = pending.exclude(pk=exclude_journal.pk)

    via_rows = (
        JournalRow.objects.filter(journal__in=pending, order_detail__isnull=False)
        .order_by()
        .values_list("order_detail__order__facility_id", flat=True)
        .distinct()
    )
    scoped = (
        pending.filter(facility__isnull=False)
        .order_by()
        .values_list("facility_id", flat=True)
    )

    return set(via_rows) | set(scoped)


def has_pending_journal(facility_id) -> bool:
    return facility_id in pending_facility_ids()

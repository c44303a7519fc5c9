# journals/services/fiscal_year.py

"""
======================================================
PATH: journals/services/fiscal_year.py
======================================================
FISCAL YEAR CHECKER

Fiscal years run from September 1st to September 1st (configurable via
settings.FISCAL_YEAR_START_MONTH). A journal should not mix order details
fulfilled in different fiscal years; callers use spans_fiscal_years()
to warn before batching.
"""

from __future__ import annotations

from datetime import date, datetime

from django.conf import settings
from django.utils import timezone

from journals.services.exceptions import EmptySelectionError, UnfulfilledRecordError

DEFAULT_FISCAL_YEAR_START_MONTH = 9


def _start_month() -> int:
    return int(getattr(settings, "FISCAL_YEAR_START_MONTH", DEFAULT_FISCAL_YEAR_START_MONTH))


def _to_date(value: datetime | date) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localdate(value)
        return value.date()
    return value


def fiscal_year_window(day: datetime | date) -> tuple[date, date]:
    """
    Half-open [start, end) fiscal year window containing `day`.
    """
    d = _to_date(day)
    month = _start_month()

    if d.month >= month:
        return date(d.year, month, 1), date(d.year + 1, month, 1)
    return date(d.year - 1, month, 1), date(d.year, month, 1)


def _fulfilled_on(order_detail) -> date:
    if order_detail.fulfilled_at is None:
        raise UnfulfilledRecordError(order_detail)
    return _to_date(order_detail.fulfilled_at)


def spans_fiscal_years(order_details) -> bool:
    """
    True if any order detail was fulfilled outside the fiscal year of the
    first one.

    Raises:
        EmptySelectionError for an empty selection.
        UnfulfilledRecordError if a detail has no fulfilled_at.
    """
    details = list(order_details)
    if not details:
        raise EmptySelectionError("Cannot check fiscal years of an empty selection")

    start_fy, end_fy = fiscal_year_window(_fulfilled_on(details[0]))

    for od in details:
        fulfilled = _fulfilled_on(od)
        if fulfilled < start_fy or fulfilled >= end_fy:
            return True
    return False

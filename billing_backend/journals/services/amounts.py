# journals/services/amounts.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from journals.models import Journal

TWOPLACES = Decimal("0.01")


def journal_amount(journal: Journal) -> Decimal:
    """
    Gross billed total of a journal: the sum of its positive (charge) rows.
    Recharge rows are negative and excluded.
    """
    total = journal.journal_rows.filter(amount__gt=0).aggregate(
        total=Coalesce(Sum("amount"), Decimal("0.00"))
    )["total"]
    return Decimal(total).quantize(TWOPLACES, rounding=ROUND_HALF_UP)

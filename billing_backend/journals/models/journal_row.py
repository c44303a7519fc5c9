# journals/models/journal_row.py

"""
======================================================
PATH: journals/models/journal_row.py
======================================================
JOURNAL ROW MODEL

One ledger line of a journal.

- charge row:   order_detail set, account = funding account, amount = detail total
- recharge row: order_detail empty, account = product revenue account,
                amount = -(sum of the product's charge rows)

Rows are immutable once created and cannot be deleted.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from journals.models.journal import Journal


class JournalRow(models.Model):
    journal = models.ForeignKey(
        Journal,
        on_delete=models.PROTECT,
        related_name="journal_rows",
    )

    order_detail = models.ForeignKey(
        "orders.OrderDetail",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="journal_rows",
    )

    account = models.CharField(max_length=50)

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Signed amount: charges positive, recharges negative",
    )

    description = models.CharField(max_length=512, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "Journal Row"
        verbose_name_plural = "Journal Rows"

    def __str__(self):
        return f"{self.account} {self.amount}"

    @property
    def is_charge(self) -> bool:
        return self.order_detail_id is not None

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalRow records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalRow records cannot be deleted")

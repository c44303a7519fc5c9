# orders/models/order_detail.py

"""
======================================================
PATH: orders/models/order_detail.py
======================================================
ORDER DETAIL MODEL (BILLABLE RECORD)

One billable line of an order: a product, a quantity, the funding
account it is charged to and the amount owed.

Journal guarantees:
- `journal` is set once, by the journal engine, in a bulk update
- once set it can never be changed or cleared through save()
- `state` reaches "reconciled" after the downstream ledger confirms it
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from facilities.models import FundingAccount, Product
from orders.models.order import Order


class OrderDetail(models.Model):
    class State(models.TextChoices):
        NEW = "new", "New"
        INPROCESS = "inprocess", "In Process"
        COMPLETE = "complete", "Complete"
        RECONCILED = "reconciled", "Reconciled"
        CANCELED = "canceled", "Canceled"

    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name="order_details",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="order_details",
    )

    account = models.ForeignKey(
        FundingAccount,
        on_delete=models.PROTECT,
        related_name="order_details",
        help_text="Funding account charged for this detail",
    )

    quantity = models.PositiveIntegerField(default=1)

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Amount owed",
    )

    fulfilled_at = models.DateTimeField(null=True, blank=True)

    state = models.CharField(
        max_length=16,
        choices=State.choices,
        default=State.NEW,
        db_index=True,
    )

    journal = models.ForeignKey(
        "journals.Journal",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="order_details",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name = "Order Detail"
        verbose_name_plural = "Order Details"

    def __str__(self):
        return f"{self.order_id}-{self.pk}"

    @property
    def facility_id(self):
        return self.order.facility_id

    @property
    def is_journaled(self) -> bool:
        return self.journal_id is not None

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = (
                OrderDetail.objects.filter(pk=self.pk).values_list("journal_id", flat=True).first()
            )
            if previous is not None and previous != self.journal_id:
                raise ValidationError(
                    f"Order detail #{self} is already journaled (journal {previous}); "
                    "its journal cannot be changed."
                )

        return super().save(*args, **kwargs)

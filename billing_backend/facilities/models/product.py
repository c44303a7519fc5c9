# facilities/models/product.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from facilities.models.facility import Facility
from facilities.models.facility_account import FacilityAccount


class Product(models.Model):
    """
    A billable product (instrument time, item, service) of a facility.

    The product's revenue account is resolved through its facility account;
    both must belong to the same facility.
    """

    facility = models.ForeignKey(
        Facility,
        on_delete=models.PROTECT,
        related_name="products",
    )

    facility_account = models.ForeignKey(
        FacilityAccount,
        on_delete=models.PROTECT,
        related_name="products",
    )

    name = models.CharField(max_length=200)

    is_archived = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["facility", "name"]
        verbose_name = "Product"
        verbose_name_plural = "Products"

    def __str__(self):
        return self.name

    @property
    def revenue_account(self) -> str:
        return self.facility_account.revenue_account

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError("Product name is required")

        if (
            self.facility_id
            and self.facility_account_id
            and self.facility_account.facility_id != self.facility_id
        ):
            raise ValidationError(
                {"facility_account": "Facility account must belong to the product's facility"}
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

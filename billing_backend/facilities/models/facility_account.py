# facilities/models/facility_account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from facilities.models.facility import Facility


class FacilityAccount(models.Model):
    """
    Revenue account a facility is credited on when its products are billed.

    Recharge rows of a journal post to `revenue_account`.
    """

    facility = models.ForeignKey(
        Facility,
        on_delete=models.PROTECT,
        related_name="facility_accounts",
    )

    revenue_account = models.CharField(max_length=50)
    description = models.CharField(max_length=200, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["facility", "revenue_account"]
        verbose_name = "Facility Account"
        verbose_name_plural = "Facility Accounts"
        constraints = [
            models.UniqueConstraint(
                fields=["facility", "revenue_account"],
                name="uniq_facility_account_revenue_account",
            ),
        ]

    def __str__(self):
        return self.revenue_account

    def clean(self):
        self.revenue_account = (self.revenue_account or "").strip()
        if not self.revenue_account:
            raise ValidationError("Revenue account is required")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

# facilities/models/funding_account.py

"""
======================================================
PATH: facilities/models/funding_account.py
======================================================
FUNDING ACCOUNT MODEL

The account an order detail is charged against (chart string,
purchase order, grant number...).

Open/closed state:
- suspended_at set      -> closed
- expires_at in the past -> closed

Whether an account may actually be charged for a product is decided by
the journal account validator, not by this model.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class FundingAccount(models.Model):
    account_number = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=200, blank=True)

    expires_at = models.DateTimeField(null=True, blank=True)
    suspended_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["account_number"]
        verbose_name = "Funding Account"
        verbose_name_plural = "Funding Accounts"

    def __str__(self):
        if self.description:
            return f"{self.description} ({self.account_number})"
        return self.account_number

    @property
    def is_suspended(self) -> bool:
        return self.suspended_at is not None

    def is_expired(self, at=None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (at or timezone.now())

    def clean(self):
        self.account_number = (self.account_number or "").strip()
        if not self.account_number:
            raise ValidationError("Account number is required")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

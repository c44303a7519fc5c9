# facilities/models/facility.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q


class Facility(models.Model):
    """
    A billing unit (core lab, shop, service center).

    Facilities group products and, transitively, the order details and
    journals billed for them.
    """

    name = models.CharField(max_length=200, unique=True)
    abbreviation = models.CharField(max_length=50, unique=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Facility"
        verbose_name_plural = "Facilities"
        constraints = [
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_facility_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.abbreviation})"

    def clean(self):
        self.name = (self.name or "").strip()
        self.abbreviation = (self.abbreviation or "").strip()

        if not self.name:
            raise ValidationError("Facility name is required")
        if not self.abbreviation:
            raise ValidationError("Facility abbreviation is required")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

# journals/models/journal.py

"""
======================================================
PATH: journals/models/journal.py
======================================================
JOURNAL MODEL

One billing run: a batch of journal rows exported to the general ledger.

Lifecycle:
- created PENDING (rows + order detail stamping happen in the same transaction)
- moved once to SUCCEEDED or FAILED by the downstream import result
- never moved back, never deleted

Guarantees:
- At most one PENDING journal per facility (partial unique index)
- reference + updated_by are required once the journal leaves PENDING
- created_by is always required
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from facilities.models import Facility

User = settings.AUTH_USER_MODEL


def journal_file_path(instance: "Journal", filename: str) -> str:
    """
    journals/<facility-<id>|multi>/000/000/012/original/<filename>
    """
    scope = f"facility-{instance.facility_id}" if instance.facility_id else "multi"
    partition = f"{instance.pk or 0:09d}"
    return "/".join(
        [
            "journals",
            scope,
            partition[0:3],
            partition[3:6],
            partition[6:9],
            "original",
            filename,
        ]
    )


class JournalQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=Journal.Status.PENDING)

    def for_facilities(self, facilities, include_multi: bool = False):
        """
        Journals pertaining to the given facilities (usually the ones a
        user has access to).

        include_multi also returns journals whose rows bill order details
        of those facilities, including multi-facility journals.
        """
        allowed_ids = [f.pk for f in facilities]

        if include_multi:
            return self.filter(
                Q(facility_id__in=allowed_ids)
                | Q(journal_rows__order_detail__order__facility_id__in=allowed_ids)
            ).distinct()

        return self.filter(facility_id__in=allowed_ids)


class Journal(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        SUCCEEDED = "succeeded", "Succeeded"
        FAILED = "failed", "Failed"

    facility = models.ForeignKey(
        Facility,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="journals",
        help_text="Empty for multi-facility journals",
    )

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    reference = models.CharField(
        max_length=100,
        blank=True,
        help_text="General ledger reference reported by the downstream import",
    )

    created_by = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="created_journals",
    )

    updated_by = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="updated_journals",
    )

    file = models.FileField(
        upload_to=journal_file_path,
        max_length=255,
        null=True,
        blank=True,
        help_text="Exported journal spreadsheet",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = JournalQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["facility"],
                condition=Q(status="pending") & Q(facility__isnull=False),
                name="uniq_pending_journal_per_facility",
            )
        ]
        verbose_name = "Journal"
        verbose_name_plural = "Journals"

    def __str__(self):
        return str(self.pk)

    @property
    def is_open(self) -> bool:
        return self.status == self.Status.PENDING

    @property
    def is_successful(self) -> bool | None:
        if self.status == self.Status.PENDING:
            return None
        return self.status == self.Status.SUCCEEDED

    def facility_ids(self) -> list[int]:
        if self.facility_id:
            return [self.facility_id]

        return list(
            self.order_details.order_by()
            .values_list("order__facility_id", flat=True)
            .distinct()
        )

    def clean(self):
        self.reference = (self.reference or "").strip()

        if self.status != self.Status.PENDING:
            errors = {}
            if not self.reference:
                errors["reference"] = "reference is required once the journal is closed"
            if not self.updated_by_id:
                errors["updated_by"] = "updated_by is required once the journal is closed"
            if errors:
                raise ValidationError(errors)

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = (
                Journal.objects.filter(pk=self.pk).values_list("status", flat=True).first()
            )
            if (
                previous is not None
                and previous != self.Status.PENDING
                and previous != self.status
            ):
                raise ValidationError(
                    f"Journal #{self.pk} is already {previous}; its outcome cannot change"
                )

        # pending-per-facility uniqueness is enforced by the database
        self.full_clean(validate_constraints=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Journal records cannot be deleted")

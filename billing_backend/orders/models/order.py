# orders/models/order.py

from django.conf import settings
from django.db import models
from django.utils import timezone

from facilities.models import Facility

User = settings.AUTH_USER_MODEL


class Order(models.Model):
    """
    A request placed with a facility by a user.

    Billing happens per OrderDetail; the order carries the facility and
    the requester shared by its details.
    """

    facility = models.ForeignKey(
        Facility,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    user = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        related_name="facility_orders",
        help_text="Requester the order is placed for",
    )

    ordered_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-ordered_at"]

    def __str__(self):
        return str(self.pk)

# journals/api/serializers/create_journal.py

"""
CREATE JOURNAL SERIALIZER

Rules:
- order_details is required and non-empty (ids, in batch order)
- facility is optional; empty -> multi-facility journal
- with a facility, every order detail must belong to it
"""

from rest_framework import serializers

from facilities.models import Facility
from orders.models import OrderDetail


def _order_detail_queryset():
    return OrderDetail.objects.select_related(
        "order__user",
        "order__facility",
        "product__facility_account",
        "account",
    )


class OrderDetailSelectionSerializer(serializers.Serializer):
    order_details = serializers.PrimaryKeyRelatedField(
        many=True,
        queryset=_order_detail_queryset(),
        allow_empty=False,
    )


class CreateJournalSerializer(OrderDetailSelectionSerializer):
    facility = serializers.PrimaryKeyRelatedField(
        queryset=Facility.objects.filter(is_active=True),
        required=False,
        allow_null=True,
    )

    def validate(self, attrs):
        facility = attrs.get("facility")
        if facility is None:
            return attrs

        foreign = [
            str(od) for od in attrs["order_details"] if od.order.facility_id != facility.pk
        ]
        if foreign:
            raise serializers.ValidationError(
                {
                    "order_details": (
                        f"Order details {', '.join(foreign)} do not belong to facility {facility}"
                    )
                }
            )
        return attrs

# journals/api/serializers/journals.py

from rest_framework import serializers

from journals.models import Journal, JournalRow
from journals.services.amounts import journal_amount
from journals.services.reconciliation import status_string


class JournalRowSerializer(serializers.ModelSerializer):
    class Meta:
        model = JournalRow
        fields = ("id", "order_detail", "account", "amount", "description", "created_at")
        read_only_fields = fields


class JournalSerializer(serializers.ModelSerializer):
    status_string = serializers.SerializerMethodField()
    status_label = serializers.SerializerMethodField()
    amount = serializers.SerializerMethodField()
    facility_ids = serializers.SerializerMethodField()
    journal_rows = JournalRowSerializer(many=True, read_only=True)

    class Meta:
        model = Journal
        fields = (
            "id",
            "facility",
            "facility_ids",
            "status",
            "status_string",
            "status_label",
            "reference",
            "created_by",
            "updated_by",
            "file",
            "amount",
            "journal_rows",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_status_string(self, obj) -> str:
        return status_string(obj).value

    def get_status_label(self, obj) -> str:
        return status_string(obj).label

    def get_amount(self, obj) -> str:
        return str(journal_amount(obj))

    def get_facility_ids(self, obj) -> list[int]:
        return obj.facility_ids()

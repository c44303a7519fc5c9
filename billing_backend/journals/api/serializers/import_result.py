# journals/api/serializers/import_result.py

from rest_framework import serializers


class ImportResultSerializer(serializers.Serializer):
    succeeded = serializers.BooleanField()
    reference = serializers.CharField(max_length=100)

    def validate_reference(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("reference is required")
        return value

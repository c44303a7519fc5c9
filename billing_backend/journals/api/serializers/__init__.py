# journals/api/serializers/__init__.py

from journals.api.serializers.create_journal import (
    CreateJournalSerializer,
    OrderDetailSelectionSerializer,
)
from journals.api.serializers.import_result import ImportResultSerializer
from journals.api.serializers.journals import JournalRowSerializer, JournalSerializer

__all__ = [
    "JournalSerializer",
    "JournalRowSerializer",
    "CreateJournalSerializer",
    "OrderDetailSelectionSerializer",
    "ImportResultSerializer",
]

# journals/models/__init__.py

"""
JOURNALS MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from journals.models.journal import Journal
from journals.models.journal_row import JournalRow

__all__ = [
    "Journal",
    "JournalRow",
]

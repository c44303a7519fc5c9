# journals/api/views/__init__.py

"""
journals.api.views package

- The ViewSet lives in journals.api.view (singular).
- Do NOT import journals.api.urls from here to avoid circular imports.
"""

from journals.api.view import JournalViewSet
from journals.api.views.create_journal import CreateJournalView
from journals.api.views.fiscal_year import FiscalYearCheckView
from journals.api.views.import_result import JournalImportResultView
from journals.api.views.spreadsheet import JournalSpreadsheetView

__all__ = [
    "JournalViewSet",
    "CreateJournalView",
    "JournalImportResultView",
    "JournalSpreadsheetView",
    "FiscalYearCheckView",
]

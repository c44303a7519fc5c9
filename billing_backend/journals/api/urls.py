# journals/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from journals.api.view import JournalViewSet
from journals.api.views.create_journal import CreateJournalView
from journals.api.views.fiscal_year import FiscalYearCheckView
from journals.api.views.import_result import JournalImportResultView
from journals.api.views.spreadsheet import JournalSpreadsheetView

router = DefaultRouter()
router.register("journals", JournalViewSet, basename="journal")

urlpatterns = [
    path("", include(router.urls)),
    path("create/", CreateJournalView.as_view(), name="journal-create"),
    path(
        "journals/<int:pk>/result/",
        JournalImportResultView.as_view(),
        name="journal-result",
    ),
    path(
        "journals/<int:pk>/spreadsheet/",
        JournalSpreadsheetView.as_view(),
        name="journal-spreadsheet",
    ),
    path(
        "fiscal-year-check/",
        FiscalYearCheckView.as_view(),
        name="journal-fiscal-year-check",
    ),
]

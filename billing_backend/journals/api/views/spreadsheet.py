# PATH: journals/api/views/spreadsheet.py

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from journals.models import Journal
from journals.services.spreadsheet_export import create_spreadsheet


class JournalSpreadsheetView(APIView):
    """
    Export the journal rows and attach the spreadsheet to the journal.
    `exported` is false when there is nothing to export.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["journals"], request=None, responses={200: dict, 403: dict})
    def post(self, request, pk, *args, **kwargs):
        if not request.user.has_perm("journals.change_journal"):
            return Response(
                {"detail": "You do not have permission to export journals."},
                status=status.HTTP_403_FORBIDDEN,
            )

        journal = get_object_or_404(Journal, pk=pk)
        exported = create_spreadsheet(journal)

        return Response(
            {
                "exported": exported,
                "file": journal.file.url if exported and journal.file else None,
            }
        )

# PATH: journals/api/views/import_result.py

"""
JOURNAL IMPORT RESULT API

Records the general ledger's accept/reject for a pending journal.
Requires journals.change_journal.
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from journals.api.serializers import ImportResultSerializer, JournalSerializer
from journals.api.views._errors import journal_error_response
from journals.models import Journal
from journals.services.exceptions import JournalError
from journals.services.journal_service import record_import_result


class JournalImportResultView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = ImportResultSerializer

    @extend_schema(
        tags=["journals"],
        request=ImportResultSerializer,
        responses={200: JournalSerializer, 400: dict, 403: dict},
    )
    def post(self, request, pk, *args, **kwargs):
        if not request.user.has_perm("journals.change_journal"):
            return Response(
                {"detail": "You do not have permission to close journals."},
                status=status.HTTP_403_FORBIDDEN,
            )

        journal = get_object_or_404(Journal, pk=pk)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            journal = record_import_result(
                journal,
                succeeded=data["succeeded"],
                reference=data["reference"],
                updated_by=request.user,
            )
        except JournalError as exc:
            return journal_error_response(exc)

        return Response(JournalSerializer(journal).data)

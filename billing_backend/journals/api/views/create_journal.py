# PATH: journals/api/views/create_journal.py

"""
CREATE JOURNAL API

Batches the selected order details into a new pending journal.

Security:
- Authenticated
- Requires journals.add_journal
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from journals.api.serializers import CreateJournalSerializer, JournalSerializer
from journals.api.views._errors import journal_error_response
from journals.services.exceptions import JournalError
from journals.services.journal_service import create_journal

CREATE_JOURNAL_PERMISSION = "journals.add_journal"


class CreateJournalView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CreateJournalSerializer

    @extend_schema(
        tags=["journals"],
        request=CreateJournalSerializer,
        responses={201: JournalSerializer, 400: dict, 403: dict, 409: dict},
    )
    def post(self, request, *args, **kwargs):
        if not request.user.has_perm(CREATE_JOURNAL_PERMISSION):
            return Response(
                {"detail": "You do not have permission to create journals."},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            journal = create_journal(
                order_details=data["order_details"],
                facility=data.get("facility"),
                created_by=request.user,
            )
        except JournalError as exc:
            return journal_error_response(exc)

        return Response(JournalSerializer(journal).data, status=status.HTTP_201_CREATED)

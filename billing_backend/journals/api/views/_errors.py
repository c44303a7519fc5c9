# journals/api/views/_errors.py

from rest_framework import status
from rest_framework.response import Response

from journals.services.exceptions import FacilityHasPendingJournalError, JournalError


def journal_error_response(exc: JournalError) -> Response:
    code = (
        status.HTTP_409_CONFLICT
        if isinstance(exc, FacilityHasPendingJournalError)
        else status.HTTP_400_BAD_REQUEST
    )
    return Response({"detail": str(exc), "error": type(exc).__name__}, status=code)

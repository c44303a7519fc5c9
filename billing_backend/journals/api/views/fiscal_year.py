# PATH: journals/api/views/fiscal_year.py

from drf_spectacular.utils import extend_schema
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from journals.api.serializers import OrderDetailSelectionSerializer
from journals.api.views._errors import journal_error_response
from journals.services.exceptions import JournalError
from journals.services.fiscal_year import spans_fiscal_years


class FiscalYearCheckView(GenericAPIView):
    """
    Tells whether a selection of order details crosses a fiscal year boundary.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = OrderDetailSelectionSerializer

    @extend_schema(
        tags=["journals"],
        request=OrderDetailSelectionSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            spans = spans_fiscal_years(serializer.validated_data["order_details"])
        except JournalError as exc:
            return journal_error_response(exc)

        return Response({"spans_fiscal_years": spans})

# PATH: journals/api/view.py

"""
JOURNAL API VIEWSET (READ-ONLY)

- List/retrieve requires journals.view_journal
- Filtering (django-filter): ?facility=<id>&status=pending|succeeded|failed
- ?include_multi=1 together with ?facilities=1,2 returns every journal
  touching those facilities, multi-facility journals included
"""

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet

from facilities.models import Facility
from journals.api.serializers import JournalSerializer
from journals.models import Journal


@extend_schema(
    tags=["journals"],
    parameters=[
        OpenApiParameter(
            name="facilities",
            type=str,
            required=False,
            description="Comma separated facility ids (e.g. 1,2).",
        ),
        OpenApiParameter(
            name="include_multi",
            type=bool,
            required=False,
            description="Include multi-facility journals billing those facilities.",
        ),
    ],
)
class JournalViewSet(ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = JournalSerializer
    http_method_names = ["get", "head", "options"]

    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["facility", "status"]

    queryset = Journal.objects.select_related("facility").prefetch_related("journal_rows")

    def get_queryset(self):
        if not self.request.user.has_perm("journals.view_journal"):
            raise PermissionDenied("You do not have permission to view journals.")

        qs = super().get_queryset()

        raw = (self.request.query_params.get("facilities") or "").strip()
        if raw:
            ids = []
            for part in raw.split(","):
                try:
                    ids.append(int(part))
                except ValueError:
                    continue
            include_multi = self.request.query_params.get("include_multi") in ("1", "true", "True")
            qs = qs.for_facilities(Facility.objects.filter(pk__in=ids), include_multi=include_multi)

        return qs.order_by("-created_at")

# herd/api/views.py

"""
======================================================
PATH: herd/api/views.py
======================================================
HERD API

GET  /api/herd/cows/                            list (filter: status, method)
POST /api/herd/cows/                            register + acquisition entry
GET  /api/herd/cows/<id>/
POST /api/herd/cows/<id>/reconcile/             {as_of?}  (default: today)
POST /api/herd/cows/<id>/dispose/               {disposition_date, disposition_type,
                                                 sale_amount?, notes?}
GET  /api/herd/cows/<id>/depreciation-summary/  per fiscal year
GET  /api/herd/cows/<id>/depreciation-records/  monthly rows

This is the clock boundary: "today" is read here and passed down.
"""

from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.services.exceptions import AccountingServiceError
from herd.api.errors import service_error_response
from herd.api.serializers import (
    CowCreateSerializer,
    CowSerializer,
    DepreciationSummarySerializer,
    DispositionCommandSerializer,
    DispositionResultSerializer,
    MonthlyDepreciationSerializer,
    ReconcileCommandSerializer,
    ReconcileResultSerializer,
)
from herd.models import Cow
from herd.services.acquisition import register_cow
from herd.services.engine import dispose_asset, reconcile_asset
from herd.services import reports

ERROR_RESPONSES = {
    400: OpenApiResponse(description="Invalid input"),
    404: OpenApiResponse(description="Cow not found"),
    409: OpenApiResponse(description="Cow already disposed"),
    422: OpenApiResponse(description="Calculation precondition failed"),
    503: OpenApiResponse(description="Ledger store unavailable, safe to retry"),
}


@extend_schema(tags=["herd"])
class CowViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated]
    queryset = Cow.objects.select_related("disposition").order_by("tag_number")
    filterset_fields = ["status", "depreciation_method", "acquisition_type"]

    def get_serializer_class(self):
        if self.action == "create":
            return CowCreateSerializer
        if self.action == "reconcile":
            return ReconcileCommandSerializer
        if self.action == "dispose":
            return DispositionCommandSerializer
        return CowSerializer

    @extend_schema(
        request=CowCreateSerializer,
        responses={201: CowSerializer, **ERROR_RESPONSES},
    )
    def create(self, request, *args, **kwargs):
        s = CowCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            cow = register_cow(**s.validated_data, as_of=timezone.localdate())
        except AccountingServiceError as exc:
            return service_error_response(exc)

        return Response(CowSerializer(cow).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ReconcileCommandSerializer,
        responses={200: ReconcileResultSerializer, **ERROR_RESPONSES},
    )
    @action(detail=True, methods=["post"], url_path="reconcile")
    def reconcile(self, request, pk=None):
        cow = self.get_object()
        s = ReconcileCommandSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        as_of = s.validated_data.get("as_of") or timezone.localdate()

        try:
            result = reconcile_asset(cow.id, as_of)
        except AccountingServiceError as exc:
            return service_error_response(exc)

        return Response(ReconcileResultSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=DispositionCommandSerializer,
        responses={201: DispositionResultSerializer, **ERROR_RESPONSES},
    )
    @action(detail=True, methods=["post"], url_path="dispose")
    def dispose(self, request, pk=None):
        cow = self.get_object()
        s = DispositionCommandSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            result = dispose_asset(
                cow.id,
                data["disposition_date"],
                data["disposition_type"],
                data.get("sale_amount"),
                data.get("notes"),
                as_of=timezone.localdate(),
            )
        except AccountingServiceError as exc:
            return service_error_response(exc)

        return Response(
            DispositionResultSerializer(result).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: DepreciationSummarySerializer})
    @action(detail=True, methods=["get"], url_path="depreciation-summary")
    def depreciation_summary(self, request, pk=None):
        cow = self.get_object()
        summary = reports.depreciation_summary(cow)
        return Response(DepreciationSummarySerializer(summary).data)

    @extend_schema(responses={200: MonthlyDepreciationSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="depreciation-records")
    def depreciation_records(self, request, pk=None):
        cow = self.get_object()
        rows = cow.monthly_depreciations.order_by("year", "month")
        return Response(MonthlyDepreciationSerializer(rows, many=True).data)

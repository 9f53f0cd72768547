# accounting/api/views/transactions.py

"""
TRANSACTIONS API

GET    /api/accounting/transactions/           accounting.view
GET    /api/accounting/transactions/summary/   accounting.view
POST   /api/accounting/transactions/           accounting.post
PATCH  /api/accounting/transactions/<id>/      accounting.post   (pending only)
DELETE /api/accounting/transactions/<id>/      accounting.delete (pending only)

Filters: type, category, status, payment_method, date_from, date_to
"""

from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.serializers import TransactionSerializer, TransactionSummarySerializer
from accounting.models import Transaction
from accounting.services.exceptions import TransactionLockedError
from accounting.services.report_service import summarize
from accounting.services.transaction_service import (
    delete_transaction,
    record_transaction,
    update_transaction,
)
from permissions.roles import (
    CAP_ACCOUNTING_DELETE,
    CAP_ACCOUNTING_POST,
    CAP_ACCOUNTING_VIEW,
    HasCapability,
)


def _date_param(request, name):
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None
    value = parse_date(raw)
    if value is None:
        raise ValidationError({name: "Invalid date format. Use YYYY-MM-DD."})
    return value


class TransactionViewSet(viewsets.ModelViewSet):
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["type", "category", "status", "payment_method"]

    required_capability = None

    def get_permissions(self):
        self.required_capability = CAP_ACCOUNTING_VIEW

        if self.action in {"create", "update", "partial_update"}:
            self.required_capability = CAP_ACCOUNTING_POST
        elif self.action == "destroy":
            self.required_capability = CAP_ACCOUNTING_DELETE

        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        qs = Transaction.objects.select_related("created_by").order_by("-date", "-created_at")

        date_from = _date_param(self.request, "date_from")
        date_to = _date_param(self.request, "date_to")
        if date_from:
            qs = qs.filter(date__gte=date_from)
        if date_to:
            qs = qs.filter(date__lte=date_to)

        return qs

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        data.pop("created_by", None)
        serializer.instance = record_transaction(actor=self.request.user, **data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            txn = update_transaction(txn=instance, changes=serializer.validated_data)
        except TransactionLockedError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(txn).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_transaction(txn=self.get_object())
        except TransactionLockedError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[
            OpenApiParameter("date_from", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("date_to", str, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: TransactionSummarySerializer},
    )
    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        """Income / expense / profit over COMPLETED transactions in the filtered set."""
        qs = self.filter_queryset(self.get_queryset()).filter(status=Transaction.Status.COMPLETED)
        return Response(TransactionSummarySerializer(summarize(qs)).data)

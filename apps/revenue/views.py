"""API views for the revenue ledger."""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db.models import Count, F, Sum  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import DailyRevenueFilterSet
from .models import DailyRevenue
from .serializers import DailyRevenueSerializer, DailyRevenueUpdateSerializer, DeleteReasonSerializer

logger = logging.getLogger(__name__)


class CanChangeRevenueEntry(permissions.BasePermission):
    """Owners and admins may change an entry; non-admins only on its own day."""

    message = "Only the owner can change this entry, and only on the day it was recorded."

    def has_object_permission(self, request, view, obj: DailyRevenue) -> bool:  # type: ignore
        user = request.user
        if hasattr(user, "is_admin_role") and user.is_admin_role():
            return True
        if obj.staff_id != user.id:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.is_from_today()


class DailyRevenueViewSet(viewsets.ModelViewSet):
    """Daily takings.

    Admins see every entry and may filter by staff and branch. Everyone
    else sees their own entries in their current branch.
    """

    queryset = DailyRevenue.objects.select_related("staff", "branch")
    permission_classes = [permissions.IsAuthenticated, CanChangeRevenueEntry]
    filter_backends = [DjangoFilterBackend]
    filterset_class = DailyRevenueFilterSet
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "partial_update":
            return DailyRevenueUpdateSerializer
        return DailyRevenueSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset().live().order_by("-date")
        user = self.request.user
        if hasattr(user, "is_admin_role") and user.is_admin_role():
            return qs
        qs = qs.filter(staff=user)
        if user.branch_id is not None:
            qs = qs.filter(branch_id=user.branch_id)
        return qs

    def perform_create(self, serializer):  # type: ignore
        user = self.request.user
        if user.branch_id is None:
            raise ValidationError({"detail": "Branch context required."})
        entry = serializer.save(staff=user, branch_id=user.branch_id)
        logger.info(
            "Revenue entry %s recorded by %s at branch %s (total=%s)",
            entry.pk,
            user.pk,
            entry.branch_id,
            entry.total_amount,
        )

    def destroy(self, request, *args, **kwargs):  # type: ignore
        entry = self.get_object()
        serializer = DeleteReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry.soft_delete(request.user, serializer.validated_data["reason"])
        logger.info("Revenue entry %s deleted by %s", entry.pk, request.user.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def summary(self, request):  # type: ignore
        """Totals over the entries the list would return."""
        totals = self.filter_queryset(self.get_queryset()).aggregate(
            entries=Count("id"),
            customers_served=Sum("customers_served"),
            cash=Sum("cash_amount"),
            bank=Sum("bank_amount"),
            card=Sum("card_amount"),
            total=Sum(F("cash_amount") + F("bank_amount") + F("card_amount")),
        )
        zero = Decimal("0.00")
        return Response(
            {
                "entries": totals["entries"],
                "customers_served": totals["customers_served"] or 0,
                "cash": totals["cash"] or zero,
                "bank": totals["bank"] or zero,
                "card": totals["card"] or zero,
                "total": totals["total"] or zero,
            }
        )

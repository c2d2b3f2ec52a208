"""Serializers for the revenue ledger."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import DailyRevenue


class DailyRevenueSerializer(serializers.ModelSerializer):
    staff_name = serializers.ReadOnlyField(source="staff.name")
    branch_name = serializers.ReadOnlyField(source="branch.name")
    total_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)
    cash_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))
    bank_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))
    card_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))

    class Meta:
        model = DailyRevenue
        fields = [
            "id",
            "date",
            "staff",
            "staff_name",
            "branch",
            "branch_name",
            "customers_served",
            "cash_amount",
            "bank_amount",
            "card_amount",
            "total_amount",
            "created_at",
        ]
        read_only_fields = ["id", "staff", "branch", "created_at"]
        extra_kwargs = {"date": {"required": False}}


class DailyRevenueUpdateSerializer(DailyRevenueSerializer):
    """Amounts and headcount only; the day and owner are fixed."""

    class Meta(DailyRevenueSerializer.Meta):
        read_only_fields = DailyRevenueSerializer.Meta.read_only_fields + ["date"]


class DeleteReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, trim_whitespace=True)

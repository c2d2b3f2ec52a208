"""Serializers for branches, rooms and branch pricing."""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.services.models import Service

from .models import Branch, BranchService, Room

User = get_user_model()


class ManagerShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email"]


class BranchSerializer(serializers.ModelSerializer):
    manager = ManagerShortSerializer(read_only=True)
    manager_id = serializers.PrimaryKeyRelatedField(
        source="manager",
        queryset=User.objects.all(),
        allow_null=True,
        required=False,
        write_only=True,
    )

    class Meta:
        model = Branch
        fields = ["id", "name", "address", "phone", "manager", "manager_id", "created_at"]
        read_only_fields = ["id", "manager", "created_at"]


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "branch", "name", "is_active"]
        read_only_fields = ["id", "branch"]


class BranchServiceUpsertSerializer(serializers.Serializer):
    service_id = serializers.PrimaryKeyRelatedField(source="service", queryset=Service.objects.all())
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    is_active = serializers.BooleanField()


class BranchServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = BranchService
        fields = ["id", "branch", "service", "price", "is_active"]


def merge_branch_catalog(branch: Branch) -> list[dict]:
    """Master catalogue overlaid with the branch's own price/active settings.

    Services the branch never configured report the base price and are
    inactive (opt-in).
    """
    settings_by_service = {bs.service_id: bs for bs in branch.branch_services.all()}
    merged = []
    for service in Service.objects.order_by("name"):
        branch_setting = settings_by_service.get(service.id)
        merged.append(
            {
                "id": service.id,
                "name": service.name,
                "duration": service.duration,
                "base_price": service.base_price,
                "current_price": branch_setting.price if branch_setting else service.base_price,
                "is_active": branch_setting.is_active if branch_setting else False,
                "branch_service_id": branch_setting.id if branch_setting else None,
            }
        )
    return merged

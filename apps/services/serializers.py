"""Serializers for the service catalogue."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Service, ServiceItem


class ServiceShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "name", "duration", "base_price"]


class ComboItemSerializer(serializers.ModelSerializer):
    service = ServiceShortSerializer(read_only=True)

    class Meta:
        model = ServiceItem
        fields = ["id", "service"]


class ServiceSerializer(serializers.ModelSerializer):
    """Create/update a service; combos carry the ids of their members in `items`."""

    items = serializers.ListField(
        child=serializers.IntegerField(),
        write_only=True,
        required=False,
    )
    combo_items = ComboItemSerializer(many=True, read_only=True)

    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "description",
            "duration",
            "base_price",
            "type",
            "is_active",
            "items",
            "combo_items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "is_active", "combo_items", "created_at", "updated_at"]

    def validate_items(self, value):  # type: ignore
        found = set(Service.objects.filter(id__in=value).values_list("id", flat=True))
        missing = [pk for pk in value if pk not in found]
        if missing:
            raise serializers.ValidationError(f"Unknown service ids: {missing}")
        return value

    def validate(self, attrs):  # type: ignore
        service_type = attrs.get("type", getattr(self.instance, "type", Service.Type.SINGLE))
        items = attrs.get("items")
        if self.instance is None and service_type == Service.Type.COMBO and not items:
            raise serializers.ValidationError(
                {"items": "Combo services must include at least one service item."}
            )
        return attrs

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        items = validated_data.pop("items", None) or []
        service = Service.objects.create(**validated_data)
        if service.is_combo:
            ServiceItem.objects.bulk_create(
                [ServiceItem(combo=service, service_id=pk) for pk in items]
            )
        return service

    @transaction.atomic
    def update(self, instance, validated_data):  # type: ignore
        items = validated_data.pop("items", None)
        service = super().update(instance, validated_data)
        # A provided list replaces the combo contents wholesale
        if service.is_combo and items is not None:
            service.combo_items.all().delete()
            ServiceItem.objects.bulk_create(
                [ServiceItem(combo=service, service_id=pk) for pk in items]
            )
        return service


class BulkActionSerializer(serializers.Serializer):
    class Action:
        DELETE = "DELETE"
        RECOVER = "RECOVER"

    ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)
    action = serializers.ChoiceField(choices=[Action.DELETE, Action.RECOVER])

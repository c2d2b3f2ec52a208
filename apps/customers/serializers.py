"""Serializers for customers."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Customer
from .services import normalize_phone

MIN_PHONE_LENGTH = 10


def validate_phone_number(value: str) -> str:
    """Normalized phone, or a field error when it is too short."""
    phone = normalize_phone(value)
    if len(phone) < MIN_PHONE_LENGTH:
        raise serializers.ValidationError(f"Phone number must be at least {MIN_PHONE_LENGTH} digits.")
    return phone


class CustomerSerializer(serializers.ModelSerializer):
    # Declared explicitly so duplicates reach the view, which answers 409.
    phone = serializers.CharField(max_length=30)

    class Meta:
        model = Customer
        fields = ["id", "name", "phone", "email", "notes", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "email": {"required": False, "allow_blank": True},
            "notes": {"required": False, "allow_blank": True},
            "is_active": {"required": False},
        }

    def validate_phone(self, value):  # type: ignore
        return validate_phone_number(value)


class CustomerCreateSerializer(CustomerSerializer):
    """Registration form with an optional walk-in booking.

    When ``service_id`` and ``branch_id`` are both given, a CONFIRMED
    booking for that service starting now is created with the customer.
    """

    service_id = serializers.IntegerField(required=False, allow_null=True, write_only=True)
    branch_id = serializers.IntegerField(required=False, allow_null=True, write_only=True)

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ["service_id", "branch_id"]
        read_only_fields = CustomerSerializer.Meta.read_only_fields + ["is_active"]

    def validate(self, attrs):  # type: ignore
        if attrs.get("service_id") and not attrs.get("branch_id"):
            raise serializers.ValidationError({"branch_id": "Required for a walk-in booking."})
        return attrs

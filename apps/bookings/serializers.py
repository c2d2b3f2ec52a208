"""Serializers for the booking domain.

Write serializers only validate the shape of the request and hand the
booking engine plain values; availability and duration rules live in
``apps.bookings.services``.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.branches.models import Room
from apps.customers.models import Customer
from apps.customers.serializers import validate_phone_number

from .models import Booking, BookingItem
from .services import UNSET, BookingChanges, NewCustomer

User = get_user_model()


class NewCustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=30)

    def validate_phone(self, value):  # type: ignore
        return validate_phone_number(value)


class _BookingWriteSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    new_customer = NewCustomerSerializer(required=False, allow_null=True)
    service_ids = serializers.ListField(child=serializers.IntegerField(min_value=1))
    # Related fields turn "" into None, so an empty select means "unassigned".
    therapist_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True),
        required=False,
        allow_null=True,
    )
    room_id = serializers.PrimaryKeyRelatedField(
        queryset=Room.objects.all(),
        required=False,
        allow_null=True,
    )
    start_time = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_service_ids(self, value):  # type: ignore
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Each service can only be booked once.")
        return value

    @staticmethod
    def _customer_ref(attrs):
        new_customer = attrs.get("new_customer")
        if new_customer:
            return NewCustomer(name=new_customer["name"], phone=new_customer["phone"])
        return attrs.get("customer_id")

    @staticmethod
    def _pk(instance):
        return instance.pk if instance is not None else None


class BookingCreateSerializer(_BookingWriteSerializer):
    """Payload for creating a booking."""

    status = serializers.ChoiceField(
        choices=[Booking.Status.PENDING, Booking.Status.CONFIRMED],
        default=Booking.Status.PENDING,
    )
    branch_id = serializers.IntegerField(required=False, allow_null=True)

    def to_engine_kwargs(self) -> dict:
        attrs = self.validated_data
        return {
            "customer": self._customer_ref(attrs),
            "service_ids": attrs["service_ids"],
            "start_time": attrs["start_time"],
            "branch_id": attrs.get("branch_id"),
            "therapist_id": self._pk(attrs.get("therapist_id")),
            "room_id": self._pk(attrs.get("room_id")),
            "notes": attrs.get("notes") or "",
            "status": attrs["status"],
        }


class BookingUpdateSerializer(_BookingWriteSerializer):
    """Used with partial=True; only the keys present in the request are applied."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)

    def to_changes(self) -> BookingChanges:
        attrs = self.validated_data
        changes = BookingChanges()
        if attrs.get("new_customer") or attrs.get("customer_id") is not None:
            changes.customer = self._customer_ref(attrs)
        if "service_ids" in attrs:
            changes.service_ids = attrs["service_ids"]
        if "therapist_id" in attrs:
            changes.therapist_id = self._pk(attrs["therapist_id"])
        if "room_id" in attrs:
            changes.room_id = self._pk(attrs["room_id"])
        for field in ("start_time", "status", "notes"):
            setattr(changes, field, attrs.get(field, UNSET))
        return changes


class BookingCustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "phone"]


class BookingItemSerializer(serializers.ModelSerializer):
    service_name = serializers.ReadOnlyField(source="service.name")
    duration = serializers.ReadOnlyField(source="service.duration")

    class Meta:
        model = BookingItem
        fields = ["id", "service", "service_name", "duration"]


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking."""

    customer = BookingCustomerSerializer(read_only=True)
    items = BookingItemSerializer(many=True, read_only=True)
    therapist_name = serializers.ReadOnlyField(source="therapist.name")
    room_name = serializers.ReadOnlyField(source="room.name")
    duration_minutes = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "branch",
            "customer",
            "therapist",
            "therapist_name",
            "room",
            "room_name",
            "start_time",
            "end_time",
            "duration_minutes",
            "status",
            "notes",
            "items",
            "created_by",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_duration_minutes(self, obj: Booking) -> int:
        return obj.time_range.duration_minutes

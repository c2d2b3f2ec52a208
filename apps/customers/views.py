"""API views for customers."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import create_booking
from apps.bookings.views import BookingErrorMixin
from apps.users.context import CallerContext

from .models import Customer
from .serializers import CustomerCreateSerializer, CustomerSerializer

logger = logging.getLogger(__name__)

DUPLICATE_PHONE = {"detail": "Phone number already registered.", "code": "duplicate_phone"}


class CustomerViewSet(
    BookingErrorMixin,
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Customer records. Anyone signed in may register and edit customers;
    only admins may deactivate or reactivate them."""

    queryset = Customer.objects.all().order_by("-created_at")
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return CustomerCreateSerializer
        return CustomerSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list" and self.request.query_params.get("show_inactive") != "true":
            qs = qs.active()
        search = self.request.query_params.get("search")
        if self.action == "list" and search:
            qs = qs.filter(Q(name__icontains=search) | Q(phone__icontains=search))
        return qs

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        service_id = data.pop("service_id", None)
        branch_id = data.pop("branch_id", None)

        if Customer.objects.filter(phone=data["phone"]).exists():
            return Response(DUPLICATE_PHONE, status=status.HTTP_409_CONFLICT)

        try:
            with transaction.atomic():
                customer = Customer.objects.create(**data)
                if service_id:
                    booking = create_booking(
                        CallerContext.from_user(request.user),
                        customer=customer.pk,
                        service_ids=[service_id],
                        start_time=timezone.now(),
                        branch_id=branch_id,
                        status=Booking.Status.CONFIRMED,
                    )
                    logger.info("Walk-in booking %s for customer %s", booking.pk, customer.pk)
        except IntegrityError:
            return Response(DUPLICATE_PHONE, status=status.HTTP_409_CONFLICT)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        if "is_active" in request.data and not request.user.is_admin_role():
            return Response(
                {"detail": "Only admins can change active status."},
                status=status.HTTP_403_FORBIDDEN,
            )
        customer = self.get_object()
        serializer = self.get_serializer(customer, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        phone = serializer.validated_data.get("phone")
        if phone and Customer.objects.filter(phone=phone).exclude(pk=customer.pk).exists():
            return Response(DUPLICATE_PHONE, status=status.HTTP_409_CONFLICT)
        serializer.save()
        return Response(serializer.data)

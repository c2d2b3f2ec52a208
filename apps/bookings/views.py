"""API views for the booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.context import CallerContext

from .exceptions import BookingError
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer
from .services import cancel_booking, create_booking, delete_booking, update_booking


class BookingErrorMixin:
    """Render booking engine errors as ``{"detail", "code"}`` with their status."""

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, BookingError):
            return Response(
                {"detail": exc.message, "code": exc.code},
                status=exc.status_code,
            )
        return super().handle_exception(exc)  # type: ignore[misc]


class BookingViewSet(BookingErrorMixin, viewsets.ModelViewSet):
    """Bookings of the caller's current branch.

    Admins list the branch they selected, or every branch when none is
    selected, and can open any booking. Writes go through
    the booking engine in ``apps.bookings.services``.
    """

    queryset = (
        Booking.objects.select_related("customer", "therapist", "room", "branch")
        .prefetch_related("items__service")
        .order_by("-start_time")
    )
    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "partial_update":
            return BookingUpdateSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if hasattr(user, "is_admin_role") and user.is_admin_role():
            if self.action == "list" and user.branch_id is not None:
                return qs.filter(branch_id=user.branch_id)
            return qs
        if user.branch_id is None:
            return qs.none()
        return qs.filter(branch_id=user.branch_id)

    def filter_queryset(self, queryset):  # type: ignore
        # Query filters only apply to the list; detail routes see every status.
        if self.action != "list":
            return queryset
        return super().filter_queryset(queryset)

    @property
    def caller(self) -> CallerContext:
        return CallerContext.from_user(self.request.user)

    def list(self, request, *args, **kwargs):  # type: ignore
        user = request.user
        if user.branch_id is None and not user.is_admin_role():
            return Response(
                {"detail": "Branch context required.", "code": "invalid"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = create_booking(self.caller, **serializer.to_engine_kwargs())
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        headers = self.get_success_headers(data)
        return Response(data, status=status.HTTP_201_CREATED, headers=headers)

    def partial_update(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        booking = update_booking(self.caller, int(kwargs["pk"]), serializer.to_changes())
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        delete_booking(self.caller, int(kwargs["pk"]))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = cancel_booking(self.caller, int(pk))
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

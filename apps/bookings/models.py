"""Booking domain models for SpaOps."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeRange


class BookingQuerySet(models.QuerySet):
    def blocking(self):
        """Bookings that occupy their therapist and room."""
        return self.exclude(status=Booking.Status.CANCELLED)

    def overlapping(self, time_range: TimeRange):
        return self.filter(start_time__lt=time_range.end, end_time__gt=time_range.start)


class Booking(models.Model):
    """An appointment of a customer for one or more services.

    ``end_time`` is always derived from ``start_time`` plus the summed
    duration of the booked services; it is never taken from the client.
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        CONFIRMED = "CONFIRMED", _("Confirmed")
        IN_PROGRESS = "IN_PROGRESS", _("In progress")
        COMPLETED = "COMPLETED", _("Completed")
        CANCELLED = "CANCELLED", _("Cancelled")
        NO_SHOW = "NO_SHOW", _("No show")

    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    therapist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="therapist_bookings",
    )
    room = models.ForeignKey(
        "branches.Room",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_bookings",
    )
    notes = models.TextField(blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gte=models.F("start_time")),
                name="booking_end_after_start",
            ),
        ]
        indexes = [
            models.Index(
                fields=["therapist", "status", "start_time", "end_time"],
                name="booking_therapist_slot_idx",
            ),
            models.Index(
                fields=["room", "status", "start_time", "end_time"],
                name="booking_room_slot_idx",
            ),
            models.Index(fields=["branch", "start_time"], name="booking_branch_start_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.start_time:%Y-%m-%d %H:%M} ({self.status})"

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start_time, self.end_time)

    @property
    def is_cancelled(self) -> bool:
        return self.status == self.Status.CANCELLED

    def mark_cancelled(self) -> None:
        self.status = self.Status.CANCELLED
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancelled_at", "updated_at"])


class BookingItem(models.Model):
    """One service line of a booking."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="items")
    service = models.ForeignKey(
        "services.Service",
        on_delete=models.PROTECT,
        related_name="booking_items",
    )

    class Meta:
        verbose_name = _("Booking item")
        verbose_name_plural = _("Booking items")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.booking_id}: {self.service_id}"

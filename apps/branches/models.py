"""Branch domain models for SpaOps."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Branch(models.Model):
    """A physical shop location. Scopes staff, rooms and bookings."""

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="managed_branches",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Branch")
        verbose_name_plural = _("Branches")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name


class Room(models.Model):
    """Treatment room inside a branch. Bookable by at most one booking at a time."""

    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="rooms")
    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["branch", "name"], name="room_unique_name_per_branch"),
        ]

    def __str__(self) -> str:
        return f"{self.name} @ {self.branch_id}"


class BranchService(models.Model):
    """Branch-level price and availability of a catalogue service."""

    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="branch_services")
    service = models.ForeignKey(
        "services.Service",
        on_delete=models.CASCADE,
        related_name="branch_settings",
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_active = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Branch service")
        verbose_name_plural = _("Branch services")
        constraints = [
            models.UniqueConstraint(fields=["branch", "service"], name="branch_service_unique"),
        ]

    def __str__(self) -> str:
        return f"{self.service_id} @ {self.branch_id}: {self.price}"

"""Service catalogue models for SpaOps."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class ServiceQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Service(models.Model):
    """Sellable treatment with a fixed duration and a base price."""

    class Type(models.TextChoices):
        SINGLE = "SINGLE", _("Single")
        COMBO = "COMBO", _("Combo")

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    duration = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Duration in minutes."),
    )
    base_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    type = models.CharField(max_length=10, choices=Type.choices, default=Type.SINGLE)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ServiceQuerySet.as_manager()

    class Meta:
        verbose_name = _("Service")
        verbose_name_plural = _("Services")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(duration__gte=1),
                name="service_positive_duration",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.duration}m)"

    @property
    def is_combo(self) -> bool:
        return self.type == self.Type.COMBO


class ServiceItem(models.Model):
    """Member service of a combo. Informational only: the combo's own
    duration is what bookings use."""

    combo = models.ForeignKey(Service, on_delete=models.CASCADE, related_name="combo_items")
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name="+")

    class Meta:
        verbose_name = _("Combo item")
        verbose_name_plural = _("Combo items")

    def __str__(self) -> str:
        return f"{self.combo_id} -> {self.service_id}"

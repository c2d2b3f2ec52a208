"""Customer domain models for SpaOps."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomerQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)


class Customer(models.Model):
    """A shop customer. The phone number is the natural key."""

    name = models.CharField(_("Name"), max_length=150)
    phone = models.CharField(_("Phone"), max_length=30, unique=True)
    email = models.EmailField(_("Email"), blank=True)
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerQuerySet.as_manager()

    class Meta:
        verbose_name = _("Customer")
        verbose_name_plural = _("Customers")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} ({self.phone})"

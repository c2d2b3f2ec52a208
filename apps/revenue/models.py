"""Daily revenue ledger models for SpaOps."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class DailyRevenueQuerySet(models.QuerySet):
    def live(self):
        return self.filter(is_deleted=False)


def _money_field():
    return models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )


class DailyRevenue(models.Model):
    """Takings one staff member recorded for one day at one branch."""

    date = models.DateTimeField(default=timezone.now)
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="revenue_entries",
    )
    branch = models.ForeignKey(
        "branches.Branch",
        on_delete=models.PROTECT,
        related_name="revenue_entries",
    )
    customers_served = models.PositiveIntegerField(default=0)
    cash_amount = _money_field()
    bank_amount = _money_field()
    card_amount = _money_field()
    is_deleted = models.BooleanField(default=False)
    delete_reason = models.CharField(max_length=255, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DailyRevenueQuerySet.as_manager()

    class Meta:
        verbose_name = _("Daily revenue")
        verbose_name_plural = _("Daily revenue")
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["branch", "date"], name="revenue_branch_date_idx"),
            models.Index(fields=["staff", "date"], name="revenue_staff_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.staff_id} @ {self.branch_id} on {self.date:%Y-%m-%d}: {self.total_amount}"

    @property
    def total_amount(self) -> Decimal:
        return self.cash_amount + self.bank_amount + self.card_amount

    def is_from_today(self) -> bool:
        return timezone.localdate(self.date) == timezone.localdate()

    def soft_delete(self, user, reason: str) -> None:
        self.is_deleted = True
        self.delete_reason = reason
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.save(update_fields=["is_deleted", "delete_reason", "deleted_at", "deleted_by", "updated_at"])

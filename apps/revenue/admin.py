"""Admin registration for the revenue ledger."""

from __future__ import annotations

from django.contrib import admin

from .models import DailyRevenue


@admin.register(DailyRevenue)
class DailyRevenueAdmin(admin.ModelAdmin):
    list_display = (
        "date",
        "staff",
        "branch",
        "customers_served",
        "cash_amount",
        "bank_amount",
        "card_amount",
        "is_deleted",
    )
    list_filter = ("branch", "is_deleted", "date")
    search_fields = ("staff__name", "staff__email", "delete_reason")
    readonly_fields = ("deleted_at", "deleted_by", "created_at", "updated_at")

"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingItem


class BookingItemInline(admin.TabularInline):
    model = BookingItem
    extra = 0


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "branch",
        "customer",
        "therapist",
        "room",
        "start_time",
        "end_time",
        "status",
        "created_at",
    )
    list_filter = ("status", "branch", "start_time")
    search_fields = ("customer__name", "customer__phone", "therapist__name")
    # End time is derived from the services; edits go through the API.
    readonly_fields = ("end_time", "cancelled_at", "created_at", "updated_at")
    inlines = [BookingItemInline]

"""Admin registration for the service catalogue."""

from __future__ import annotations

from django.contrib import admin

from .models import Service, ServiceItem


class ServiceItemInline(admin.TabularInline):
    model = ServiceItem
    fk_name = "combo"
    extra = 0


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "duration", "base_price", "is_active", "created_at")
    list_filter = ("type", "is_active")
    search_fields = ("name",)
    inlines = [ServiceItemInline]

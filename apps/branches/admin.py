"""Admin registration for branches."""

from __future__ import annotations

from django.contrib import admin

from .models import Branch, BranchService, Room


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "address", "phone", "manager", "created_at")
    search_fields = ("name", "address", "phone")
    inlines = [RoomInline]


@admin.register(BranchService)
class BranchServiceAdmin(admin.ModelAdmin):
    list_display = ("branch", "service", "price", "is_active", "updated_at")
    list_filter = ("branch", "is_active")

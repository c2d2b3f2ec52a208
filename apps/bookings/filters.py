"""FilterSet definitions for the booking list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Day, customer search and cancelled toggle for the booking list.

    Cancelled bookings are hidden unless ``include_cancelled=true``.
    """

    # Calendar day in the project time zone
    date = django_filters.DateFilter(field_name="start_time", lookup_expr="date")
    include_cancelled = django_filters.BooleanFilter(method="filter_include_cancelled")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Booking
        fields = ["date", "status", "therapist", "room"]

    def filter_queryset(self, queryset):  # type: ignore
        queryset = super().filter_queryset(queryset)
        cleaned = self.form.cleaned_data
        if not cleaned.get("include_cancelled") and cleaned.get("status") != Booking.Status.CANCELLED:
            queryset = queryset.exclude(status=Booking.Status.CANCELLED)
        return queryset

    def filter_include_cancelled(self, queryset, name, value):  # type: ignore
        return queryset

    def filter_search(self, queryset, name, value):  # type: ignore
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(customer__name__icontains=value) | Q(customer__phone__icontains=value)
        )

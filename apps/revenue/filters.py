"""FilterSet definitions for the revenue ledger."""

from __future__ import annotations

import django_filters  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore

from .models import DailyRevenue

User = get_user_model()


class DailyRevenueFilterSet(django_filters.FilterSet):
    """Day range, staff and branch filters.

    Staff and branch only take effect for admins; the view pins everyone
    else to their own entries in their current branch.
    """

    date_from = django_filters.DateFilter(field_name="date", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="date__lte")
    # ?staff_id=1&staff_id=2
    staff_id = django_filters.ModelMultipleChoiceFilter(
        field_name="staff",
        queryset=User.objects.all(),
    )
    branch_id = django_filters.NumberFilter(field_name="branch_id")

    class Meta:
        model = DailyRevenue
        fields = ["date_from", "date_to", "staff_id", "branch_id"]

"""URL routing for the revenue ledger."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import DailyRevenueViewSet

router = DefaultRouter()
router.register(r"", DailyRevenueViewSet, basename="revenue")

urlpatterns = [
    path("", include(router.urls)),
]

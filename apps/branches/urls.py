"""URL routing for branches."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import BranchViewSet

router = DefaultRouter()
router.register(r"", BranchViewSet, basename="branch")

urlpatterns = [
    path("", include(router.urls)),
]

"""API views for the service catalogue."""

from __future__ import annotations

import logging

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminOrManagerOrReadOnly, IsAdminRole

from .models import Service
from .serializers import BulkActionSerializer, ServiceSerializer

logger = logging.getLogger(__name__)


class ServiceViewSet(viewsets.ModelViewSet):
    """Catalogue CRUD. Deleting a service only deactivates it."""

    serializer_class = ServiceSerializer
    queryset = Service.objects.prefetch_related("combo_items__service").all()
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action in {"destroy", "bulk"}:
            return [IsAdminRole()]
        return [permissions.IsAuthenticated(), IsAdminOrManagerOrReadOnly()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action != "list":
            return qs
        include_inactive = self.request.query_params.get("include_inactive") == "true"
        if include_inactive and self.request.user.is_admin_role():
            return qs
        return qs.active()

    def perform_destroy(self, instance):  # type: ignore
        instance.is_active = False
        instance.save(update_fields=["is_active", "updated_at"])
        logger.info("Service %s deactivated by %s", instance.pk, self.request.user.pk)

    @action(detail=False, methods=["post"])
    def bulk(self, request):
        """Deactivate (DELETE) or reactivate (RECOVER) many services at once."""
        serializer = BulkActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        recover = serializer.validated_data["action"] == BulkActionSerializer.Action.RECOVER
        updated = Service.objects.filter(id__in=serializer.validated_data["ids"]).update(
            is_active=recover
        )
        return Response({"updated": updated}, status=status.HTTP_200_OK)

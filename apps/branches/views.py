"""API views for branches."""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import IsAdminOrManager, IsAdminRole

from .models import Branch, BranchService, Room
from .serializers import (
    BranchSerializer,
    BranchServiceSerializer,
    BranchServiceUpsertSerializer,
    RoomSerializer,
    merge_branch_catalog,
)

logger = logging.getLogger(__name__)


class BranchViewSet(viewsets.ModelViewSet):
    """Branches plus their rooms and service pricing.

    - list/retrieve: any authenticated user
    - create: admins and managers
    - update (incl. manager assignment): admins only
    """

    queryset = Branch.objects.select_related("manager").all()
    serializer_class = BranchSerializer
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):  # type: ignore
        if self.action == "partial_update":
            return [IsAdminRole()]
        if self.action == "create":
            return [IsAdminOrManager()]
        if self.action == "update_room":
            return [IsAdminOrManager()]
        if self.action in {"rooms", "services"} and self.request.method == "POST":
            return [IsAdminOrManager()]
        return [permissions.IsAuthenticated()]

    @action(detail=True, methods=["get", "post"])
    def rooms(self, request, pk=None):  # type: ignore
        branch = self.get_object()
        if request.method == "GET":
            return Response(RoomSerializer(branch.rooms.all(), many=True).data)
        serializer = RoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if branch.rooms.filter(name=serializer.validated_data["name"]).exists():
            return Response(
                {"detail": "Room with this name already exists in the branch."},
                status=status.HTTP_409_CONFLICT,
            )
        room = serializer.save(branch=branch)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch"], url_path=r"rooms/(?P<room_id>\d+)")
    def update_room(self, request, pk=None, room_id=None):  # type: ignore
        branch = self.get_object()
        room = get_object_or_404(Room, pk=room_id, branch=branch)
        serializer = RoomSerializer(room, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(detail=True, methods=["get", "post"])
    def services(self, request, pk=None):  # type: ignore
        """GET: merged catalogue for the branch. POST: upsert one branch price."""
        branch = self.get_object()
        if request.method == "GET":
            return Response(merge_branch_catalog(branch))

        serializer = BranchServiceUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        branch_service, created = BranchService.objects.update_or_create(
            branch=branch,
            service=data["service"],
            defaults={"price": data["price"], "is_active": data["is_active"]},
        )
        logger.info(
            "Branch %s service %s %s (price=%s, active=%s)",
            branch.pk,
            data["service"].pk,
            "configured" if created else "updated",
            data["price"],
            data["is_active"],
        )
        return Response(BranchServiceSerializer(branch_service).data, status=status.HTTP_200_OK)

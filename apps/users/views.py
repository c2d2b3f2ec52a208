"""User API views."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.branches.models import Branch

from .permissions import IsAdminOrManager
from .serializers import SelectBranchSerializer, UserCreateSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class UserViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Staff account management.

    - list/create/retrieve are limited to admins and managers
    - `me` returns the caller's profile
    - `select_branch` switches the caller's current branch
    """

    queryset = User.objects.select_related("branch").all()

    def get_permissions(self):  # type: ignore
        if self.action in {"me", "select_branch"}:
            return [permissions.IsAuthenticated()]
        return [IsAdminOrManager()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return UserCreateSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if User.objects.filter(email__iexact=email).exists():
            return Response({"detail": "User already exists."}, status=status.HTTP_409_CONFLICT)
        user = serializer.save()
        logger.info("User %s created with role %s by %s", user.pk, user.role, request.user.pk)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"])
    def me(self, request):
        """Returns the current user's profile."""
        return Response(UserSerializer(request.user).data)

    @action(detail=False, methods=["post"], url_path="select-branch")
    def select_branch(self, request):
        """Sets the branch the caller works in."""
        serializer = SelectBranchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            branch = Branch.objects.get(pk=serializer.validated_data["branch_id"])
        except Branch.DoesNotExist:
            return Response({"detail": "Branch not found."}, status=status.HTTP_404_NOT_FOUND)
        request.user.select_branch(branch)
        return Response(UserSerializer(request.user).data)

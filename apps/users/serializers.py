"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer (never exposes the password)."""

    branch_name = serializers.ReadOnlyField(source="branch.name")

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "branch",
            "branch_name",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "branch_name", "created_at"]


class UserCreateSerializer(serializers.ModelSerializer):
    """Account creation by an admin or manager."""

    password = serializers.CharField(write_only=True, min_length=6)
    email = serializers.EmailField()

    class Meta:
        model = User
        fields = ["email", "name", "password", "role", "branch"]
        extra_kwargs = {
            "branch": {"required": False, "allow_null": True},
        }

    def create(self, validated_data):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class SelectBranchSerializer(serializers.Serializer):
    branch_id = serializers.IntegerField()

"""User domain models for SpaOps.

Staff accounts log in by email and carry one of four roles (admin,
manager, front-desk staff, therapist). Every non-admin works inside a
current branch, which scopes the bookings and revenue entries they can
see and create. Admins may work without a branch.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """User manager that uses email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.STAFF)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Staff member with a role and a current branch."""

    class RoleChoices(models.TextChoices):
        ADMIN = "ADMIN", _("Admin")
        MANAGER = "MANAGER", _("Manager")
        STAFF = "STAFF", _("Staff")
        THERAPIST = "THERAPIST", _("Therapist")

    username = None
    email = models.EmailField(_("Email"), unique=True)
    name = models.CharField(_("Name"), max_length=150)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.STAFF,
    )
    branch = models.ForeignKey(
        "branches.Branch",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="staff",
        help_text=_("Branch the user currently works in."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name or self.email} ({self.get_role_display()})"

    # --- Role helpers -------------------------------------------------------
    def is_admin_role(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_superuser

    def is_manager(self) -> bool:
        return self.role == self.RoleChoices.MANAGER

    def is_therapist(self) -> bool:
        return self.role == self.RoleChoices.THERAPIST

    def can_manage_catalog(self) -> bool:
        return self.is_admin_role() or self.is_manager()

    def select_branch(self, branch) -> None:
        self.branch = branch
        self.save(update_fields=["branch", "updated_at"])


User = CustomUser

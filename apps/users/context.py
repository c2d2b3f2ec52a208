"""Explicit caller identity passed into domain services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CallerContext:
    """Who is calling, in which role, and from which branch.

    Domain services receive this instead of reading the request, so the
    same operation can be driven from a view, a shell or a test.
    """

    user_id: int
    role: str
    branch_id: Optional[int] = None
    is_superuser: bool = False

    @classmethod
    def from_user(cls, user) -> "CallerContext":
        return cls(
            user_id=user.pk,
            role=user.role,
            branch_id=user.branch_id,
            is_superuser=bool(getattr(user, "is_superuser", False)),
        )

    @property
    def is_admin(self) -> bool:
        from .models import CustomUser

        return self.role == CustomUser.RoleChoices.ADMIN or self.is_superuser

    def can_access_branch(self, branch_id: Optional[int]) -> bool:
        """Admins see every branch; everyone else only their current one."""
        if self.is_admin:
            return True
        return self.branch_id is not None and self.branch_id == branch_id

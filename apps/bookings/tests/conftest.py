"""Fixtures for booking engine tests."""

from __future__ import annotations

import pytest

from apps.branches.models import Branch, Room
from apps.customers.models import Customer
from apps.services.models import Service
from apps.users.context import CallerContext
from apps.users.models import User


@pytest.fixture
def branch(db):
    return Branch.objects.create(name="Gangnam")


@pytest.fixture
def other_branch(db):
    return Branch.objects.create(name="Hongdae")


@pytest.fixture
def staff(branch):
    return User.objects.create_user(
        email="desk@example.com",
        password="DeskPass123",
        name="Front Desk",
        role=User.RoleChoices.STAFF,
        branch=branch,
    )


@pytest.fixture
def admin(db):
    return User.objects.create_user(
        email="admin@example.com",
        password="AdminPass123",
        name="Owner",
        role=User.RoleChoices.ADMIN,
    )


@pytest.fixture
def therapist(branch):
    return User.objects.create_user(
        email="therapist@example.com",
        password="TherapistPass123",
        name="Min",
        role=User.RoleChoices.THERAPIST,
        branch=branch,
    )


@pytest.fixture
def second_therapist(branch):
    return User.objects.create_user(
        email="therapist2@example.com",
        password="TherapistPass123",
        name="Ji",
        role=User.RoleChoices.THERAPIST,
        branch=branch,
    )


@pytest.fixture
def room(branch):
    return Room.objects.create(branch=branch, name="Room 1")


@pytest.fixture
def massage(db):
    return Service.objects.create(name="Aroma massage", duration=60)


@pytest.fixture
def foot_care(db):
    return Service.objects.create(name="Foot care", duration=30)


@pytest.fixture
def customer(db):
    return Customer.objects.create(name="Kim", phone="01012345678")


@pytest.fixture
def caller(staff):
    return CallerContext.from_user(staff)


@pytest.fixture
def admin_caller(admin):
    return CallerContext.from_user(admin)

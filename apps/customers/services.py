"""Domain services for customer records."""

from __future__ import annotations

import logging
from typing import Tuple

from django.db import transaction  # type: ignore

from shared.infrastructure.locking import lock_queryset_if_possible

from .models import Customer

logger = logging.getLogger(__name__)


class InvalidPhoneError(Exception):
    """Raised when a phone number is empty once spaces and dashes are removed."""


def normalize_phone(phone: str) -> str:
    """Strip whitespace and dashes so `010-1234 5678` and `01012345678` match."""

    return "".join(ch for ch in (phone or "") if ch not in " -\t")


@transaction.atomic
def resolve_or_create_customer(name: str, phone: str) -> Tuple[Customer, bool, bool]:
    """Find a customer by phone or register a new one.

    Returns ``(customer, created, reactivated)``. An inactive customer with
    the same phone is reactivated rather than duplicated; the existing name
    is kept.
    """

    phone = normalize_phone(phone)
    if not phone:
        raise InvalidPhoneError("Customer phone is required.")

    existing = lock_queryset_if_possible(Customer.objects.filter(phone=phone)).first()
    if existing is None:
        customer = Customer.objects.create(name=name.strip() or phone, phone=phone)
        logger.info("Registered customer %s (%s)", customer.pk, phone)
        return customer, True, False

    if not existing.is_active:
        existing.is_active = True
        existing.save(update_fields=["is_active", "updated_at"])
        logger.info("Reactivated customer %s (%s)", existing.pk, phone)
        return existing, False, True

    return existing, False, False

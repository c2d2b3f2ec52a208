"""Domain services for booking workflows.

The booking engine: derives a booking's end time from its services and
keeps therapists and rooms from being double-booked. Every write runs
inside one transaction that first locks the therapist and room rows, so
two requests racing for the same resource are serialized. On PostgreSQL
the exclusion constraints installed by the bookings migrations back this
up at the database level.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional, Sequence, Union

import structlog
from django.contrib.auth import get_user_model  # type: ignore
from django.db import DatabaseError, IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.branches.models import Branch, Room
from apps.customers.models import Customer
from apps.customers.services import normalize_phone, resolve_or_create_customer
from apps.services.models import Service
from apps.users.context import CallerContext
from shared.domain.value_objects import TimeRange

from .exceptions import (
    BookingNotFound,
    CustomerRequired,
    PersistenceFailure,
    RoomUnavailable,
    ServiceNotFound,
    TherapistUnavailable,
    ValidationError,
)
from .models import Booking, BookingItem

logger = structlog.get_logger(__name__)

User = get_user_model()

THERAPIST_OVERLAP_CONSTRAINT = "booking_therapist_no_overlap"
ROOM_OVERLAP_CONSTRAINT = "booking_room_no_overlap"

INITIAL_STATUSES = (Booking.Status.PENDING, Booking.Status.CONFIRMED)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks an update field the caller did not send; None means "clear it".
UNSET: Any = _Unset()


@dataclass(frozen=True)
class NewCustomer:
    """Inline customer details, resolved by phone."""

    name: str
    phone: str


CustomerRef = Union[int, NewCustomer]


@dataclass
class BookingChanges:
    """Partial update of a booking. Fields left as UNSET are not touched."""

    customer: Any = UNSET
    service_ids: Any = UNSET
    therapist_id: Any = UNSET
    room_id: Any = UNSET
    start_time: Any = UNSET
    status: Any = UNSET
    notes: Any = UNSET


# --- Duration ------------------------------------------------------------------


def total_duration_minutes(service_ids: Sequence[int]) -> int:
    """Sum of the durations of the requested services, in minutes.

    Every id must resolve; a single unknown id fails the whole request with
    ServiceNotFound. A service listed twice counts twice.
    """

    requested = set(service_ids)
    durations = dict(
        Service.objects.filter(pk__in=requested).values_list("pk", "duration")
    )
    if len(durations) != len(requested):
        missing = sorted(requested - set(durations))
        raise ServiceNotFound(f"Services not found: {missing}")
    return sum(durations[pk] for pk in service_ids)


def compute_end_time(start_time: datetime, service_ids: Sequence[int]) -> datetime:
    return TimeRange.from_duration(start_time, total_duration_minutes(service_ids)).end


# --- Conflicts -----------------------------------------------------------------


def ensure_resources_available(
    time_range: TimeRange,
    *,
    therapist_id: Optional[int] = None,
    room_id: Optional[int] = None,
    exclude_booking_id: Optional[int] = None,
) -> None:
    """Ensure neither the therapist nor the room is taken during ``time_range``.

    Only non-cancelled bookings block. Intervals are half-open, so a booking
    ending at 11:00 does not block one starting at 11:00.
    """

    candidates = Booking.objects.blocking().overlapping(time_range)
    if exclude_booking_id is not None:
        candidates = candidates.exclude(pk=exclude_booking_id)

    if therapist_id is not None and candidates.filter(therapist_id=therapist_id).exists():
        logger.info(
            "booking.conflict",
            resource="therapist",
            therapist_id=therapist_id,
            start=time_range.start.isoformat(),
            end=time_range.end.isoformat(),
        )
        raise TherapistUnavailable()

    if room_id is not None and candidates.filter(room_id=room_id).exists():
        logger.info(
            "booking.conflict",
            resource="room",
            room_id=room_id,
            start=time_range.start.isoformat(),
            end=time_range.end.isoformat(),
        )
        raise RoomUnavailable()


def _conflict_from_integrity_error(exc: IntegrityError):
    message = str(exc)
    if THERAPIST_OVERLAP_CONSTRAINT in message:
        return TherapistUnavailable()
    if ROOM_OVERLAP_CONSTRAINT in message:
        return RoomUnavailable()
    return None


@contextmanager
def _booking_transaction(action: str, **log_fields: Any) -> Iterator[None]:
    """Run a booking write atomically and translate database failures."""

    try:
        with transaction.atomic():
            yield
    except IntegrityError as exc:
        conflict = _conflict_from_integrity_error(exc)
        if conflict is not None:
            logger.info("booking.conflict", action=action, constraint=True, **log_fields)
            raise conflict from exc
        logger.exception("booking.persistence_failed", action=action, **log_fields)
        raise PersistenceFailure() from exc
    except DatabaseError as exc:
        logger.exception("booking.persistence_failed", action=action, **log_fields)
        raise PersistenceFailure() from exc


# --- Lookups -------------------------------------------------------------------


def _resolve_branch_id(caller: CallerContext, branch_id: Optional[int]) -> int:
    if caller.is_admin:
        branch_id = branch_id or caller.branch_id
        if branch_id is None:
            raise ValidationError("Branch is required.")
    else:
        if caller.branch_id is None:
            raise ValidationError("Branch context required.")
        if branch_id is not None and branch_id != caller.branch_id:
            raise ValidationError("Bookings can only be created in your current branch.")
        branch_id = caller.branch_id

    if not Branch.objects.filter(pk=branch_id).exists():
        raise ValidationError("Branch not found.")
    return branch_id


def _resolve_customer(customer_ref: Optional[CustomerRef]) -> Customer:
    if customer_ref is None:
        raise CustomerRequired()
    if isinstance(customer_ref, NewCustomer):
        if not normalize_phone(customer_ref.phone):
            raise ValidationError("New customer phone is required.")
        customer, _created, _reactivated = resolve_or_create_customer(
            customer_ref.name, customer_ref.phone
        )
        return customer
    customer = Customer.objects.filter(pk=customer_ref).first()
    if customer is None:
        raise ValidationError("Customer not found.")
    return customer


def _lock_therapist(therapist_id: Optional[int]) -> None:
    if therapist_id is None:
        return
    if not User.objects.select_for_update().filter(pk=therapist_id, is_active=True).exists():
        raise ValidationError("Therapist not found.")


def _lock_room(room_id: Optional[int], branch_id: int) -> None:
    if room_id is None:
        return
    if not Room.objects.select_for_update().filter(pk=room_id, branch_id=branch_id).exists():
        raise ValidationError("Room not found in this branch.")


def _lock_resources(therapist_id: Optional[int], room_id: Optional[int], branch_id: int) -> None:
    # Therapist before room, always, so concurrent writers lock in one order.
    _lock_therapist(therapist_id)
    _lock_room(room_id, branch_id)


def _require_aware(start_time: datetime) -> None:
    if timezone.is_naive(start_time):
        raise ValidationError("start_time must include a timezone.")


def _get_booking_for_update(caller: CallerContext, booking_id: int) -> Booking:
    booking = Booking.objects.select_for_update().filter(pk=booking_id).first()
    # Bookings outside the caller's branch are reported as missing.
    if booking is None or not caller.can_access_branch(booking.branch_id):
        raise BookingNotFound()
    return booking


def _replace_items(booking: Booking, service_ids: Sequence[int]) -> None:
    booking.items.all().delete()
    BookingItem.objects.bulk_create(
        [BookingItem(booking=booking, service_id=pk) for pk in service_ids]
    )


# --- Orchestration -------------------------------------------------------------


def create_booking(
    caller: CallerContext,
    *,
    customer: Optional[CustomerRef],
    service_ids: Sequence[int],
    start_time: datetime,
    branch_id: Optional[int] = None,
    therapist_id: Optional[int] = None,
    room_id: Optional[int] = None,
    notes: str = "",
    status: str = Booking.Status.PENDING,
) -> Booking:
    """Create a booking after checking therapist and room availability.

    Nothing is written unless every check passes: the customer, booking and
    its items are saved in one transaction.
    """

    if not service_ids:
        raise ValidationError("At least one service is required.")
    if customer is None:
        raise CustomerRequired()
    if status not in INITIAL_STATUSES:
        raise ValidationError(f"New bookings must be {' or '.join(INITIAL_STATUSES)}.")
    _require_aware(start_time)

    branch_id = _resolve_branch_id(caller, branch_id)
    time_range = TimeRange.from_duration(start_time, total_duration_minutes(service_ids))

    with _booking_transaction(
        "create", branch_id=branch_id, therapist_id=therapist_id, room_id=room_id
    ):
        _lock_resources(therapist_id, room_id, branch_id)
        ensure_resources_available(time_range, therapist_id=therapist_id, room_id=room_id)

        booking = Booking.objects.create(
            branch_id=branch_id,
            customer=_resolve_customer(customer),
            therapist_id=therapist_id,
            room_id=room_id,
            start_time=time_range.start,
            end_time=time_range.end,
            status=status,
            notes=notes or "",
            created_by_id=caller.user_id,
        )
        _replace_items(booking, service_ids)

    logger.info(
        "booking.created",
        booking_id=booking.pk,
        branch_id=branch_id,
        therapist_id=therapist_id,
        room_id=room_id,
        start=time_range.start.isoformat(),
        end=time_range.end.isoformat(),
        created_by=caller.user_id,
    )
    return booking


def update_booking(caller: CallerContext, booking_id: int, changes: BookingChanges) -> Booking:
    """Apply a partial update, re-deriving the end time and re-checking conflicts.

    The end time is recomputed when the start time or the service list
    changes, from the new list if one is given and otherwise from the
    booking's current items. Availability is re-checked, excluding the
    booking itself, whenever the booking would occupy a different slot or
    resource, or is brought back from CANCELLED.
    """

    if changes.service_ids is not UNSET and not changes.service_ids:
        raise ValidationError("At least one service is required.")
    if changes.status is not UNSET and changes.status not in Booking.Status.values:
        raise ValidationError(f"Unknown status: {changes.status}")
    if changes.start_time is not UNSET:
        _require_aware(changes.start_time)

    with _booking_transaction("update", booking_id=booking_id):
        booking = _get_booking_for_update(caller, booking_id)
        was_cancelled = booking.is_cancelled
        previous = (booking.time_range, booking.therapist_id, booking.room_id)

        if changes.start_time is not UNSET or changes.service_ids is not UNSET:
            start_time = booking.start_time if changes.start_time is UNSET else changes.start_time
            if changes.service_ids is UNSET:
                minutes = sum(item.service.duration for item in booking.items.select_related("service"))
            else:
                minutes = total_duration_minutes(changes.service_ids)
            time_range = TimeRange.from_duration(start_time, minutes)
            booking.start_time, booking.end_time = time_range.start, time_range.end

        if changes.therapist_id is not UNSET:
            booking.therapist_id = changes.therapist_id
        if changes.room_id is not UNSET:
            booking.room_id = changes.room_id
        if changes.customer is not UNSET:
            booking.customer = _resolve_customer(changes.customer)
        if changes.notes is not UNSET:
            booking.notes = changes.notes or ""
        if changes.status is not UNSET:
            booking.status = changes.status
            if booking.is_cancelled and not was_cancelled:
                booking.cancelled_at = timezone.now()
            elif not booking.is_cancelled:
                booking.cancelled_at = None

        current = (booking.time_range, booking.therapist_id, booking.room_id)
        reinstated = was_cancelled and not booking.is_cancelled
        if not booking.is_cancelled and (current != previous or reinstated):
            _lock_resources(booking.therapist_id, booking.room_id, booking.branch_id)
            ensure_resources_available(
                booking.time_range,
                therapist_id=booking.therapist_id,
                room_id=booking.room_id,
                exclude_booking_id=booking.pk,
            )

        booking.save()
        if changes.service_ids is not UNSET:
            _replace_items(booking, changes.service_ids)

    logger.info(
        "booking.updated",
        booking_id=booking.pk,
        branch_id=booking.branch_id,
        therapist_id=booking.therapist_id,
        room_id=booking.room_id,
        status=booking.status,
        start=booking.start_time.isoformat(),
        end=booking.end_time.isoformat(),
    )
    return booking


def cancel_booking(caller: CallerContext, booking_id: int) -> Booking:
    """Mark a booking CANCELLED. Cancelling twice is a no-op."""

    with _booking_transaction("cancel", booking_id=booking_id):
        booking = _get_booking_for_update(caller, booking_id)
        if booking.is_cancelled:
            return booking
        booking.mark_cancelled()

    logger.info("booking.cancelled", booking_id=booking.pk, branch_id=booking.branch_id)
    return booking


def delete_booking(caller: CallerContext, booking_id: int) -> None:
    """Remove a booking and its items."""

    with _booking_transaction("delete", booking_id=booking_id):
        booking = _get_booking_for_update(caller, booking_id)
        booking.delete()

    logger.info("booking.deleted", booking_id=booking_id)

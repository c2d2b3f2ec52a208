"""Errors raised by the booking engine.

Each error carries the HTTP status and machine-readable code the API
layer responds with, so views translate them without a lookup table.
"""

from __future__ import annotations


class BookingError(Exception):
    """Base class for booking operation failures."""

    status_code = 400
    code = "booking_error"
    default_message = "Booking operation failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BookingError):
    code = "invalid"
    default_message = "Invalid booking input."


class ServiceNotFound(BookingError):
    status_code = 404
    code = "service_not_found"
    default_message = "One or more services not found."


class CustomerRequired(BookingError):
    code = "customer_required"
    default_message = "Either customer_id or new_customer must be provided."


class TherapistUnavailable(BookingError):
    status_code = 409
    code = "therapist_unavailable"
    default_message = "Therapist is not available at this time."


class RoomUnavailable(BookingError):
    status_code = 409
    code = "room_unavailable"
    default_message = "Room is not available at this time."


class BookingNotFound(BookingError):
    status_code = 404
    code = "not_found"
    default_message = "Booking not found."


class PersistenceFailure(BookingError):
    status_code = 500
    code = "persistence_failure"
    default_message = "Booking could not be saved."

"""Integration tests for booking API endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.branches.models import Branch, Room
from apps.customers.models import Customer
from apps.services.models import Service
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation, conflicts, updates and cancellation of bookings."""

    def setUp(self) -> None:
        self.branch = Branch.objects.create(name="Gangnam")
        self.staff = User.objects.create_user(
            email="desk@example.com",
            password="DeskPass123",
            name="Front Desk",
            role=User.RoleChoices.STAFF,
            branch=self.branch,
        )
        self.therapist = User.objects.create_user(
            email="therapist@example.com",
            password="TherapistPass123",
            name="Min",
            role=User.RoleChoices.THERAPIST,
            branch=self.branch,
        )
        self.room = Room.objects.create(branch=self.branch, name="Room 1")
        self.massage = Service.objects.create(name="Aroma massage", duration=60)
        self.foot_care = Service.objects.create(name="Foot care", duration=30)
        self.customer = Customer.objects.create(name="Kim", phone="01012345678")
        self.client.force_authenticate(self.staff)
        self.list_url = reverse("booking-list")

    def _payload(self, start: str, **overrides) -> dict:
        payload = {
            "customer_id": self.customer.pk,
            "service_ids": [self.massage.pk],
            "therapist_id": self.therapist.pk,
            "start_time": start,
        }
        payload.update(overrides)
        return payload

    def test_staff_can_create_booking(self) -> None:
        payload = self._payload(
            "2024-01-01T10:00:00Z",
            service_ids=[self.massage.pk, self.foot_care.pk],
        )

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.branch, self.branch)
        self.assertEqual(booking.status, Booking.Status.PENDING)
        self.assertEqual(response.data["duration_minutes"], 90)
        self.assertEqual(len(response.data["items"]), 2)

    def test_prevent_double_booking_on_overlap(self) -> None:
        first = self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)

        conflict = self.client.post(self.list_url, self._payload("2024-01-01T10:30:00Z"), format="json")

        self.assertEqual(conflict.status_code, status.HTTP_409_CONFLICT, conflict.data)
        self.assertEqual(conflict.data["code"], "therapist_unavailable")
        self.assertEqual(Booking.objects.count(), 1)

    def test_back_to_back_bookings_are_allowed(self) -> None:
        self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")

        response = self.client.post(self.list_url, self._payload("2024-01-01T11:00:00Z"), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_empty_therapist_and_room_mean_unassigned(self) -> None:
        payload = self._payload("2024-01-01T10:00:00Z", therapist_id="", room_id=None)

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertIsNone(booking.therapist_id)
        self.assertIsNone(booking.room_id)

    def test_unknown_service_returns_404(self) -> None:
        payload = self._payload("2024-01-01T10:00:00Z", service_ids=[self.massage.pk, 999_999])

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "service_not_found")
        self.assertFalse(Booking.objects.exists())

    def test_empty_service_list_is_invalid(self) -> None:
        response = self.client.post(
            self.list_url, self._payload("2024-01-01T10:00:00Z", service_ids=[]), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_missing_customer_is_reported(self) -> None:
        payload = self._payload("2024-01-01T10:00:00Z")
        payload.pop("customer_id")

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "customer_required")

    def test_inline_customer_is_registered(self) -> None:
        payload = self._payload("2024-01-01T10:00:00Z", new_customer={"name": "Choi", "phone": "01077776666"})
        payload.pop("customer_id")

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["customer"]["phone"], "01077776666")

    def test_inline_customer_phone_follows_customer_rules(self) -> None:
        for phone in ("- -", "1"):
            payload = self._payload("2024-01-01T10:00:00Z", new_customer={"name": "Lee", "phone": phone})
            payload.pop("customer_id")

            response = self.client.post(self.list_url, payload, format="json")

            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
            self.assertIn("new_customer", response.data)
        self.assertFalse(Customer.objects.filter(name="Lee").exists())
        self.assertFalse(Booking.objects.exists())

    def test_room_conflict_returns_409(self) -> None:
        self.client.post(
            self.list_url,
            self._payload("2024-01-01T10:00:00Z", therapist_id=None, room_id=self.room.pk),
            format="json",
        )

        response = self.client.post(
            self.list_url,
            self._payload("2024-01-01T10:15:00Z", therapist_id=None, room_id=self.room.pk),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "room_unavailable")

    def test_patch_start_time_recomputes_end(self) -> None:
        created = self.client.post(
            self.list_url,
            self._payload("2024-01-01T10:00:00Z", service_ids=[self.massage.pk, self.foot_care.pk]),
            format="json",
        )
        url = reverse("booking-detail", args=[created.data["id"]])

        response = self.client.patch(url, {"start_time": "2024-01-01T13:00:00Z"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.end_time.isoformat(), "2024-01-01T14:30:00+00:00")
        self.assertEqual(booking.items.count(), 2)

    def test_cancel_frees_the_slot_and_is_idempotent(self) -> None:
        created = self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")
        cancel_url = reverse("booking-cancel", args=[created.data["id"]])

        first = self.client.post(cancel_url)
        second = self.client.post(cancel_url)

        self.assertEqual(first.status_code, status.HTTP_200_OK, first.data)
        self.assertEqual(second.status_code, status.HTTP_200_OK, second.data)
        self.assertEqual(second.data["status"], Booking.Status.CANCELLED)

        rebook = self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")
        self.assertEqual(rebook.status_code, status.HTTP_201_CREATED, rebook.data)

    def test_list_hides_cancelled_unless_requested(self) -> None:
        kept = self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")
        dropped = self.client.post(self.list_url, self._payload("2024-01-01T12:00:00Z"), format="json")
        self.client.post(reverse("booking-cancel", args=[dropped.data["id"]]))

        default = self.client.get(self.list_url)
        everything = self.client.get(self.list_url, {"include_cancelled": "true"})

        self.assertEqual([b["id"] for b in default.data], [kept.data["id"]])
        self.assertEqual(len(everything.data), 2)

    def test_list_filters_by_day_and_search(self) -> None:
        other = Customer.objects.create(name="Yoon", phone="01033332222")
        self.client.post(self.list_url, self._payload("2024-01-01T03:00:00Z"), format="json")
        self.client.post(
            self.list_url,
            self._payload("2024-01-02T03:00:00Z", customer_id=other.pk),
            format="json",
        )

        by_day = self.client.get(self.list_url, {"date": "2024-01-02"})
        by_search = self.client.get(self.list_url, {"search": "yoon"})

        self.assertEqual(len(by_day.data), 1)
        self.assertEqual(by_day.data[0]["customer"]["name"], "Yoon")
        self.assertEqual([b["customer"]["id"] for b in by_search.data], [other.pk])

    def test_bookings_of_other_branches_are_hidden(self) -> None:
        other_branch = Branch.objects.create(name="Hongdae")
        foreign = Booking.objects.create(
            branch=other_branch,
            customer=self.customer,
            start_time="2024-01-01T10:00:00Z",
            end_time="2024-01-01T11:00:00Z",
        )

        listing = self.client.get(self.list_url)
        detail = self.client.get(reverse("booking-detail", args=[foreign.pk]))
        delete = self.client.delete(reverse("booking-detail", args=[foreign.pk]))

        self.assertEqual(listing.data, [])
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(delete.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Booking.objects.filter(pk=foreign.pk).exists())

    def test_delete_removes_booking(self) -> None:
        created = self.client.post(self.list_url, self._payload("2024-01-01T10:00:00Z"), format="json")

        response = self.client.delete(reverse("booking-detail", args=[created.data["id"]]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.exists())

    def test_user_without_branch_cannot_list(self) -> None:
        drifter = User.objects.create_user(email="nobranch@example.com", password="Pass12345", name="Drifter")
        self.client.force_authenticate(drifter)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

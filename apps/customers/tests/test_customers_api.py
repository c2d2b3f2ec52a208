"""API tests for customers and walk-in registration."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.branches.models import Branch
from apps.customers.models import Customer
from apps.services.models import Service
from apps.users.models import User


class CustomerAPITests(APITestCase):
    def setUp(self) -> None:
        self.branch = Branch.objects.create(name="Gangnam")
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass1", name="Owner", role=User.RoleChoices.ADMIN
        )
        self.staff = User.objects.create_user(
            email="staff@example.com", password="StaffPass1", name="Staff", branch=self.branch
        )
        self.massage = Service.objects.create(name="Aroma massage", duration=60)
        self.list_url = reverse("customer-list")
        self.client.force_authenticate(self.staff)

    def test_create_customer(self) -> None:
        response = self.client.post(
            self.list_url, {"name": "Kim", "phone": "010-1234-5678", "email": ""}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["phone"], "01012345678")

    def test_duplicate_phone_returns_409(self) -> None:
        Customer.objects.create(name="Kim", phone="01012345678")

        response = self.client.post(self.list_url, {"name": "Other", "phone": "01012345678"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_short_phone_is_rejected(self) -> None:
        response = self.client.post(self.list_url, {"name": "Kim", "phone": "12345"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("phone", response.data)

    def test_walk_in_creates_confirmed_booking_now(self) -> None:
        response = self.client.post(
            self.list_url,
            {
                "name": "Walk In",
                "phone": "01099990000",
                "service_id": self.massage.pk,
                "branch_id": self.branch.pk,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.customer.phone, "01099990000")
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.time_range.duration_minutes, 60)

    def test_failed_walk_in_leaves_no_customer(self) -> None:
        response = self.client.post(
            self.list_url,
            {
                "name": "Walk In",
                "phone": "01099990000",
                "service_id": 999_999,
                "branch_id": self.branch.pk,
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertFalse(Customer.objects.exists())

    def test_list_hides_inactive_unless_requested(self) -> None:
        Customer.objects.create(name="Active", phone="01011112222")
        Customer.objects.create(name="Gone", phone="01033334444", is_active=False)

        default = self.client.get(self.list_url)
        everyone = self.client.get(self.list_url, {"show_inactive": "true"})

        self.assertEqual([c["name"] for c in default.data], ["Active"])
        self.assertEqual(len(everyone.data), 2)

    def test_only_admin_changes_active_flag(self) -> None:
        customer = Customer.objects.create(name="Kim", phone="01012345678")
        url = reverse("customer-detail", args=[customer.pk])

        forbidden = self.client.patch(url, {"is_active": False}, format="json")
        renamed = self.client.patch(url, {"name": "Kim Minji"}, format="json")
        self.client.force_authenticate(self.admin)
        deactivated = self.client.patch(url, {"is_active": False}, format="json")

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(renamed.status_code, status.HTTP_200_OK, renamed.data)
        self.assertEqual(deactivated.status_code, status.HTTP_200_OK, deactivated.data)
        customer.refresh_from_db()
        self.assertEqual(customer.name, "Kim Minji")
        self.assertFalse(customer.is_active)

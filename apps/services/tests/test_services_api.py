"""API tests for the service catalogue."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.services.models import Service
from apps.users.models import User


class ServiceAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass1", name="Owner", role=User.RoleChoices.ADMIN
        )
        self.manager = User.objects.create_user(
            email="manager@example.com", password="ManagerPass1", name="Manager", role=User.RoleChoices.MANAGER
        )
        self.staff = User.objects.create_user(email="staff@example.com", password="StaffPass1", name="Staff")
        self.massage = Service.objects.create(name="Aroma massage", duration=60)
        self.scrub = Service.objects.create(name="Body scrub", duration=45)
        self.list_url = reverse("service-list")

    def test_manager_creates_combo_with_items(self) -> None:
        self.client.force_authenticate(self.manager)

        response = self.client.post(
            self.list_url,
            {
                "name": "Relax package",
                "duration": 120,
                "base_price": "90000.00",
                "type": Service.Type.COMBO,
                "items": [self.massage.pk, self.scrub.pk],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        combo = Service.objects.get(name="Relax package")
        self.assertEqual(combo.combo_items.count(), 2)
        # Combo contents do not change the booked duration
        self.assertEqual(combo.duration, 120)

    def test_combo_requires_items(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"name": "Empty combo", "duration": 30, "type": Service.Type.COMBO},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("items", response.data)

    def test_zero_duration_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, {"name": "Nothing", "duration": 0}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("duration", response.data)

    def test_staff_can_read_but_not_write(self) -> None:
        self.client.force_authenticate(self.staff)

        listing = self.client.get(self.list_url)
        create = self.client.post(self.list_url, {"name": "Sneaky", "duration": 10}, format="json")

        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(create.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_replaces_combo_items(self) -> None:
        combo = Service.objects.create(name="Duo", duration=90, type=Service.Type.COMBO)
        combo.combo_items.create(service=self.massage)
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("service-detail", args=[combo.pk]), {"items": [self.scrub.pk]}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(list(combo.combo_items.values_list("service_id", flat=True)), [self.scrub.pk])

    def test_delete_is_soft_and_admin_only(self) -> None:
        url = reverse("service-detail", args=[self.massage.pk])

        self.client.force_authenticate(self.manager)
        forbidden = self.client.delete(url)
        self.client.force_authenticate(self.admin)
        deleted = self.client.delete(url)

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        self.massage.refresh_from_db()
        self.assertFalse(self.massage.is_active)
        listed = [s["id"] for s in self.client.get(self.list_url).data]
        self.assertNotIn(self.massage.pk, listed)

    def test_bulk_delete_and_recover(self) -> None:
        self.client.force_authenticate(self.admin)
        url = reverse("service-bulk")
        ids = [self.massage.pk, self.scrub.pk]

        deleted = self.client.post(url, {"ids": ids, "action": "DELETE"}, format="json")
        self.assertEqual(deleted.data, {"updated": 2})
        self.assertFalse(Service.objects.active().exists())

        recovered = self.client.post(url, {"ids": ids, "action": "RECOVER"}, format="json")
        self.assertEqual(recovered.data, {"updated": 2})
        self.assertEqual(Service.objects.active().count(), 2)

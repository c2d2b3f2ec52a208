"""API tests for the daily revenue ledger."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.branches.models import Branch
from apps.revenue.models import DailyRevenue
from apps.users.models import User


class RevenueAPITests(APITestCase):
    def setUp(self) -> None:
        self.branch = Branch.objects.create(name="Gangnam")
        self.other_branch = Branch.objects.create(name="Hongdae")
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass1", name="Owner", role=User.RoleChoices.ADMIN
        )
        self.staff = User.objects.create_user(
            email="staff@example.com", password="StaffPass1", name="Staff", branch=self.branch
        )
        self.colleague = User.objects.create_user(
            email="colleague@example.com", password="StaffPass1", name="Colleague", branch=self.branch
        )
        self.list_url = reverse("revenue-list")

    def _entry(self, staff, branch=None, days_ago: int = 0, **amounts) -> DailyRevenue:
        return DailyRevenue.objects.create(
            staff=staff,
            branch=branch or self.branch,
            date=timezone.now() - timedelta(days=days_ago),
            customers_served=amounts.pop("customers_served", 3),
            cash_amount=amounts.pop("cash", Decimal("10000")),
            bank_amount=amounts.pop("bank", Decimal("20000")),
            card_amount=amounts.pop("card", Decimal("30000")),
        )

    def test_staff_records_entry_for_current_branch(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            self.list_url,
            {"customers_served": 4, "cash_amount": "10000", "bank_amount": "0", "card_amount": "55000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        entry = DailyRevenue.objects.get()
        self.assertEqual(entry.branch, self.branch)
        self.assertEqual(entry.staff, self.staff)
        self.assertEqual(entry.total_amount, Decimal("65000"))

    def test_entry_requires_branch_context(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"customers_served": 1, "cash_amount": "1", "bank_amount": "0", "card_amount": "0"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_negative_amount_is_rejected(self) -> None:
        self.client.force_authenticate(self.staff)

        response = self.client.post(
            self.list_url,
            {"customers_served": 1, "cash_amount": "-1", "bank_amount": "0", "card_amount": "0"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_staff_sees_only_own_entries(self) -> None:
        mine = self._entry(self.staff)
        self._entry(self.colleague)
        self.client.force_authenticate(self.staff)

        response = self.client.get(self.list_url)

        self.assertEqual([e["id"] for e in response.data], [mine.pk])

    def test_admin_filters_by_staff_and_branch(self) -> None:
        self._entry(self.staff)
        colleague_entry = self._entry(self.colleague)
        self._entry(self.colleague, branch=self.other_branch)
        self.client.force_authenticate(self.admin)

        response = self.client.get(
            self.list_url, {"staff_id": [self.colleague.pk], "branch_id": self.branch.pk}
        )

        self.assertEqual([e["id"] for e in response.data], [colleague_entry.pk])

    def test_date_range_filter(self) -> None:
        self._entry(self.staff, days_ago=10)
        recent = self._entry(self.staff, days_ago=1)
        self.client.force_authenticate(self.staff)
        since = timezone.localdate() - timedelta(days=3)

        response = self.client.get(self.list_url, {"date_from": since.isoformat()})

        self.assertEqual([e["id"] for e in response.data], [recent.pk])

    def test_staff_edits_only_todays_entry(self) -> None:
        today = self._entry(self.staff)
        yesterday = self._entry(self.staff, days_ago=1)
        self.client.force_authenticate(self.staff)

        allowed = self.client.patch(
            reverse("revenue-detail", args=[today.pk]), {"customers_served": 9}, format="json"
        )
        refused = self.client.patch(
            reverse("revenue-detail", args=[yesterday.pk]), {"customers_served": 9}, format="json"
        )

        self.assertEqual(allowed.status_code, status.HTTP_200_OK, allowed.data)
        self.assertEqual(refused.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_edits_past_entries(self) -> None:
        old = self._entry(self.staff, days_ago=5)
        self.client.force_authenticate(self.admin)

        response = self.client.patch(
            reverse("revenue-detail", args=[old.pk]), {"cash_amount": "1"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_delete_requires_reason_and_is_soft(self) -> None:
        entry = self._entry(self.staff)
        url = reverse("revenue-detail", args=[entry.pk])
        self.client.force_authenticate(self.staff)

        missing = self.client.delete(url, {}, format="json")
        deleted = self.client.delete(url, {"reason": "Entered twice"}, format="json")

        self.assertEqual(missing.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)
        entry.refresh_from_db()
        self.assertTrue(entry.is_deleted)
        self.assertEqual(entry.delete_reason, "Entered twice")
        self.assertEqual(entry.deleted_by, self.staff)
        self.assertEqual(self.client.get(self.list_url).data, [])

    def test_summary_totals(self) -> None:
        self._entry(self.staff, customers_served=2)
        self._entry(self.staff, customers_served=5, cash=Decimal("5000"), bank=Decimal("0"), card=Decimal("0"))
        self.client.force_authenticate(self.staff)

        response = self.client.get(reverse("revenue-summary"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["entries"], 2)
        self.assertEqual(response.data["customers_served"], 7)
        self.assertEqual(response.data["total"], Decimal("65000"))

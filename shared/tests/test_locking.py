"""Tests for the row locking helper."""

from __future__ import annotations

import pytest
from django.db import transaction

from apps.services.models import Service
from shared.infrastructure.locking import lock_queryset_if_possible


@pytest.mark.django_db(transaction=True)
def test_outside_atomic_block_queryset_is_untouched():
    qs = Service.objects.all()

    assert lock_queryset_if_possible(qs) is qs


@pytest.mark.django_db
def test_inside_atomic_block_rows_are_locked():
    with transaction.atomic():
        qs = lock_queryset_if_possible(Service.objects.all())

    assert qs.query.select_for_update

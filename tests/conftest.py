"""Shared fixtures for the Pillmate test suite."""

from datetime import date, time

import pytest
from rest_framework.test import APIClient

from medication.models import Medicine
from medication.services.doses import register_prescription

TODAY = date(2024, 4, 15)


@pytest.fixture
def member(django_user_model):
    return django_user_model.objects.create_user(username="member", password="secret")


@pytest.fixture
def other_member(django_user_model):
    return django_user_model.objects.create_user(username="other", password="secret")


@pytest.fixture
def medicine():
    return Medicine.objects.create(name="Tylenol", classification="Analgesics")


@pytest.fixture
def make_medicine():
    def _make(name, classification=""):
        return Medicine.objects.create(name=name, classification=classification)

    return _make


@pytest.fixture
def prescribe():
    """Register a prescription that starts on TODAY unless told otherwise."""

    def _prescribe(member, medicine, slots=((9, 0),), amount=1, day=10, start_date=TODAY):
        return register_prescription(
            member,
            medicine,
            amount=amount,
            day=day,
            time_slots=[time(h, m) for h, m in slots],
            start_date=start_date,
        )

    return _prescribe


@pytest.fixture
def api_client(member):
    client = APIClient()
    client.force_authenticate(user=member)
    return client

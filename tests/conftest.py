"""
Shared fixtures for the WealthFlow test suite.

Owners, API and page clients, plus small factories for clients and ad spend
so each test only spells out the numbers it cares about.
"""

from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from clients.models import Client
from clients.services import create_ad_spend

PASSWORD = "correct-horse-battery"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _test_settings(settings):
    settings.AXES_ENABLED = False
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


# ---------------------------------------------------------------------------
# Owners and clients
# ---------------------------------------------------------------------------

@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(
        email="owner@example.com", password=PASSWORD, business_name="Mingalar Ads"
    )


@pytest.fixture
def other_owner(django_user_model):
    return django_user_model.objects.create_user(email="other@example.com", password=PASSWORD)


@pytest.fixture
def api(owner):
    client = APIClient()
    client.force_authenticate(user=owner)
    return client


@pytest.fixture
def web(client, owner):
    client.force_login(owner, backend="django.contrib.auth.backends.ModelBackend")
    return client


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_client(owner):
    def _make(name="Shwe Cafe", fee_type=Client.PERCENT_OF_SPEND, fee_percent="15", fixed="0", for_owner=None):
        return Client.objects.create(
            owner=for_owner or owner,
            name=name,
            fee_type=fee_type,
            fee_percent=Decimal(fee_percent),
            fixed_monthly_thb=Decimal(fixed),
        )

    return _make


@pytest.fixture
def add_spend(owner):
    def _add(client, spend, rate, on=date(2025, 1, 15)):
        result = create_ad_spend(client.owner, client.pk, on, spend, rate)
        assert result.ok, result.message
        return result.data

    return _add

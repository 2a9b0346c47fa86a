"""Pytest configuration and fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from credit_app.models import Credit, Customer

VALID_CPF = "64030983065"
OTHER_VALID_CPF = "64577405024"


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def build_customer():
    """Unsaved Customer with sensible defaults; override any field by keyword."""
    def _build(**overrides) -> Customer:
        fields = {
            "first_name": "Customer",
            "last_name": "Mock",
            "cpf": VALID_CPF,
            "email": "e@mail.com",
            "income": Decimal("1000.00"),
            "password": "password",
            "zip_code": "123456",
            "street": "Rua Tal",
        }
        fields.update(overrides)
        return Customer(**fields)
    return _build


@pytest.fixture
def saved_customer(db, build_customer) -> Customer:
    customer = build_customer()
    customer.save()
    return customer


@pytest.fixture
def build_credit(today):
    def _build(customer, **overrides) -> Credit:
        fields = {
            "credit_value": Decimal("500.00"),
            "day_first_installment": today + timedelta(days=3),
            "number_of_installments": 5,
            "customer": customer,
        }
        fields.update(overrides)
        return Credit(**fields)
    return _build


@pytest.fixture
def customer_payload() -> dict:
    return {
        "first_name": "Customer",
        "last_name": "Dto",
        "cpf": VALID_CPF,
        "email": "e@mail.com",
        "income": "1000.00",
        "password": "password",
        "zip_code": "123456",
        "street": "Rua Tal",
    }

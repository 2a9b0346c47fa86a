"""Endpoint tests for /api/customers."""

import pytest
from django.contrib.auth.hashers import check_password

from credit_app.models import Customer
from tests.conftest import OTHER_VALID_CPF

pytestmark = pytest.mark.django_db

URL = "/api/customers"


def assert_error_body(body: dict, status: int, title: str, exception: str) -> None:
    assert body["title"] == title
    assert body["timestamp"]
    assert body["status"] == status
    assert body["exception"] == exception
    assert body["details"]


class TestSaveCustomer:

    def test_returns_201_and_customer(self, api_client, customer_payload) -> None:
        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 201
        body = response.json()
        for field in ("first_name", "last_name", "cpf", "email", "income", "zip_code", "street"):
            assert body[field] == customer_payload[field]
        assert "password" not in body
        assert Customer.objects.filter(pk=body["id"]).exists()

    def test_password_is_stored_hashed(self, api_client, customer_payload) -> None:
        response = api_client.post(URL, customer_payload, format="json")

        stored = Customer.objects.get(pk=response.json()["id"]).password
        assert stored != "password"
        assert check_password("password", stored)

    def test_existing_cpf_returns_409(self, api_client, customer_payload, build_customer) -> None:
        build_customer(email="another@email.com").save()

        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 409
        assert_error_body(
            response.json(), 409, "Conflict! Consult the documentation", "django.db.utils.IntegrityError"
        )

    def test_existing_email_returns_409(self, api_client, customer_payload, build_customer) -> None:
        build_customer(cpf=OTHER_VALID_CPF).save()

        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 409
        assert response.json()["details"]["cause"]

    def test_empty_first_name_returns_400(self, api_client, customer_payload) -> None:
        customer_payload["first_name"] = ""

        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 400
        body = response.json()
        assert_error_body(
            body, 400, "Bad Request! Consult the documentation",
            "rest_framework.exceptions.ValidationError",
        )
        assert "first_name" in body["details"]

    def test_invalid_cpf_returns_400(self, api_client, customer_payload) -> None:
        customer_payload["cpf"] = "12345678900"

        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 400
        assert response.json()["details"]["cpf"] == "Invalid CPF"

    def test_negative_income_returns_400(self, api_client, customer_payload) -> None:
        customer_payload["income"] = "-1.00"

        response = api_client.post(URL, customer_payload, format="json")

        assert response.status_code == 400
        assert "income" in response.json()["details"]


class TestFindCustomer:

    def test_returns_200_and_customer(self, api_client, saved_customer) -> None:
        response = api_client.get(f"{URL}/{saved_customer.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == saved_customer.id
        assert body["first_name"] == "Customer"
        assert body["cpf"] == saved_customer.cpf
        assert body["email"] == saved_customer.email
        assert body["income"] == "1000.00"
        assert body["zip_code"] == saved_customer.zip_code
        assert body["street"] == saved_customer.street

    def test_unknown_id_returns_400(self, api_client) -> None:
        response = api_client.get(f"{URL}/0")

        assert response.status_code == 400
        body = response.json()
        assert_error_body(
            body, 400, "Bad Request! Consult the documentation", "credit_app.exceptions.NotFoundError"
        )
        assert body["details"] == {"not_found": "Id 0 not found"}


class TestDeleteCustomer:

    def test_returns_204(self, api_client, saved_customer) -> None:
        response = api_client.delete(f"{URL}/{saved_customer.id}")

        assert response.status_code == 204
        assert not Customer.objects.filter(pk=saved_customer.id).exists()

    def test_unknown_id_returns_400(self, api_client) -> None:
        response = api_client.delete(f"{URL}/0")

        assert response.status_code == 400
        assert response.json()["exception"] == "credit_app.exceptions.NotFoundError"


class TestUpdateCustomer:

    def test_returns_200_and_updated_customer(self, api_client, saved_customer) -> None:
        response = api_client.patch(
            f"{URL}?customer_id={saved_customer.id}", {"last_name": "Edited"}, format="json"
        )

        assert response.status_code == 200
        body = response.json()
        assert body["last_name"] == "Edited"
        assert body["first_name"] == saved_customer.first_name
        assert body["cpf"] == saved_customer.cpf
        assert body["email"] == saved_customer.email
        assert body["income"] == "1000.00"
        assert body["zip_code"] == saved_customer.zip_code
        assert body["street"] == saved_customer.street

    def test_full_patch(self, api_client, saved_customer) -> None:
        patch = {
            "first_name": "Customer",
            "last_name": "Update",
            "income": "2500.50",
            "zip_code": "654321",
            "street": "Rua Outra",
        }

        response = api_client.patch(f"{URL}?customer_id={saved_customer.id}", patch, format="json")

        assert response.status_code == 200
        for field, value in patch.items():
            assert response.json()[field] == value

    def test_cpf_and_email_are_not_patchable(self, api_client, saved_customer) -> None:
        response = api_client.patch(
            f"{URL}?customer_id={saved_customer.id}",
            {"cpf": OTHER_VALID_CPF, "email": "new@mail.com"},
            format="json",
        )

        assert response.status_code == 200
        reloaded = Customer.objects.get(pk=saved_customer.id)
        assert reloaded.cpf == saved_customer.cpf
        assert reloaded.email == saved_customer.email

    def test_unknown_id_returns_400(self, api_client, saved_customer) -> None:
        response = api_client.patch(f"{URL}?customer_id=0", {"last_name": "Edited"}, format="json")

        assert response.status_code == 400
        assert response.json()["exception"] == "credit_app.exceptions.NotFoundError"

    def test_missing_customer_id_returns_400(self, api_client) -> None:
        response = api_client.patch(URL, {"last_name": "Edited"}, format="json")

        assert response.status_code == 400
        assert "customer_id" in response.json()["details"]


def test_unsupported_method_uses_error_body(api_client) -> None:
    response = api_client.put(URL, {}, format="json")

    assert response.status_code == 405
    body = response.json()
    assert body["title"] == "Method Not Allowed! Consult the documentation"
    assert body["exception"] == "rest_framework.exceptions.MethodNotAllowed"
    assert body["details"]


def test_out_of_range_id_returns_400(api_client) -> None:
    response = api_client.get(f"{URL}/99999999999999999999999")

    assert response.status_code == 400
    assert response.json()["exception"] == "credit_app.exceptions.NotFoundError"

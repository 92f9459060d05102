"""Тесты API сохраненных адресов."""

import pytest

from user.services import AddressService

ADDRESSES_URL = "/api/v1/auth/users/me/addresses"
ORDERS_URL = "/api/v1/order/orders"


@pytest.fixture
def saved_address(user, shipping):
    return AddressService.create_address(user, **{**shipping, "address_type": "work"})


@pytest.mark.django_db
class TestAddressAPI:
    """Тесты адресов текущего пользователя."""

    def test_create_and_list(self, client, shipping, auth_headers):
        response = client.post(
            ADDRESSES_URL, shipping, content_type="application/json", **auth_headers
        )

        assert response.status_code == 201
        created = response.json()
        assert created["country"] == "India"

        response = client.get(ADDRESSES_URL, **auth_headers)

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == [created["id"]]

    def test_list_only_own(self, client, other_user, shipping, auth_headers):
        AddressService.create_address(other_user, **shipping)

        response = client.get(ADDRESSES_URL, **auth_headers)

        assert response.json() == []

    def test_create_invalid(self, client, shipping, auth_headers):
        response = client.post(
            ADDRESSES_URL,
            {**shipping, "phone1": "12"},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 400

    def test_update(self, client, saved_address, auth_headers):
        response = client.patch(
            f"{ADDRESSES_URL}/{saved_address.pk}",
            {"city": "Mumbai"},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["city"] == "Mumbai"
        assert data["state"] == "Maharashtra"

    def test_update_foreign(self, client, other_user, shipping, auth_headers):
        address = AddressService.create_address(other_user, **shipping)

        response = client.patch(
            f"{ADDRESSES_URL}/{address.pk}",
            {"city": "Mumbai"},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 404

    def test_requires_auth(self, client, db):
        assert client.get(ADDRESSES_URL).status_code == 401


@pytest.mark.django_db
class TestCheckoutWithSavedAddress:
    """Тесты оформления заказа на сохраненный адрес."""

    def test_checkout(self, client, product, saved_address, auth_headers):
        response = client.post(
            ORDERS_URL,
            {"product_id": product.id, "address_id": saved_address.pk},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 201
        order = response.json()["order"]
        assert order["full_name"] == "Asha Verma"
        assert order["address_type"] == "work"

    def test_explicit_fields_override(
        self, client, product, saved_address, auth_headers
    ):
        response = client.post(
            ORDERS_URL,
            {
                "product_id": product.id,
                "address_id": saved_address.pk,
                "city": "Nashik",
            },
            content_type="application/json",
            **auth_headers,
        )

        assert response.json()["order"]["city"] == "Nashik"

    def test_foreign_address(
        self, client, product, other_user, shipping, auth_headers
    ):
        address = AddressService.create_address(other_user, **shipping)

        response = client.post(
            ORDERS_URL,
            {"product_id": product.id, "address_id": address.pk},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 404

    def test_missing_shipping(self, client, product, auth_headers):
        """Тест: без адреса и без полей доставки заказ не создается."""
        response = client.post(
            ORDERS_URL,
            {"product_id": product.id},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 400

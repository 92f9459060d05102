"""Общие фикстуры тестов: пользователи, товар, заказы и JWT заголовки."""

import uuid
from decimal import Decimal

import pytest
from django.core.cache import cache

from api.v1.auth.jwt import create_tokens
from catalog.models import Product
from order.models import Order
from user.services import UserService

TEST_PASSWORD = "Str0ng-Pass-2024"

SHIPPING = {
    "full_name": "Asha Verma",
    "phone1": "+919876543210",
    "state": "Maharashtra",
    "city": "Pune",
    "pin_code": "411001",
    "address": "12 MG Road",
    "address_type": "home",
}


@pytest.fixture(autouse=True)
def clear_cache():
    """Отметки обновляемых заказов и лимиты запросов хранятся в кэше."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def payu_settings(settings):
    settings.PAYU_KEY = "test-key"
    settings.PAYU_SALT = "test-salt"
    settings.PAYU_SUCCESS_URL = "https://api.example.com/api/v1/order/payments/payu"
    settings.PAYU_FAILURE_URL = "https://api.example.com/api/v1/order/payments/payu"
    settings.FRONTEND_URL = "https://shop.example.com"
    return settings


@pytest.fixture
def user(db):
    """Создание покупателя для тестов."""
    suffix = uuid.uuid4().hex[:8]
    return UserService.create_user(
        username=f"customer_{suffix}",
        email=f"customer_{suffix}@example.com",
        password=TEST_PASSWORD,
        first_name="Asha",
    )


@pytest.fixture
def other_user(db):
    suffix = uuid.uuid4().hex[:8]
    return UserService.create_user(
        username=f"other_{suffix}",
        email=f"other_{suffix}@example.com",
        password=TEST_PASSWORD,
    )


@pytest.fixture
def staff_user(db):
    """Создание сотрудника магазина."""
    suffix = uuid.uuid4().hex[:8]
    return UserService.create_user(
        username=f"staff_{suffix}",
        email=f"staff_{suffix}@example.com",
        password=TEST_PASSWORD,
        is_staff=True,
    )


@pytest.fixture
def product(db):
    return Product.objects.create(
        name="Cotton Kurta",
        title="Cotton Kurta, indigo",
        sku="KRT-001",
        price=Decimal("1299.00"),
        selling_price=Decimal("999.00"),
        description="Hand block printed cotton kurta",
        product_image=[
            "https://cdn.example.com/kurta-1.jpg",
            "https://cdn.example.com/kurta-2.jpg",
        ],
        quantity=10,
    )


@pytest.fixture
def shipping():
    """Адрес доставки для оформления заказа."""
    return dict(SHIPPING)


@pytest.fixture
def make_order(db, user, product):
    """Фабрика заказов с сырыми значениями status и payment_status."""

    def _make_order(status="pending", payment_status=None, owner=None, **kwargs):
        fields = {
            "user": owner or user,
            "product": product,
            "quantity": 1,
            "total_amount": product.selling_price,
            "status": status,
            "payment_status": payment_status,
            **SHIPPING,
        }
        fields.update(kwargs)
        return Order.objects.create(**fields)

    return _make_order


@pytest.fixture
def order(make_order):
    """Оплаченный заказ, ожидающий подтверждения."""
    return make_order(status="pending", payment_status="paid")


def _auth_headers(user):
    token = create_tokens(user.id)["access_token"]
    return {"HTTP_AUTHORIZATION": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    return _auth_headers(user)


@pytest.fixture
def staff_headers(staff_user):
    return _auth_headers(staff_user)


@pytest.fixture
def password():
    return TEST_PASSWORD

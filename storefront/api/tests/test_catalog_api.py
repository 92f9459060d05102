"""Тесты API каталога."""

from decimal import Decimal

import pytest

from catalog.models import Category, Product, ProductSpecification

PRODUCTS_URL = "/api/v1/catalog/products"
CATEGORIES_URL = "/api/v1/catalog/categories"
SEARCH_URL = "/api/v1/catalog/search"


@pytest.fixture
def category(product):
    category = Category.objects.create(name="Ethnic Wear")
    product.category = category
    product.save()
    return category


@pytest.fixture
def scarf(db):
    return Product.objects.create(
        name="Silk Scarf",
        sku="SCF-002",
        price=Decimal("450.00"),
        selling_price=Decimal("400.00"),
        description="Printed silk",
        quantity=0,
    )


@pytest.mark.django_db
class TestProductAPI:
    """Тесты витрины товаров."""

    def test_list(self, client, category, product, scarf):
        response = client.get(PRODUCTS_URL)

        assert response.status_code == 200
        data = response.json()
        assert [p["sku"] for p in data] == ["KRT-001", "SCF-002"]
        assert data[0]["category"] == "Ethnic Wear"
        assert data[0]["main_image"] == "https://cdn.example.com/kurta-1.jpg"
        assert data[1]["in_stock"] is False

    def test_list_by_category(self, client, category, product, scarf):
        response = client.get(PRODUCTS_URL, {"category": "ethnic wear"})

        assert [p["sku"] for p in response.json()] == ["KRT-001"]

    def test_detail(self, client, product):
        ProductSpecification.objects.create(product=product, key="Fabric", value="Cotton")

        response = client.get(f"{PRODUCTS_URL}/{product.id}")

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["selling_price"]) == Decimal("999.00")
        assert data["specifications"] == [{"key": "Fabric", "value": "Cotton"}]

    def test_detail_not_found(self, client, db):
        assert client.get(f"{PRODUCTS_URL}/999999").status_code == 404

    def test_search(self, client, product, scarf):
        response = client.get(SEARCH_URL, {"q": "print"})

        assert response.status_code == 200
        assert {p["sku"] for p in response.json()} == {"KRT-001", "SCF-002"}

    def test_search_max_price(self, client, product, scarf):
        response = client.get(SEARCH_URL, {"q": "print", "max_price": "500"})

        assert [p["sku"] for p in response.json()] == ["SCF-002"]

    def test_search_empty(self, client, db):
        """Тест: пустая строка поиска дает 400."""
        response = client.get(SEARCH_URL, {"q": "  "})

        assert response.status_code == 400


@pytest.mark.django_db
class TestCategoryAPI:
    """Тесты категорий."""

    def test_list(self, client, category):
        response = client.get(CATEGORIES_URL)

        assert [c["name"] for c in response.json()] == ["Ethnic Wear"]

    def test_category_products(self, client, category, scarf):
        response = client.get(f"{CATEGORIES_URL}/ethnic%20wear")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Ethnic Wear"
        assert [p["sku"] for p in data["products"]] == ["KRT-001"]

    def test_category_not_found(self, client, db):
        assert client.get(f"{CATEGORIES_URL}/Footwear").status_code == 404

    def test_create(self, client, staff_headers):
        response = client.post(
            CATEGORIES_URL,
            {"name": " Footwear "},
            content_type="application/json",
            **staff_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Footwear"
        assert Category.objects.filter(name="Footwear").exists()

    def test_create_duplicate(self, client, category, staff_headers):
        response = client.post(
            CATEGORIES_URL,
            {"name": "ethnic wear"},
            content_type="application/json",
            **staff_headers,
        )

        assert response.status_code == 409

    def test_create_requires_staff(self, client, auth_headers):
        """Тест: покупатель не может добавлять категории."""
        response = client.post(
            CATEGORIES_URL,
            {"name": "Footwear"},
            content_type="application/json",
            **auth_headers,
        )

        assert response.status_code == 403
        assert not Category.objects.exists()

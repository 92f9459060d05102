import logging
from typing import List

from django.db import IntegrityError
from ninja import Query, Router

from catalog.models import Category, Product

from ..auth.jwt import admin_auth
from ..exceptions import ConflictAPIError, NotFoundAPIError, ValidationAPIError
from .schemas import (
    CategoryCreate,
    CategoryOut,
    CategoryProductsOut,
    ProductDetailOut,
    ProductOut,
    ProductSearchFilters,
)

logger = logging.getLogger(__name__)

router = Router(tags=["catalog"])


@router.get(
    "/products",
    response=List[ProductOut],
    summary="Список товаров",
    description="Все товары витрины, при необходимости только одной категории",
)
def list_products(request, category: str | None = None):
    queryset = Product.objects.select_related("category")
    if category:
        queryset = queryset.in_category(category)
    return queryset


@router.get(
    "/products/{product_id}",
    response=ProductDetailOut,
    summary="Товар",
    description="Товар с характеристиками",
)
def get_product(request, product_id: int):
    product = (
        Product.objects.select_related("category")
        .prefetch_related("specifications")
        .filter(pk=product_id)
        .first()
    )
    if product is None:
        raise NotFoundAPIError("Товар не найден")
    return product


@router.get(
    "/search",
    response=List[ProductOut],
    summary="Поиск товаров",
    description="Поиск по названию, заголовку и описанию с фильтром по цене",
)
def search_products(request, filters: Query[ProductSearchFilters]):
    if not filters.q.strip():
        raise ValidationAPIError("Строка поиска не может быть пустой")
    return Product.objects.select_related("category").search(
        filters.q, max_price=filters.max_price
    )


@router.get(
    "/categories",
    response=List[CategoryOut],
    summary="Список категорий",
)
def list_categories(request):
    return Category.objects.all()


@router.get(
    "/categories/{name}",
    response=CategoryProductsOut,
    summary="Товары категории",
    description="Категория по названию вместе с ее товарами",
)
def get_category(request, name: str):
    category = Category.objects.filter(name__iexact=name.strip()).first()
    if category is None:
        raise NotFoundAPIError("Категория не найдена")
    return category


@router.post(
    "/categories",
    response={201: CategoryOut},
    auth=admin_auth,
    summary="Создание категории",
    description="Добавление категории сотрудником магазина",
)
def create_category(request, data: CategoryCreate):
    name = data.name.strip()
    if not name:
        raise ValidationAPIError("Название категории не может быть пустым")
    if Category.objects.filter(name__iexact=name).exists():
        raise ConflictAPIError("Категория с таким названием уже существует")
    try:
        category = Category.objects.create(name=name)
    except IntegrityError:
        raise ConflictAPIError("Категория с таким названием уже существует")
    logger.info("Сотрудник %s добавил категорию %s", request.auth.username, name)
    return 201, category

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ninja import Field, Schema


class CategoryOut(Schema):
    id: int
    name: str
    created_at: datetime


class CategoryCreate(Schema):
    name: str = Field(..., min_length=1, max_length=100, description="Название категории")


class SpecificationOut(Schema):
    key: str
    value: str


class ProductOut(Schema):
    """Схема товара для витрины."""

    id: int = Field(..., description="ID товара")
    name: str
    title: str = ""
    sku: str
    category: Optional[str] = Field(None, description="Название категории")
    price: Decimal
    selling_price: Decimal = Field(..., description="Цена продажи")
    description: str = ""
    product_image: List[str] = []
    main_image: Optional[str] = None
    quantity: int = Field(..., description="Остаток на складе")
    in_stock: bool

    @staticmethod
    def resolve_category(obj):
        return obj.category.name if obj.category else None


class ProductDetailOut(ProductOut):
    specifications: List[SpecificationOut] = []

    @staticmethod
    def resolve_specifications(obj):
        return list(obj.specifications.all())


class CategoryProductsOut(CategoryOut):
    """Категория вместе с ее товарами."""

    products: List[ProductOut] = []

    @staticmethod
    def resolve_products(obj):
        return list(obj.products.select_related("category"))


class ProductSearchFilters(Schema):
    q: str = Field(..., description="Строка поиска")
    max_price: Optional[Decimal] = Field(None, ge=0, description="Максимальная цена")

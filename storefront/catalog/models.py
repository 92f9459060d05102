"""Модели для приложения catalog."""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Category(models.Model):
    """Категория товаров."""

    name = models.CharField(max_length=100, unique=True, verbose_name="Название")
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Дата создания")

    class Meta:
        verbose_name = "Категория"
        verbose_name_plural = "Категории"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ProductQuerySet(models.QuerySet):
    def in_category(self, name):
        """Товары категории по ее названию (без учета регистра)."""
        return self.filter(category__name__iexact=str(name).strip())

    def search(self, text, max_price=None):
        """
        Поиск по названию, заголовку и описанию.

        Args:
            text: Строка поиска
            max_price: Максимальная цена (поле price), если указана
        """
        text = str(text).strip()
        queryset = self.filter(
            Q(name__icontains=text)
            | Q(title__icontains=text)
            | Q(description__icontains=text)
        )
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)
        return queryset


class Product(models.Model):
    """Товар магазина. Используется заказами для отображения и учета остатков."""

    name = models.CharField(max_length=255, verbose_name="Название")
    title = models.CharField(max_length=255, blank=True, verbose_name="Заголовок")
    sku = models.CharField(max_length=64, unique=True, verbose_name="Артикул")
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
        verbose_name="Категория",
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="Цена",
    )
    selling_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name="Цена продажи",
    )
    description = models.TextField(blank=True, verbose_name="Описание")
    product_image = models.JSONField(
        default=list, blank=True, verbose_name="Изображения"
    )
    quantity = models.PositiveIntegerField(default=0, verbose_name="Остаток")

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = "Товар"
        verbose_name_plural = "Товары"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    @property
    def main_image(self):
        """Первое изображение товара или None."""
        return self.product_image[0] if self.product_image else None

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


class ProductSpecification(models.Model):
    """Характеристика товара (ключ и значение)."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="specifications",
        verbose_name="Товар",
    )
    key = models.CharField(max_length=100, verbose_name="Характеристика")
    value = models.CharField(max_length=255, verbose_name="Значение")

    class Meta:
        verbose_name = "Характеристика товара"
        verbose_name_plural = "Характеристики товара"
        ordering = ["id"]

    def __str__(self):
        return f"{self.key}: {self.value}"

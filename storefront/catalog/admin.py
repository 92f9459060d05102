"""Модуль для админки каталога."""

from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html

from .models import Category, Product, ProductSpecification


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "display_products", "created_at")
    search_fields = ("name",)
    ordering = ("name",)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(products_count=Count("products"))

    def display_products(self, obj):
        """Количество товаров со ссылкой на список товаров категории."""
        if not obj.products_count:
            return "-"
        return format_html(
            '<a href="/admin/catalog/product/?category__id__exact={}">{}</a>',
            obj.pk,
            obj.products_count,
        )

    display_products.short_description = "Товары"


class ProductSpecificationInline(admin.TabularInline):
    model = ProductSpecification
    extra = 1


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "sku",
        "category",
        "price",
        "selling_price",
        "display_stock",
    )
    list_filter = ("category",)
    search_fields = ("name", "title", "sku")
    ordering = ("name",)
    list_select_related = ("category",)
    inlines = [ProductSpecificationInline]

    def display_stock(self, obj):
        """Остаток товара, красным если товар закончился."""
        color = "green" if obj.in_stock else "red"
        return format_html('<span style="color: {};">{}</span>', color, obj.quantity)

    display_stock.short_description = "Остаток"

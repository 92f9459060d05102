"""Модуль для админки пользователей."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import Address, User


class AddressInline(admin.StackedInline):
    model = Address
    extra = 0
    fields = (
        ("full_name", "address_type"),
        ("phone1", "phone2"),
        ("country", "state", "city", "pin_code"),
        "address",
    )


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Административный интерфейс для модели User."""

    list_display = (
        "username",
        "email",
        "phone",
        "is_active",
        "display_orders",
        "created_at",
    )
    list_filter = ("is_active", "is_staff", "created_at")
    search_fields = ("username", "email", "phone")
    ordering = ("-created_at",)

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            "Персональная информация",
            {"fields": ("first_name", "last_name", "email", "phone")},
        ),
        (
            "Права доступа",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (
            "Важные даты",
            {"fields": ("last_login", "date_joined", "created_at")},
        ),
    )
    readonly_fields = ("last_login", "date_joined", "created_at")
    inlines = [AddressInline]
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "password1", "password2", "phone"),
            },
        ),
    )

    def display_orders(self, obj):
        """Ссылка на заказы пользователя."""
        count = obj.orders.count()
        if not count:
            return "-"
        return format_html(
            '<a href="/admin/order/order/?user__id__exact={}">{}</a>', obj.pk, count
        )

    display_orders.short_description = "Заказы"

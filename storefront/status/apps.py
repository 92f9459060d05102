"""Конфигурация приложения status."""

from django.apps import AppConfig


class StatusConfig(AppConfig):
    """Конфигурация приложения status."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "status"
    verbose_name = "Статусы заказов"

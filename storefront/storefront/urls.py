"""Конфигурация URL маршрутов проекта storefront.

Этот модуль определяет основные URL маршруты проекта:
- Административный интерфейс
- API endpoints
"""

from django.contrib import admin
from django.urls import path

from api.v1.router import api

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", api.urls),
]

"""Фикстуры интеграционных тестов: HTTP клиент поверх тестового клиента Django."""

from urllib.parse import urlsplit

import pytest
from django.test import Client

from client.api_client import StorefrontClient

BASE_URL = "http://testserver/api/v1"


class DjangoResponse:
    """Ответ тестового клиента Django в виде, который ожидает StorefrontClient."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self.content = response.content

    def json(self):
        return self._response.json()


class DjangoSession:
    """Замена requests.Session, которая отправляет запросы в тестовый клиент Django."""

    def __init__(self):
        self.headers = {}
        self.client = Client()

    def request(self, method, url, timeout=None, params=None, json=None):
        path = urlsplit(url).path
        extra = {}
        if "Authorization" in self.headers:
            extra["HTTP_AUTHORIZATION"] = self.headers["Authorization"]

        handler = getattr(self.client, method.lower())
        if method == "GET":
            response = handler(path, params or {}, **extra)
        else:
            response = handler(
                path, json or {}, content_type="application/json", **extra
            )
        return DjangoResponse(response)


@pytest.fixture
def api_client_factory(db):
    def _factory():
        return StorefrontClient(BASE_URL, session=DjangoSession())

    return _factory

"""
HTTP клиент API магазина.

Клиент выполняет те же вызовы, что и экраны магазина: загрузку заказов,
изменение статуса заказа сотрудником и отмену заказа покупателем.

Примеры использования:
    client = StorefrontClient("https://shop.example.com/api/v1")
    client.login("admin", "password")
    page = client.get_admin_orders(status="ongoing", page=2)
    client.update_order_status(order_id, "delivered")

Примечания:
    - Сетевые ошибки вызывают ClientError без кода ответа
    - Ответы 4xx/5xx вызывают ClientError с кодом ответа и сообщением сервера
    - Успешный ответ с телом не в формате JSON вызывает ClientError без сообщения
    - Повторы запросов не выполняются
"""

import logging

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class ClientError(Exception):
    """Ошибка вызова API."""

    def __init__(self, status_code: int | None = None, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message or f"HTTP {status_code}")

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and self.status_code >= 500


class StorefrontClient:
    """Клиент REST API магазина на requests.Session."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        if token:
            self.set_token(token)

    def set_token(self, token: str) -> None:
        self.session.headers["Authorization"] = f"Bearer {token}"

    @staticmethod
    def _extract_message(response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("detail")
            if isinstance(message, str):
                return message
        return None

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("Нет ответа от %s %s: %s", method, url, e)
            raise ClientError(None, str(e)) from e

        if not response.ok:
            message = self._extract_message(response)
            logger.warning(
                "Ошибка %s %s: %s %s", method, url, response.status_code, message
            )
            raise ClientError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(
                "Ответ %s %s не является JSON: %s", method, url, response.status_code
            )
            raise ClientError(response.status_code, None) from e

    def login(self, username: str, password: str) -> dict:
        """Получить токены и использовать access токен для следующих запросов."""
        tokens = self._request(
            "POST", "auth/token", json={"username": username, "password": password}
        )
        self.set_token(tokens["access_token"])
        return tokens

    def get_orders(self) -> list:
        return self._request("GET", "order/orders")

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"order/orders/{order_id}")

    def get_admin_orders(
        self,
        status: str | None = None,
        sort: str = "newest",
        page: int = 1,
        size: int = 20,
    ) -> dict:
        params = {"sort": sort, "page": page, "size": size}
        if status:
            params["status"] = status
        return self._request("GET", "order/admin/orders", params=params)

    def update_order_status(self, order_id: str, status: str) -> dict:
        return self._request(
            "PATCH", f"order/admin/orders/{order_id}/status", json={"status": status}
        )

    def cancel_order(self, order_id: str) -> dict:
        return self._request("POST", f"order/orders/{order_id}/cancel")

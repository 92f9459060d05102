"""
Ошибки API магазина.

Каждая ошибка отдается клиенту как {"detail": сообщение} с кодом ответа.
Клиент показывает пользователю сообщение сервера для кодов 4xx и общий
текст для 5xx, поэтому сообщения 4xx пишутся для покупателя и сотрудника.

Коды ответов:
    - 400: Недопустимое действие или некорректные данные
    - 401: Нет токена или токен невалиден
    - 403: Эндпоинт только для сотрудников магазина
    - 404: Заказ или товар не найден (или принадлежит другому покупателю)
    - 409: Обновление заказа уже выполняется
    - 429: Превышен лимит запросов
"""

from ninja.errors import HttpError


class APIError(HttpError):
    """Базовый класс для API ошибок."""

    default_detail = "Произошла ошибка"
    status_code = 500

    def __init__(self, message: str | None = None):
        super().__init__(self.status_code, message or self.default_detail)


class ValidationAPIError(APIError):
    default_detail = "Ошибка валидации данных"
    status_code = 400


class NotFoundAPIError(APIError):
    default_detail = "Запрашиваемый ресурс не найден"
    status_code = 404


class AuthenticationAPIError(APIError):
    default_detail = "Ошибка аутентификации"
    status_code = 401


class PermissionAPIError(APIError):
    default_detail = "Действие доступно только сотрудникам магазина"
    status_code = 403


class ConflictAPIError(APIError):
    default_detail = "Конфликт при обработке данных"
    status_code = 409


class OrderUpdateConflictAPIError(ConflictAPIError):
    """Статус заказа уже изменяется другим запросом."""

    default_detail = "Заказ уже обновляется, попробуйте позже"


class RateLimitAPIError(APIError):
    default_detail = "Превышен лимит запросов"
    status_code = 429

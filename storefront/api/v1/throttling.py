from functools import wraps

from django.core.cache import cache

from .exceptions import RateLimitAPIError


def _client_key(request) -> str:
    user = getattr(request, "auth", None)
    if user is not None and getattr(user, "pk", None) is not None:
        return f"user:{user.pk}"
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{request.META.get('REMOTE_ADDR', 'unknown')}"


def rate_limit(calls: int = 100, period: int = 3600):
    """
    Декоратор для ограничения количества запросов к API.

    Args:
        calls: Максимальное количество запросов
        period: Период в секундах (по умолчанию 1 час)

    Raises:
        RateLimitAPIError: Если превышен лимит запросов

    Example:
        @router.post("/orders/{order_id}/cancel", auth=auth)
        @rate_limit(calls=30, period=60)
        def cancel_order(request, order_id: str):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(request, *args, **kwargs):
            key = f"ratelimit:{_client_key(request)}:{func.__name__}"

            # Счетчик создается с временем жизни period при первом запросе
            if cache.add(key, 1, period):
                calls_made = 1
            else:
                try:
                    calls_made = cache.incr(key)
                except ValueError:
                    # Ключ истек между add и incr
                    cache.add(key, 1, period)
                    calls_made = 1

            if calls_made > calls:
                raise RateLimitAPIError(
                    f"Превышен лимит запросов. "
                    f"Максимум {calls} запросов за {period} секунд."
                )

            return func(request, *args, **kwargs)

        return wrapper

    return decorator

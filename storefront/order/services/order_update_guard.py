"""
Отметки о выполняющихся обновлениях заказов.

Для каждого заказа одновременно может выполняться только одно обновление
статуса. Обновления разных заказов друг другу не мешают.

Отметки хранятся в кэше Django: cache.add атомарно записывает ключ, только
если его еще нет. У отметки есть время жизни, поэтому упавший запрос не
блокирует заказ навсегда.

Примеры использования:
    guard = OrderUpdateGuard()
    with guard.hold(order.order_id):
        ...

    guard.is_updating(order.order_id)
"""

import logging
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 30


class OrderUpdateInProgress(Exception):
    """Обновление этого заказа уже выполняется."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__(f"Заказ {order_id} уже обновляется")


class OrderUpdateGuard:
    """Набор идентификаторов заказов, обновление которых выполняется сейчас."""

    key_prefix = "order-update"

    def __init__(self, timeout: int | None = None, cache_alias: str = "default"):
        if timeout is None:
            timeout = getattr(settings, "ORDER_UPDATE_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT)
        self.timeout = timeout
        self.cache = caches[cache_alias]

    def _key(self, order_id) -> str:
        return f"{self.key_prefix}:{order_id}"

    def acquire(self, order_id) -> bool:
        """Отметить заказ как обновляемый. False, если отметка уже есть."""
        acquired = self.cache.add(self._key(order_id), True, self.timeout)
        if not acquired:
            logger.warning("Заказ %s уже обновляется", order_id)
        return acquired

    def release(self, order_id) -> None:
        self.cache.delete(self._key(order_id))

    def is_updating(self, order_id) -> bool:
        return self.cache.get(self._key(order_id)) is not None

    def updating_ids(self, order_ids) -> set:
        """Выбрать из списка заказы, которые сейчас обновляются."""
        keys = {self._key(order_id): order_id for order_id in order_ids}
        found = self.cache.get_many(list(keys))
        return {keys[key] for key in found}

    @contextmanager
    def hold(self, order_id):
        """
        Удерживать отметку на время обновления заказа.

        Raises:
            OrderUpdateInProgress: Если заказ уже обновляется
        """
        if not self.acquire(order_id):
            raise OrderUpdateInProgress(order_id)
        try:
            yield
        finally:
            self.release(order_id)

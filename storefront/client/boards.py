"""
Состояние экранов заказов на стороне клиента.

AdminOrderBoard повторяет экран администратора: список заказов, кнопки
действий и отметки заказов, которые сейчас обновляются.
CustomerOrderBoard повторяет экран "Мои заказы": отображение статуса,
трекер заказа и отмену.

Примечания:
    - Ошибки вызовов API не выходят за пределы методов досок, а
      превращаются в текст в поле error
    - Локальный статус заказа меняется только после успешного ответа
    - Повторы выполняет пользователь, доска их не делает
"""

import logging
import threading
from datetime import datetime, timezone

from status.constants import CANCELLED_STORED_VALUE, StatusAction
from status.services.normalizer import get_effective_status
from status.services.presenter import present_status
from status.services.progress import project_progress
from status.services.transition_policy import (
    DEFAULT_CANCELLATION_WINDOW,
    can_cancel,
    get_action_status,
    get_available_actions,
    is_action_allowed,
)

from .api_client import ClientError
from .errors import describe_error

logger = logging.getLogger(__name__)

UPDATE_IN_PROGRESS_MESSAGE = "Order is already being updated."
ACTION_NOT_ALLOWED_MESSAGE = "This action is not available for the order."
ORDER_NOT_FOUND_MESSAGE = "Order not found."
STATUS_UPDATED_MESSAGE = "Order status updated."
ORDER_CANCELLED_MESSAGE = "Order cancelled."


def parse_datetime(value) -> datetime | None:
    """
    Разобрать дату из ответа API. Дата без часового пояса считается UTC.

    Некорректная дата дает None.
    """
    if value is None or isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            logger.warning("Некорректная дата в ответе API: %r", value)
            return None
    if parsed is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class _OrderBoard:
    """Общая часть досок: список заказов и текст последней ошибки."""

    def __init__(self, client, *, unpaid_pending_is_failed: bool = True):
        self.client = client
        self.unpaid_pending_is_failed = unpaid_pending_is_failed
        self.orders = []
        self.error = None
        self.success = None
        self.updating = set()
        self._lock = threading.Lock()

    def _fetch(self):
        raise NotImplementedError

    def load(self) -> bool:
        """
        Загрузить заказы.

        Ответ 404 означает, что заказов нет.

        Returns:
            bool: True если список загружен
        """
        self.error = None
        try:
            self.orders = self._fetch()
        except ClientError as e:
            if e.status_code == 404:
                self.orders = []
                return True
            logger.warning("Не удалось загрузить заказы: %s", e)
            self.error = describe_error(e)
            return False
        return True

    def get_order(self, order_id):
        return next(
            (order for order in self.orders if order["order_id"] == order_id), None
        )

    def effective_status(self, order):
        return get_effective_status(
            order.get("status"),
            order.get("payment_status"),
            unpaid_pending_is_failed=self.unpaid_pending_is_failed,
        )

    def display(self, order):
        return present_status(self.effective_status(order))

    def is_updating(self, order_id) -> bool:
        return order_id in self.updating

    def _mark_updating(self, order_id) -> bool:
        with self._lock:
            if order_id in self.updating:
                return False
            self.updating.add(order_id)
            return True

    def _clear_updating(self, order_id) -> None:
        with self._lock:
            self.updating.discard(order_id)


class AdminOrderBoard(_OrderBoard):
    """Экран заказов администратора."""

    def __init__(
        self,
        client,
        *,
        status=None,
        sort="newest",
        page=1,
        size=20,
        unpaid_pending_is_failed: bool = True,
    ):
        super().__init__(client, unpaid_pending_is_failed=unpaid_pending_is_failed)
        self.status = status
        self.sort = sort
        self.page = page
        self.size = size
        self.count = 0
        self.pages = 0

    def _fetch(self):
        data = self.client.get_admin_orders(
            status=self.status, sort=self.sort, page=self.page, size=self.size
        )
        self.count = data.get("count", 0)
        self.pages = data.get("pages", 0)
        return list(data.get("items", []))

    def action_status(self, order):
        return get_action_status(order.get("status"), order.get("payment_status"))

    def actions_for(self, order) -> list:
        """Кнопки действий для заказа с учетом выполняемого обновления."""
        return get_available_actions(
            self.action_status(order),
            updating=self.is_updating(order["order_id"]),
        )

    def update_status(self, order_id, action) -> bool:
        """
        Изменить статус заказа.

        Пока обновление заказа выполняется, повторное обновление того же
        заказа отклоняется. Обновления разных заказов не мешают друг другу.

        Returns:
            bool: True если статус изменен
        """
        self.error = None
        self.success = None

        order = self.get_order(order_id)
        if order is None:
            self.error = ORDER_NOT_FOUND_MESSAGE
            return False
        if self.is_updating(order_id):
            self.error = UPDATE_IN_PROGRESS_MESSAGE
            return False
        if not is_action_allowed(self.action_status(order), action):
            self.error = ACTION_NOT_ALLOWED_MESSAGE
            return False
        if not self._mark_updating(order_id):
            self.error = UPDATE_IN_PROGRESS_MESSAGE
            return False

        action = StatusAction(action)
        try:
            self.client.update_order_status(order_id, action.value)
        except ClientError as e:
            logger.warning(
                "Не удалось изменить статус заказа %s на %s: %s", order_id, action, e
            )
            self.error = describe_error(e)
            return False
        finally:
            self._clear_updating(order_id)

        order["status"] = action.value
        self.success = STATUS_UPDATED_MESSAGE
        logger.info("Статус заказа %s изменен на %s", order_id, action)
        return True


class CustomerOrderBoard(_OrderBoard):
    """Экран "Мои заказы"."""

    def __init__(
        self,
        client,
        *,
        cancellation_window=DEFAULT_CANCELLATION_WINDOW,
        unpaid_pending_is_failed: bool = True,
    ):
        super().__init__(client, unpaid_pending_is_failed=unpaid_pending_is_failed)
        self.cancellation_window = cancellation_window

    def _fetch(self):
        return list(self.client.get_orders())

    def progress(self, order):
        return project_progress(
            order.get("status"),
            order.get("payment_status"),
            unpaid_pending_is_failed=self.unpaid_pending_is_failed,
        )

    def can_cancel(self, order, now=None) -> bool:
        if self.is_updating(order["order_id"]):
            return False
        return can_cancel(
            order.get("status"),
            order.get("payment_status"),
            parse_datetime(order.get("created_at")),
            now=now or datetime.now(timezone.utc),
            window=self.cancellation_window,
            unpaid_pending_is_failed=self.unpaid_pending_is_failed,
        )

    def cancel(self, order_id, now=None) -> bool:
        """
        Отменить заказ.

        Returns:
            bool: True если заказ отменен
        """
        self.error = None
        self.success = None

        order = self.get_order(order_id)
        if order is None:
            self.error = ORDER_NOT_FOUND_MESSAGE
            return False
        if self.is_updating(order_id):
            self.error = UPDATE_IN_PROGRESS_MESSAGE
            return False
        if not self.can_cancel(order, now=now):
            self.error = ACTION_NOT_ALLOWED_MESSAGE
            return False
        if not self._mark_updating(order_id):
            self.error = UPDATE_IN_PROGRESS_MESSAGE
            return False

        try:
            self.client.cancel_order(order_id)
        except ClientError as e:
            logger.warning("Не удалось отменить заказ %s: %s", order_id, e)
            self.error = describe_error(e)
            return False
        finally:
            self._clear_updating(order_id)

        order["status"] = CANCELLED_STORED_VALUE
        self.success = ORDER_CANCELLED_MESSAGE
        logger.info("Заказ %s отменен покупателем", order_id)
        return True

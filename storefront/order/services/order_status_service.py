"""
Сервис для управления статусами заказов.

Этот модуль выполняет изменения статуса заказа, которые инициируют
администратор (действия confirm, ongoing, delivered, rto, reject) и
покупатель (отмена заказа).

Основные компоненты:
    - OrderStatusService: Основной класс для работы со статусами заказов
    - update_status: Действие администратора над одним заказом
    - update_many: Действие администратора над несколькими заказами
    - cancel_order: Отмена заказа покупателем

Процесс изменения статуса:
    1. Отметка заказа как обновляемого (OrderUpdateGuard)
    2. Блокировка строки заказа (select_for_update)
    3. Проверка действия по статусу заказа (get_action_status)
    4. Запись значения действия в поле status
    5. Снятие отметки, в том числе при ошибке

Примеры использования:
    service = OrderStatusService()
    service.update_status(order_id, "confirm")
    service.cancel_order(order_id, user=request.user)

Примечания:
    - В поле status записывается само значение действия ("confirm", "reject"),
      нормализатор сводит их к каноническим кодам
    - Недопустимые переходы вызывают ValidationError, заказ не меняется
    - Повторное обновление заказа во время выполнения первого вызывает
      OrderUpdateInProgress
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from status.constants import CANCELLED_STORED_VALUE, StatusAction
from status.services.presenter import present_status
from status.services.transition_policy import is_action_allowed

from ..models import Order
from .order_update_guard import OrderUpdateGuard, OrderUpdateInProgress

logger = logging.getLogger(__name__)


class OrderStatusService:
    """Сервис для работы со статусами заказов."""

    def __init__(self, guard: OrderUpdateGuard | None = None):
        self.guard = guard or OrderUpdateGuard()

    @staticmethod
    def parse_action(action) -> StatusAction:
        """
        Привести значение действия к StatusAction.

        Raises:
            ValidationError: Если действие неизвестно
        """
        try:
            return StatusAction(str(action).strip().lower())
        except ValueError:
            raise ValidationError(f"Неизвестное действие '{action}'")

    def update_status(self, order_id, action) -> Order:
        """
        Выполнить действие администратора над заказом.

        Args:
            order_id: Номер заказа
            action: Действие (confirm, ongoing, delivered, rto, reject)

        Returns:
            Order: Обновленный заказ

        Raises:
            Order.DoesNotExist: Если заказ не найден
            OrderUpdateInProgress: Если заказ уже обновляется
            ValidationError: Если действие недопустимо для статуса заказа
        """
        action = self.parse_action(action)

        with self.guard.hold(order_id):
            with transaction.atomic():
                order = Order.objects.select_for_update().get(pk=order_id)
                effective_status = order.effective_status

                if not is_action_allowed(order.action_status, action):
                    error_msg = (
                        f"Действие '{action}' недопустимо для заказа {order_id} "
                        f"в статусе '{present_status(effective_status).label}'"
                    )
                    logger.warning(error_msg)
                    raise ValidationError(error_msg)

                old_status = order.status
                order.status = action.value
                order.save(update_fields=["status", "updated_at"])

        logger.info(
            "Статус заказа %s изменен: %s -> %s", order_id, old_status, order.status
        )
        return order

    def update_many(self, order_ids, action) -> dict:
        """
        Выполнить действие над несколькими заказами.

        Каждый заказ обновляется независимо, ошибка одного заказа не
        отменяет изменения остальных.

        Returns:
            dict: Номер заказа -> None при успехе или текст ошибки
        """
        results = {}
        for order_id in order_ids:
            try:
                self.update_status(order_id, action)
                results[order_id] = None
            except Order.DoesNotExist:
                results[order_id] = "Заказ не найден"
            except OrderUpdateInProgress as e:
                results[order_id] = str(e)
            except ValidationError as e:
                results[order_id] = "; ".join(e.messages)
        return results

    def cancel_order(self, order_id, user=None, now=None) -> Order:
        """
        Отменить заказ по запросу покупателя.

        Args:
            order_id: Номер заказа
            user: Покупатель; если указан, заказ ищется только среди его заказов
            now: Текущее время для проверки окна отмены

        Raises:
            Order.DoesNotExist: Если заказ не найден
            OrderUpdateInProgress: Если заказ уже обновляется
            ValidationError: Если заказ нельзя отменить
        """
        with self.guard.hold(order_id):
            with transaction.atomic():
                queryset = Order.objects.all()
                if user is not None:
                    queryset = queryset.for_user(user)
                order = queryset.select_for_update().get(pk=order_id)

                if not order.can_cancel(now=now):
                    logger.warning("Заказ %s нельзя отменить", order_id)
                    raise ValidationError("Этот заказ больше нельзя отменить")

                order.status = CANCELLED_STORED_VALUE
                order.save(update_fields=["status", "updated_at"])

        logger.info("Заказ %s отменен покупателем", order_id)
        return order

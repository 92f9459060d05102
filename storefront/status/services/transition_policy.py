"""
Политика переходов между статусами заказа.

Этот модуль определяет, какие действия администратора доступны для заказа
в текущем эффективном статусе, и может ли покупатель отменить заказ.

Основные компоненты:
    - ActionState: Действие и признак его доступности
    - get_action_status: Статус, по которому выбираются действия администратора
    - get_available_actions: Список действий для эффективного статуса
    - is_action_allowed: Проверка одного действия
    - get_target_status: Статус, в который переводит действие
    - can_cancel: Проверка возможности отмены заказа покупателем

Правила переходов:
    - pending -> confirm, reject
    - confirmed -> ongoing, delivered, rto, reject
    - ongoing -> delivered, rto, reject
    - rejected, delivered, rto -> нет действий (конечные статусы)
    - cancelled, payment_failed и неизвестные статусы -> нет действий
    - Действие, соответствующее текущему статусу, никогда не предлагается
    - Пока обновление заказа выполняется, все его действия недоступны
    - Неоплаченный pending-заказ отображается как payment_failed, но для
      действий остается pending: администратор может подтвердить или
      отклонить его. Явная ошибка оплаты (failed) действий не дает

Примеры использования:
    get_available_actions(OrderStatusCode.PENDING)
    # [ActionState(CONFIRM, True), ActionState(REJECT, True)]

    can_cancel("confirmed", "paid", order.created_at)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from django.utils import timezone

from ..constants import (
    ACTION_TARGET_STATUS,
    NON_CANCELLABLE_STATUSES,
    ORDER_STATUS_TRANSITIONS,
    OrderStatusCode,
    StatusAction,
)
from .normalizer import get_effective_status

DEFAULT_CANCELLATION_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class ActionState:
    """Действие администратора и признак его доступности."""

    action: StatusAction
    enabled: bool

    def as_dict(self) -> dict:
        return {"action": self.action.value, "enabled": self.enabled}


def get_action_status(raw_status, raw_payment_status=None) -> OrderStatusCode | str:
    """
    Получить статус, по которому выбираются действия администратора.

    Совпадает с эффективным статусом, кроме неоплаченного pending-заказа:
    он отображается как payment_failed, а действия для него те же, что
    у pending.
    """
    return get_effective_status(
        raw_status, raw_payment_status, unpaid_pending_is_failed=False
    )


def get_available_actions(effective_status, *, updating: bool = False) -> list:
    """
    Получить действия администратора для эффективного статуса.

    Args:
        effective_status: Результат get_effective_status
        updating: Выполняется ли сейчас обновление этого заказа

    Returns:
        list[ActionState]: Действия в порядке отображения кнопок
    """
    actions = ORDER_STATUS_TRANSITIONS.get(effective_status, ())
    return [
        ActionState(action=action, enabled=not updating)
        for action in actions
        if ACTION_TARGET_STATUS[action] != effective_status
    ]


def is_action_allowed(effective_status, action) -> bool:
    """Проверить, допустимо ли действие из текущего эффективного статуса."""
    try:
        action = StatusAction(action)
    except ValueError:
        return False
    return any(
        state.action == action for state in get_available_actions(effective_status)
    )


def get_target_status(action) -> OrderStatusCode:
    """
    Получить статус, в который переводит действие.

    Raises:
        ValueError: Если действие неизвестно
    """
    return ACTION_TARGET_STATUS[StatusAction(action)]


def can_cancel(
    raw_status,
    raw_payment_status,
    created_at: datetime,
    *,
    now: datetime | None = None,
    window: timedelta = DEFAULT_CANCELLATION_WINDOW,
    unpaid_pending_is_failed: bool = True,
) -> bool:
    """
    Проверить, может ли покупатель отменить заказ.

    Отмена возможна только в течение окна отмены после создания заказа
    и только из неконечных статусов.

    Args:
        raw_status: Значение поля status
        raw_payment_status: Значение поля payment_status
        created_at: Дата и время создания заказа
        now: Текущее время (по умолчанию timezone.now())
        window: Длительность окна отмены

    Returns:
        bool: True если кнопку отмены нужно показать
    """
    if created_at is None:
        return False
    now = now or timezone.now()
    if now - created_at >= window:
        return False

    effective_status = get_effective_status(
        raw_status,
        raw_payment_status,
        unpaid_pending_is_failed=unpaid_pending_is_failed,
    )
    return effective_status not in NON_CANCELLABLE_STATUSES

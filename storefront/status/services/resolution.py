"""
Сводное представление статуса заказа.

Объединяет нормализацию, отображение, действия администратора и трекер
в один объект, который пересчитывается при каждом вызове из сырых полей
заказа.

Примеры использования:
    resolution = resolve_order_status("pending", "paid")
    resolution.effective_status    # OrderStatusCode.CONFIRMED
    resolution.display.label       # "Confirmed"
    resolution.progress.current_index  # 1
"""

from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings

from .normalizer import get_effective_status
from .presenter import StatusPresentation, present_status
from .progress import ProgressProjection, project_progress
from .transition_policy import (
    DEFAULT_CANCELLATION_WINDOW,
    get_action_status,
    get_available_actions,
)


def get_unpaid_pending_is_failed() -> bool:
    """Настройка: считать ли неоплаченный pending-заказ заказом с неуспешной оплатой."""
    return getattr(settings, "ORDER_UNPAID_PENDING_IS_FAILED", True)


def get_cancellation_window() -> timedelta:
    """Окно отмены заказа покупателем из настройки ORDER_CANCELLATION_WINDOW_HOURS."""
    hours = getattr(settings, "ORDER_CANCELLATION_WINDOW_HOURS", None)
    if hours is None:
        return DEFAULT_CANCELLATION_WINDOW
    return timedelta(hours=hours)


@dataclass(frozen=True)
class StatusResolution:
    """Эффективный статус заказа и все производные от него данные."""

    effective_status: str
    display: StatusPresentation
    progress: ProgressProjection
    available_actions: list

    def as_dict(self) -> dict:
        return {
            "effective_status": str(self.effective_status),
            "display": self.display.as_dict(),
            "progress": self.progress.as_dict(),
            "available_actions": [a.as_dict() for a in self.available_actions],
        }


def resolve_order_status(
    raw_status,
    raw_payment_status=None,
    *,
    updating: bool = False,
    unpaid_pending_is_failed: bool | None = None,
) -> StatusResolution:
    """
    Вычислить эффективный статус и производные данные.

    Args:
        raw_status: Значение поля status
        raw_payment_status: Значение поля payment_status
        updating: Выполняется ли сейчас обновление заказа
        unpaid_pending_is_failed: Переопределение настройки
            ORDER_UNPAID_PENDING_IS_FAILED

    Returns:
        StatusResolution: Статус, оформление, трекер и действия
    """
    if unpaid_pending_is_failed is None:
        unpaid_pending_is_failed = get_unpaid_pending_is_failed()

    effective_status = get_effective_status(
        raw_status,
        raw_payment_status,
        unpaid_pending_is_failed=unpaid_pending_is_failed,
    )
    return StatusResolution(
        effective_status=effective_status,
        display=present_status(effective_status),
        progress=project_progress(
            raw_status,
            raw_payment_status,
            unpaid_pending_is_failed=unpaid_pending_is_failed,
        ),
        available_actions=get_available_actions(
            get_action_status(raw_status, raw_payment_status), updating=updating
        ),
    )

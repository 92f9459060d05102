"""
Трекер заказа для покупателя.

Модуль выбирает последовательность шагов трекера и позицию заказа в ней
по эффективному статусу заказа.

Последовательности шагов:
    - Оплата не прошла: Pending -> Payment Failed (позиция 1)
    - Оплачен, ожидает обработки: Pending -> Confirmed -> On the Way -> Delivered (1)
    - Отменен: Pending -> Cancelled (1)
    - Отклонен: Pending -> Rejected (1)
    - Возврат отправителю: Pending -> ... -> Delivered -> RTO (4)
    - Обычный путь: Pending -> Confirmed -> On the Way -> Delivered (0..3)

Примечания:
    - Неизвестный статус дает обычный путь с позицией 0
    - Заполнение полосы прогресса = позиция / (число шагов - 1)
"""

from dataclasses import dataclass

from ..constants import OrderStatusCode, StatusGroupCode
from .initial_data import ORDER_STATUS_CONFIG
from .normalizer import get_effective_status

_CONFIG = ORDER_STATUS_CONFIG[StatusGroupCode.ORDER.value]
DEFAULT_PATH = "default"


@dataclass(frozen=True)
class ProgressStep:
    """Шаг трекера заказа."""

    code: str
    label: str
    icon: str
    color: str


@dataclass(frozen=True)
class ProgressProjection:
    """Последовательность шагов трекера и текущая позиция в ней."""

    steps: tuple
    current_index: int

    @property
    def fill_ratio(self) -> float:
        """Доля заполнения полосы прогресса от 0 до 1."""
        if len(self.steps) < 2:
            return 0.0
        return self.current_index / (len(self.steps) - 1)

    @property
    def current_step(self) -> ProgressStep:
        return self.steps[self.current_index]

    def as_dict(self) -> dict:
        return {
            "steps": [
                {"code": s.code, "label": s.label, "icon": s.icon, "color": s.color}
                for s in self.steps
            ],
            "current_index": self.current_index,
            "fill_ratio": self.fill_ratio,
        }


def _build_path(path_code: str) -> tuple:
    return tuple(
        ProgressStep(code=code, **_CONFIG["progress_steps"][code])
        for code in _CONFIG["progress_paths"][path_code]
    )


_PATHS = {code: _build_path(code) for code in _CONFIG["progress_paths"]}

# Позиция на обычном пути для каждого эффективного статуса
_DEFAULT_PATH_INDEX = {
    OrderStatusCode.CONFIRMED: 1,
    OrderStatusCode.ONGOING: 2,
    OrderStatusCode.DELIVERED: 3,
}

# Пути, на которых заказ всегда стоит на последнем шаге
_TERMINAL_PATHS = {
    OrderStatusCode.PAYMENT_FAILED: "payment_failed",
    OrderStatusCode.CANCELLED: "cancelled",
    OrderStatusCode.REJECTED: "rejected",
    OrderStatusCode.RTO: "rto",
}


def project_progress(
    raw_status, raw_payment_status=None, *, unpaid_pending_is_failed: bool = True
) -> ProgressProjection:
    """
    Получить шаги трекера и текущую позицию заказа.

    Args:
        raw_status: Значение поля status
        raw_payment_status: Значение поля payment_status
        unpaid_pending_is_failed: Считать ли неоплаченный pending-заказ
            заказом с неуспешной оплатой

    Returns:
        ProgressProjection: Шаги и позиция
    """
    effective_status = get_effective_status(
        raw_status,
        raw_payment_status,
        unpaid_pending_is_failed=unpaid_pending_is_failed,
    )

    path_code = _TERMINAL_PATHS.get(effective_status)
    if path_code is not None:
        steps = _PATHS[path_code]
        return ProgressProjection(steps=steps, current_index=len(steps) - 1)

    return ProgressProjection(
        steps=_PATHS[DEFAULT_PATH],
        current_index=_DEFAULT_PATH_INDEX.get(effective_status, 0),
    )

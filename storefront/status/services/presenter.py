"""Отображение эффективных статусов заказа: подпись, цвет и иконка."""

from dataclasses import asdict, dataclass

from ..constants import OrderStatusCode, StatusGroupCode
from .initial_data import ORDER_STATUS_CONFIG
from .normalizer import get_effective_status, is_known_status

UNKNOWN_STATUS_COLOR = "gray"


@dataclass(frozen=True)
class StatusPresentation:
    """Оформление статуса для интерфейса."""

    label: str
    color: str
    icon: str | None

    def as_dict(self) -> dict:
        return asdict(self)


_STATUS_TABLE = {
    OrderStatusCode(status["code"]): StatusPresentation(
        label=status["name"], color=status["color"], icon=status["icon"]
    )
    for status in ORDER_STATUS_CONFIG[StatusGroupCode.ORDER.value]["status"]
}


def present_status(effective_status) -> StatusPresentation:
    """
    Получить оформление для эффективного статуса.

    Неизвестный статус отображается как есть, серым цветом и без иконки.

    Args:
        effective_status: Результат get_effective_status

    Returns:
        StatusPresentation: Подпись, цвет и иконка
    """
    if not is_known_status(effective_status):
        return StatusPresentation(
            label=str(effective_status), color=UNKNOWN_STATUS_COLOR, icon=None
        )
    return _STATUS_TABLE[OrderStatusCode(effective_status)]


def present_order(order, *, unpaid_pending_is_failed: bool = True) -> StatusPresentation:
    """Получить оформление статуса для объекта с полями status и payment_status."""
    return present_status(
        get_effective_status(
            order.status,
            getattr(order, "payment_status", None),
            unpaid_pending_is_failed=unpaid_pending_is_failed,
        )
    )


def get_status_filter_choices() -> list[tuple[str, str]]:
    """
    Получить варианты фильтра по статусу.

    pending и ongoing отображаются одинаково, поэтому в фильтре они
    объединены под кодом ongoing.

    Returns:
        list: Список кортежей (код_статуса, подпись)
    """
    statuses = sorted(
        ORDER_STATUS_CONFIG[StatusGroupCode.ORDER.value]["status"],
        key=lambda status: status["order"],
    )
    choices = []
    seen_labels = set()
    for status in statuses:
        if status["code"] == OrderStatusCode.PENDING:
            continue
        if status["name"] in seen_labels:
            continue
        seen_labels.add(status["name"])
        choices.append((status["code"], status["name"]))
    return choices

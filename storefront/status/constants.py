"""Константы для работы со статусами заказа."""

from enum import Enum

from .services.initial_data import ORDER_STATUS_CONFIG, PAYMENT_STATUS_CONFIG


class OrderStatusCode(str, Enum):
    """Канонические коды эффективных статусов заказа."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ONGOING = "ongoing"
    DELIVERED = "delivered"
    RTO = "rto"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    PAYMENT_FAILED = "payment_failed"

    def __str__(self):
        return self.value


class PaymentStatusCode(str, Enum):
    """Коды статусов оплаты."""

    PAID = "paid"
    FAILED = "failed"
    PENDING = "pending"

    def __str__(self):
        return self.value


class StatusAction(str, Enum):
    """Действия администратора над статусом заказа.

    Значение действия совпадает со значением, которое записывается
    в поле status заказа.
    """

    CONFIRM = "confirm"
    ONGOING = "ongoing"
    DELIVERED = "delivered"
    RTO = "rto"
    REJECT = "reject"

    def __str__(self):
        return self.value


class StatusGroupCode(str, Enum):
    """Коды групп статусов."""

    ORDER = "ORDER_STATUS_CONFIG"
    PAYMENT = "PAYMENT_STATUS_CONFIG"


_ORDER_CONFIG = ORDER_STATUS_CONFIG[StatusGroupCode.ORDER.value]
_PAYMENT_CONFIG = PAYMENT_STATUS_CONFIG[StatusGroupCode.PAYMENT.value]

# Сырое значение статуса -> канонический код
ORDER_STATUS_SYNONYMS = {
    synonym: OrderStatusCode(status["code"])
    for status in _ORDER_CONFIG["status"]
    for synonym in status["synonyms"]
}
PAYMENT_STATUS_SYNONYMS = {
    synonym: PaymentStatusCode(status["code"])
    for status in _PAYMENT_CONFIG["status"]
    for synonym in status["synonyms"]
}

DEFAULT_ORDER_STATUS = next(
    OrderStatusCode(status["code"])
    for status in _ORDER_CONFIG["status"]
    if status.get("is_default")
)

ACTION_TARGET_STATUS = {
    StatusAction.CONFIRM: OrderStatusCode.CONFIRMED,
    StatusAction.ONGOING: OrderStatusCode.ONGOING,
    StatusAction.DELIVERED: OrderStatusCode.DELIVERED,
    StatusAction.RTO: OrderStatusCode.RTO,
    StatusAction.REJECT: OrderStatusCode.REJECTED,
}

# Получаем переходы из конфигурации
ORDER_STATUS_TRANSITIONS = {
    OrderStatusCode(code): tuple(StatusAction(action) for action in actions)
    for code, actions in _ORDER_CONFIG["allowed_status_transitions"].items()
}

TERMINAL_STATUSES = frozenset(
    {OrderStatusCode.REJECTED, OrderStatusCode.DELIVERED, OrderStatusCode.RTO}
)

NON_CANCELLABLE_STATUSES = frozenset(
    {
        OrderStatusCode.DELIVERED,
        OrderStatusCode.CANCELLED,
        OrderStatusCode.REJECTED,
        OrderStatusCode.RTO,
        OrderStatusCode.PAYMENT_FAILED,
    }
)

# Значение, которое записывается в status при отмене покупателем
CANCELLED_STORED_VALUE = "cancelled"

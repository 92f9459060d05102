"""
Нормализация сырых статусов заказа.

Этот модуль сводит пару сырых полей заказа (status, payment_status) к одному
каноническому эффективному статусу. Все остальные части системы (отображение,
действия администратора, трекер заказа) работают только с результатом
нормализации и не сравнивают сырые строки сами.

Основные функции:
    - normalize_status: Приведение сырого статуса к каноническому коду
    - normalize_payment_status: Приведение статуса оплаты к коду
    - get_effective_status: Вычисление эффективного статуса заказа

Правила вычисления эффективного статуса:
    1. Оплата не прошла (failed) -> payment_failed, независимо от статуса
    2. pending и оплата прошла (success/paid) -> confirmed
    3. pending и оплаты нет -> payment_failed
       (или pending, если unpaid_pending_is_failed=False)
    4. Иначе -> нормализованный статус

Примеры использования:
    get_effective_status("Confirm", None)        # OrderStatusCode.CONFIRMED
    get_effective_status("pending", "success")   # OrderStatusCode.CONFIRMED
    get_effective_status("delivered", "failed")  # OrderStatusCode.PAYMENT_FAILED
    get_effective_status("On_Hold", None)        # "On_Hold"

Примечания:
    - Синонимы ищутся без учета регистра, а неизвестный статус возвращается
      как есть (без пробелов по краям), чтобы новые статусы бэкенда не ломали
      интерфейс
    - Результат никогда не записывается обратно в заказ
"""

from ..constants import (
    DEFAULT_ORDER_STATUS,
    ORDER_STATUS_SYNONYMS,
    PAYMENT_STATUS_SYNONYMS,
    OrderStatusCode,
    PaymentStatusCode,
)


def _fold(value) -> str:
    """Привести значение к нижнему регистру без пробелов по краям."""
    if value is None:
        return ""
    return str(value).strip().lower()


def normalize_status(raw_status) -> OrderStatusCode | str:
    """
    Привести сырой статус заказа к каноническому коду.

    Args:
        raw_status: Значение поля status в любом регистре

    Returns:
        OrderStatusCode | str: Канонический код или сам статус,
            если он неизвестен
    """
    folded = _fold(raw_status)
    if not folded:
        return DEFAULT_ORDER_STATUS
    return ORDER_STATUS_SYNONYMS.get(folded, str(raw_status).strip())


def normalize_payment_status(raw_payment_status) -> PaymentStatusCode | None:
    """
    Привести сырой статус оплаты к коду.

    Args:
        raw_payment_status: Значение поля payment_status

    Returns:
        PaymentStatusCode | None: Код статуса оплаты или None,
            если статус отсутствует или неизвестен
    """
    return PAYMENT_STATUS_SYNONYMS.get(_fold(raw_payment_status))


def get_effective_status(
    raw_status, raw_payment_status=None, *, unpaid_pending_is_failed: bool = True
) -> OrderStatusCode | str:
    """
    Вычислить эффективный статус заказа.

    Args:
        raw_status: Значение поля status
        raw_payment_status: Значение поля payment_status
        unpaid_pending_is_failed: Считать ли неоплаченный pending-заказ
            заказом с неуспешной оплатой

    Returns:
        OrderStatusCode | str: Эффективный статус для отображения и
            проверки действий
    """
    payment_status = normalize_payment_status(raw_payment_status)
    if payment_status == PaymentStatusCode.FAILED:
        return OrderStatusCode.PAYMENT_FAILED

    status = normalize_status(raw_status)
    if status == OrderStatusCode.PENDING:
        if payment_status == PaymentStatusCode.PAID:
            return OrderStatusCode.CONFIRMED
        if unpaid_pending_is_failed:
            return OrderStatusCode.PAYMENT_FAILED

    return status


def is_known_status(status) -> bool:
    """Проверить, является ли статус одним из канонических кодов."""
    try:
        OrderStatusCode(status)
    except ValueError:
        return False
    return True

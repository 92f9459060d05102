"""QuerySets для моделей order.

Фильтр по эффективному статусу повторяет правила нормализатора на уровне
базы данных, чтобы списки заказов можно было фильтровать и разбивать на
страницы без загрузки всех заказов в память.
"""

import logging

from django.db import models
from django.db.models import Q, Value
from django.db.models.functions import Coalesce, Lower, Trim

from status.constants import (
    DEFAULT_ORDER_STATUS,
    ORDER_STATUS_SYNONYMS,
    PAYMENT_STATUS_SYNONYMS,
    OrderStatusCode,
    PaymentStatusCode,
)

logger = logging.getLogger(__name__)

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_ORDERS = {SORT_NEWEST: "-created_at", SORT_OLDEST: "created_at"}


def _synonyms(mapping, code):
    return [raw for raw, target in mapping.items() if target == code]


class OrderQuerySet(models.QuerySet):
    """QuerySet для модели Order."""

    def for_user(self, user):
        return self.filter(user=user)

    def sorted_by_created(self, order: str = SORT_NEWEST):
        """Сортировка по дате создания: newest или oldest."""
        if order not in SORT_ORDERS:
            raise ValueError(f"Неизвестный порядок сортировки: {order}")
        return self.order_by(SORT_ORDERS[order], "order_id")

    def with_normalized_status(self):
        """Добавить к заказам статус и статус оплаты в нижнем регистре без пробелов."""
        return self.annotate(
            normalized_status=Lower(Trim(Coalesce("status", Value("")))),
            normalized_payment_status=Lower(
                Trim(Coalesce("payment_status", Value("")))
            ),
        )

    def with_effective_status(self, code, *, unpaid_pending_is_failed=None):
        """
        Отфильтровать заказы по эффективному статусу.

        Args:
            code: Код эффективного статуса (OrderStatusCode или строка)
            unpaid_pending_is_failed: Переопределение настройки
                ORDER_UNPAID_PENDING_IS_FAILED

        Returns:
            OrderQuerySet: Заказы с указанным эффективным статусом
        """
        return self._filter_effective_statuses([code], unpaid_pending_is_failed)

    def with_status_choice(self, choice):
        """
        Отфильтровать заказы по варианту фильтра статуса.

        Вариант ongoing объединяет pending и ongoing, так как они
        отображаются одинаково.
        """
        if not choice:
            return self
        codes = [choice]
        if str(choice).strip().lower() == OrderStatusCode.ONGOING:
            codes.append(OrderStatusCode.PENDING)
        return self._filter_effective_statuses(codes)

    def _filter_effective_statuses(self, codes, unpaid_pending_is_failed=None):
        if unpaid_pending_is_failed is None:
            from status.services.resolution import get_unpaid_pending_is_failed

            unpaid_pending_is_failed = get_unpaid_pending_is_failed()

        conditions = [
            _effective_status_condition(code, unpaid_pending_is_failed)
            for code in codes
        ]
        conditions = [condition for condition in conditions if condition is not None]
        if not conditions:
            return self.none()

        combined = conditions[0]
        for condition in conditions[1:]:
            combined |= condition
        return self.with_normalized_status().filter(combined)


def _effective_status_condition(code, unpaid_pending_is_failed):
    """Условие на нормализованные поля для одного эффективного статуса."""
    code = str(code).strip().lower()
    paid = Q(
        normalized_payment_status__in=_synonyms(
            PAYMENT_STATUS_SYNONYMS, PaymentStatusCode.PAID
        )
    )
    failed = Q(
        normalized_payment_status__in=_synonyms(
            PAYMENT_STATUS_SYNONYMS, PaymentStatusCode.FAILED
        )
    )
    pending_synonyms = _synonyms(ORDER_STATUS_SYNONYMS, DEFAULT_ORDER_STATUS)
    pending = Q(normalized_status__in=pending_synonyms + [""])

    def literal(target):
        return Q(normalized_status__in=_synonyms(ORDER_STATUS_SYNONYMS, target))

    if code == OrderStatusCode.PAYMENT_FAILED:
        condition = failed | literal(OrderStatusCode.PAYMENT_FAILED)
        if unpaid_pending_is_failed:
            condition |= pending & ~paid
        return condition
    if code == OrderStatusCode.CONFIRMED:
        return ~failed & (literal(OrderStatusCode.CONFIRMED) | (pending & paid))
    if code == OrderStatusCode.PENDING:
        if unpaid_pending_is_failed:
            return None
        return ~failed & pending & ~paid
    if code in ORDER_STATUS_SYNONYMS.values():
        return ~failed & literal(OrderStatusCode(code))
    return ~failed & Q(normalized_status=code)

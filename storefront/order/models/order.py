"""Модели для работы с заказами.

Этот модуль содержит модели для:
- Заказов
- Позиций заказа

Статус заказа хранится в двух сырых полях (status и payment_status) в том
виде, в котором их записали админка, покупатель и платежный шлюз.
Эффективный статус, оформление и трекер вычисляются из них при каждом
обращении и никогда не сохраняются.
"""

import logging
import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from status.services.normalizer import get_effective_status
from status.services.presenter import present_status
from status.services.progress import project_progress
from status.services.resolution import (
    get_cancellation_window,
    get_unpaid_pending_is_failed,
    resolve_order_status,
)
from status.services.transition_policy import can_cancel, get_action_status
from user.models import AddressType
from user.validators import PhoneNumberValidator, PinCodeValidator

from .querysets import OrderQuerySet

logger = logging.getLogger(__name__)


def generate_order_id() -> str:
    return str(uuid.uuid4())


class Order(models.Model):
    """Модель заказа."""

    order_id = models.CharField(
        "Номер заказа",
        primary_key=True,
        max_length=36,
        default=generate_order_id,
        editable=False,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        verbose_name="Пользователь",
        related_name="orders",
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        verbose_name="Товар",
        related_name="orders",
    )
    quantity = models.PositiveIntegerField("Количество", default=1)
    total_amount = models.DecimalField(
        "Сумма заказа",
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )

    # Адрес доставки
    full_name = models.CharField("Получатель", max_length=255)
    phone1 = models.CharField(
        "Телефон", max_length=20, validators=[PhoneNumberValidator()]
    )
    phone2 = models.CharField(
        "Дополнительный телефон",
        max_length=20,
        blank=True,
        default="",
        validators=[PhoneNumberValidator()],
    )
    state = models.CharField("Штат", max_length=100)
    city = models.CharField("Город", max_length=100)
    pin_code = models.CharField(
        "Индекс", max_length=6, validators=[PinCodeValidator()]
    )
    address = models.TextField("Адрес")
    address_type = models.CharField(
        "Тип адреса",
        max_length=10,
        choices=AddressType.choices,
        default=AddressType.HOME,
    )

    status = models.CharField(
        "Статус", max_length=32, default="pending", db_index=True
    )
    payment_status = models.CharField(
        "Статус оплаты", max_length=32, null=True, blank=True
    )
    payu_payment_id = models.CharField(
        "ID платежа PayU", max_length=64, null=True, blank=True
    )
    created_at = models.DateTimeField(
        "Дата создания", default=timezone.now, db_index=True
    )
    updated_at = models.DateTimeField("Дата изменения", auto_now=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        verbose_name = "Заказ"
        verbose_name_plural = "Заказы"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Заказ №{self.order_id} ({self.display.label})"

    @property
    def effective_status(self):
        """Эффективный статус заказа, вычисленный из сырых полей."""
        return get_effective_status(
            self.status,
            self.payment_status,
            unpaid_pending_is_failed=get_unpaid_pending_is_failed(),
        )

    @property
    def action_status(self):
        """Статус, по которому выбираются действия администратора."""
        return get_action_status(self.status, self.payment_status)

    @property
    def display(self):
        return present_status(self.effective_status)

    @property
    def progress(self):
        return project_progress(
            self.status,
            self.payment_status,
            unpaid_pending_is_failed=get_unpaid_pending_is_failed(),
        )

    def resolve_status(self, *, updating: bool = False):
        """Полное представление статуса: оформление, трекер и действия."""
        return resolve_order_status(
            self.status, self.payment_status, updating=updating
        )

    def can_cancel(self, now=None, window: timedelta | None = None) -> bool:
        """Может ли покупатель отменить заказ."""
        return can_cancel(
            self.status,
            self.payment_status,
            self.created_at,
            now=now,
            window=window or get_cancellation_window(),
            unpaid_pending_is_failed=get_unpaid_pending_is_failed(),
        )

    def delete(self, *args, **kwargs):
        """Заказы не удаляются, их можно только отклонить или отменить."""
        logger.warning("Попытка удаления заказа %s", self.order_id)
        raise ValidationError("Заказ нельзя удалить")


class OrderItem(models.Model):
    """Позиция заказа."""

    order = models.ForeignKey(
        Order, on_delete=models.CASCADE, related_name="items", verbose_name="Заказ"
    )
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
        verbose_name="Товар",
    )
    quantity = models.PositiveIntegerField("Количество", default=1)
    price = models.DecimalField("Цена", max_digits=10, decimal_places=2)

    class Meta:
        verbose_name = "Позиция заказа"
        verbose_name_plural = "Позиции заказа"

    def __str__(self):
        return f"{self.product} x {self.quantity}"

    @property
    def subtotal(self):
        return self.price * self.quantity

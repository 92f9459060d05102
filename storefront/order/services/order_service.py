"""Сервис оформления заказов."""

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from catalog.models import Product

from ..models import Order, OrderItem

logger = logging.getLogger(__name__)

SHIPPING_FIELDS = (
    "full_name",
    "phone1",
    "phone2",
    "state",
    "city",
    "pin_code",
    "address",
    "address_type",
)


class OrderService:
    """Сервис для создания заказов."""

    @staticmethod
    def validate_shipping(shipping: dict) -> dict:
        """
        Проверить набор полей адреса доставки.

        Raises:
            ValidationError: Если переданы неизвестные поля
        """
        unknown = set(shipping) - set(SHIPPING_FIELDS)
        if unknown:
            raise ValidationError(
                {"shipping": f"Неизвестные поля адреса: {', '.join(sorted(unknown))}"}
            )
        return {key: value for key, value in shipping.items() if value is not None}

    @staticmethod
    @transaction.atomic
    def create_order(user, product_id, quantity: int, shipping: dict) -> Order:
        """
        Оформить заказ на один товар.

        Остаток товара уменьшается в той же транзакции, в которой создается
        заказ. Новый заказ получает статус pending без статуса оплаты.

        Args:
            user: Покупатель
            product_id: ID товара
            quantity: Количество
            shipping: Адрес доставки (поля SHIPPING_FIELDS)

        Returns:
            Order: Созданный заказ

        Raises:
            Product.DoesNotExist: Если товар не найден
            ValidationError: Если количество или адрес некорректны
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": "Количество должно быть больше нуля"})

        shipping = OrderService.validate_shipping(shipping)
        product = Product.objects.select_for_update().get(pk=product_id)

        if product.quantity < quantity:
            logger.warning(
                "Недостаточно товара %s: запрошено %d, в наличии %d",
                product.sku,
                quantity,
                product.quantity,
            )
            raise ValidationError({"quantity": "Недостаточно товара на складе"})

        total_amount = (product.selling_price * quantity).quantize(Decimal("0.01"))
        order = Order(
            user=user,
            product=product,
            quantity=quantity,
            total_amount=total_amount,
            **shipping,
        )
        order.full_clean()
        order.save()

        OrderItem.objects.create(
            order=order, product=product, quantity=quantity, price=product.selling_price
        )
        Product.objects.filter(pk=product.pk).update(quantity=F("quantity") - quantity)

        logger.info(
            "Создан заказ %s (пользователь: %s, товар: %s, сумма: %s)",
            order.order_id,
            user.email,
            product.sku,
            total_amount,
        )
        return order

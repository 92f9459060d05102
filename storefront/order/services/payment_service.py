"""
Сервис оплаты заказов через PayU.

Основные компоненты:
    - PaymentService.build_checkout_params: Параметры формы оплаты для заказа
    - PaymentService.process_callback: Обработка ответа PayU

Подписи (SHA-512):
    - запрос: key|txnid|amount|productinfo|firstname|email|||||||||||salt
    - ответ: salt|status|||||||||||email|firstname|productinfo|amount|txnid|key

Примечания:
    - Номер транзакции строится как "USD_" + номер заказа
    - Ответ со status=success записывает payment_status=paid и ID платежа,
      любой другой ответ записывает payment_status=failed
    - Поле status заказа платежным шлюзом не меняется
"""

import hashlib
import hmac
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from status.constants import PaymentStatusCode

from ..models import Order

logger = logging.getLogger(__name__)

TXNID_PREFIX = "USD_"
PRODUCT_INFO = "USD_Payment"
CURRENCY = "USD"


class PaymentService:
    """Сервис для работы с платежами PayU."""

    def __init__(self, key: str | None = None, salt: str | None = None):
        self.key = key if key is not None else settings.PAYU_KEY
        self.salt = salt if salt is not None else settings.PAYU_SALT

    @staticmethod
    def _sha512(value: str) -> str:
        return hashlib.sha512(value.encode("utf-8")).hexdigest()

    def build_request_hash(self, txnid, amount, productinfo, firstname, email) -> str:
        parts = [self.key, txnid, amount, productinfo, firstname, email]
        return self._sha512("|".join(str(p) for p in parts) + "|" * 11 + self.salt)

    def build_response_hash(
        self, status, txnid, amount, productinfo, firstname, email
    ) -> str:
        tail = [email, firstname, productinfo, amount, txnid, self.key]
        return self._sha512(
            f"{self.salt}|{status}" + "|" * 11 + "|".join(str(p) for p in tail)
        )

    @staticmethod
    def get_txnid(order: Order) -> str:
        return f"{TXNID_PREFIX}{order.order_id}"

    @staticmethod
    def parse_order_id(txnid: str) -> str:
        return txnid.replace(TXNID_PREFIX, "", 1)

    def build_checkout_params(self, order: Order) -> dict:
        """Параметры формы оплаты PayU для нового заказа."""
        txnid = self.get_txnid(order)
        amount = f"{order.total_amount:.2f}"
        return {
            "key": self.key,
            "txnid": txnid,
            "amount": amount,
            "currency": CURRENCY,
            "productinfo": PRODUCT_INFO,
            "firstname": order.full_name,
            "email": order.user.email,
            "phone": order.phone1,
            "surl": settings.PAYU_SUCCESS_URL,
            "furl": settings.PAYU_FAILURE_URL,
            "hash": self.build_request_hash(
                txnid, amount, PRODUCT_INFO, order.full_name, order.user.email
            ),
        }

    def verify_response(self, data: dict) -> bool:
        expected = self.build_response_hash(
            data.get("status", ""),
            data.get("txnid", ""),
            data.get("amount", ""),
            data.get("productinfo", ""),
            data.get("firstname", ""),
            data.get("email", ""),
        )
        return hmac.compare_digest(expected, data.get("hash", ""))

    def process_callback(self, data: dict) -> Order:
        """
        Обработать ответ PayU и записать статус оплаты.

        Args:
            data: Поля формы ответа PayU

        Returns:
            Order: Заказ с обновленным статусом оплаты

        Raises:
            ValidationError: Если подпись ответа неверна
            Order.DoesNotExist: Если заказ не найден
        """
        if not self.verify_response(data):
            logger.error("Неверная подпись ответа PayU для %s", data.get("txnid"))
            raise ValidationError("Неверная подпись платежа")

        order_id = self.parse_order_id(data["txnid"])
        with transaction.atomic():
            order = Order.objects.select_for_update().get(pk=order_id)
            if data.get("status") == "success":
                order.payment_status = PaymentStatusCode.PAID.value
                order.payu_payment_id = data.get("mihpayid")
            else:
                order.payment_status = PaymentStatusCode.FAILED.value
            order.save(update_fields=["payment_status", "payu_payment_id", "updated_at"])

        logger.info(
            "Оплата заказа %s: %s (PayU: %s)",
            order_id,
            order.payment_status,
            order.payu_payment_id,
        )
        return order

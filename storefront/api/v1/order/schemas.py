from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ninja import Field, Schema

from ..status.schemas import ActionStateOut, ProgressOut, StatusDisplayOut


class OrderItemOut(Schema):
    product_id: Optional[int] = None
    quantity: int
    price: Decimal


class OrderOut(Schema):
    """Схема заказа для покупателя."""

    order_id: str = Field(..., description="Номер заказа")
    product_id: Optional[int] = Field(None, description="ID товара")
    product_name: Optional[str] = Field(None, description="Название товара")
    product_image: Optional[str] = Field(None, description="Изображение товара")
    quantity: int
    total_amount: Decimal = Field(..., description="Сумма заказа")
    full_name: str
    phone1: str
    phone2: str = ""
    state: str
    city: str
    pin_code: str
    address: str
    address_type: str
    status: str = Field(..., description="Статус заказа, как он сохранен")
    payment_status: Optional[str] = Field(None, description="Статус оплаты")
    payu_payment_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    effective_status: str = Field(..., description="Эффективный статус заказа")
    display: StatusDisplayOut
    progress: ProgressOut
    can_cancel: bool = Field(..., description="Можно ли отменить заказ")
    items: List[OrderItemOut] = []

    @staticmethod
    def resolve_product_name(obj):
        return obj.product.name if obj.product else None

    @staticmethod
    def resolve_product_image(obj):
        return obj.product.main_image if obj.product else None

    @staticmethod
    def resolve_effective_status(obj):
        return str(obj.effective_status)

    @staticmethod
    def resolve_display(obj):
        return obj.display.as_dict()

    @staticmethod
    def resolve_progress(obj):
        return obj.progress.as_dict()

    @staticmethod
    def resolve_can_cancel(obj):
        return obj.can_cancel()

    @staticmethod
    def resolve_items(obj):
        return list(obj.items.all())


class AdminOrderOut(OrderOut):
    """Схема заказа для сотрудника магазина."""

    user_id: int
    user_email: str
    updating: bool = Field(False, description="Выполняется ли обновление заказа")
    available_actions: List[ActionStateOut] = []

    @staticmethod
    def resolve_user_email(obj):
        return obj.user.email

    @staticmethod
    def resolve_updating(obj):
        return getattr(obj, "updating", False)

    @staticmethod
    def resolve_available_actions(obj):
        resolution = obj.resolve_status(updating=getattr(obj, "updating", False))
        return [state.as_dict() for state in resolution.available_actions]


class AdminOrderPage(Schema):
    items: List[AdminOrderOut]
    count: int
    page: int
    size: int
    pages: int


class OrderCreate(Schema):
    """Схема для оформления заказа."""

    product_id: int = Field(..., description="ID товара")
    quantity: int = Field(1, gt=0, description="Количество")
    address_id: Optional[int] = Field(
        None, description="ID сохраненного адреса; переданные поля адреса имеют приоритет"
    )
    full_name: Optional[str] = None
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pin_code: Optional[str] = None
    address: Optional[str] = None
    address_type: Optional[str] = None


class CheckoutOut(Schema):
    order: OrderOut
    payu_url: str
    params: dict


class StatusUpdateIn(Schema):
    status: str = Field(..., description="Действие: confirm, ongoing, delivered, rto, reject")


class PayUCallbackIn(Schema):
    txnid: str
    status: str
    hash: str
    mihpayid: Optional[str] = None
    amount: str = ""
    firstname: str = ""
    email: str = ""
    productinfo: str = ""

import logging
import math
from typing import List

from django.conf import settings
from django.http import HttpResponseRedirect
from ninja import Form, Query, Router, Schema

from catalog.models import Product
from order.models import Order
from order.models.querysets import SORT_NEWEST, SORT_ORDERS
from order.services.order_service import OrderService
from order.services.order_status_service import OrderStatusService
from order.services.order_update_guard import OrderUpdateGuard, OrderUpdateInProgress
from order.services.payment_service import PaymentService

from ..auth.jwt import admin_auth, auth
from ..exceptions import (
    NotFoundAPIError,
    OrderUpdateConflictAPIError,
    ValidationAPIError,
)
from ..throttling import rate_limit
from .schemas import (
    AdminOrderOut,
    AdminOrderPage,
    CheckoutOut,
    OrderCreate,
    OrderOut,
    PayUCallbackIn,
    StatusUpdateIn,
)

logger = logging.getLogger(__name__)

router = Router(tags=["orders"])

MAX_PAGE_SIZE = 100


class AdminOrderFilters(Schema):
    status: str | None = None
    sort: str = SORT_NEWEST
    page: int = 1
    size: int = 20


def _get_user_order(user, order_id: str) -> Order:
    order = (
        Order.objects.for_user(user)
        .select_related("product")
        .filter(pk=order_id)
        .first()
    )
    if order is None:
        raise NotFoundAPIError("Заказ не найден")
    return order


@router.get(
    "/orders",
    response=List[OrderOut],
    auth=auth,
    summary="Мои заказы",
    description="Список заказов текущего пользователя, новые первыми",
)
def list_orders(request):
    return (
        Order.objects.for_user(request.auth)
        .select_related("product")
        .prefetch_related("items")
        .sorted_by_created(SORT_NEWEST)
    )


@router.get(
    "/orders/{order_id}",
    response=OrderOut,
    auth=auth,
    summary="Детали заказа",
    description="Заказ текущего пользователя со статусом и трекером",
)
def get_order(request, order_id: str):
    return _get_user_order(request.auth, order_id)


@router.post(
    "/orders",
    response={201: CheckoutOut},
    auth=auth,
    summary="Оформление заказа",
    description="Создание заказа и параметров оплаты PayU",
)
@rate_limit(calls=30, period=60)
def create_order(request, order_data: OrderCreate):
    data = order_data.dict()
    product_id = data.pop("product_id")
    quantity = data.pop("quantity")
    address_id = data.pop("address_id")
    if address_id is not None:
        address = request.auth.addresses.filter(pk=address_id).first()
        if address is None:
            raise NotFoundAPIError("Адрес не найден")
        data = {
            **address.as_shipping(),
            **{key: value for key, value in data.items() if value is not None},
        }
    try:
        order = OrderService.create_order(request.auth, product_id, quantity, data)
    except Product.DoesNotExist:
        raise NotFoundAPIError("Товар не найден")

    return 201, {
        "order": order,
        "payu_url": settings.PAYU_BASE_URL,
        "params": PaymentService().build_checkout_params(order),
    }


@router.post(
    "/orders/{order_id}/cancel",
    response=OrderOut,
    auth=auth,
    summary="Отмена заказа",
    description="Отмена заказа покупателем в течение окна отмены",
)
@rate_limit(calls=30, period=60)
def cancel_order(request, order_id: str):
    try:
        OrderStatusService().cancel_order(order_id, user=request.auth)
    except Order.DoesNotExist:
        raise NotFoundAPIError("Заказ не найден")
    except OrderUpdateInProgress as e:
        raise OrderUpdateConflictAPIError(str(e))
    return _get_user_order(request.auth, order_id)


@router.post(
    "/payments/payu",
    summary="Ответ PayU",
    description="Прием результата оплаты и перенаправление на страницу заказа",
)
def payu_callback(request, data: Form[PayUCallbackIn]):
    try:
        order = PaymentService().process_callback(data.dict())
    except Order.DoesNotExist:
        raise NotFoundAPIError("Заказ не найден")
    return HttpResponseRedirect(
        f"{settings.FRONTEND_URL}/order-success?orderId={order.order_id}"
    )


@router.get(
    "/admin/orders",
    response=AdminOrderPage,
    auth=admin_auth,
    summary="Все заказы",
    description="Список заказов для сотрудника магазина с фильтром, сортировкой и страницами",
)
def list_admin_orders(request, filters: Query[AdminOrderFilters]):
    if filters.sort not in SORT_ORDERS:
        raise ValidationAPIError(f"Неизвестный порядок сортировки: {filters.sort}")
    if filters.page < 1 or not 1 <= filters.size <= MAX_PAGE_SIZE:
        raise ValidationAPIError("Некорректные параметры страницы")

    queryset = (
        Order.objects.with_status_choice(filters.status)
        .select_related("user", "product")
        .prefetch_related("items")
        .sorted_by_created(filters.sort)
    )
    count = queryset.count()
    offset = (filters.page - 1) * filters.size
    orders = list(queryset[offset : offset + filters.size])

    updating = OrderUpdateGuard().updating_ids([order.order_id for order in orders])
    for order in orders:
        order.updating = order.order_id in updating

    return {
        "items": orders,
        "count": count,
        "page": filters.page,
        "size": filters.size,
        "pages": math.ceil(count / filters.size) if count else 0,
    }


@router.patch(
    "/admin/orders/{order_id}/status",
    response=AdminOrderOut,
    auth=admin_auth,
    summary="Изменение статуса заказа",
    description="Действие сотрудника над статусом заказа: confirm, ongoing, delivered, rto, reject",
)
@rate_limit(calls=120, period=60)
def update_order_status(request, order_id: str, data: StatusUpdateIn):
    try:
        order = OrderStatusService().update_status(order_id, data.status)
    except Order.DoesNotExist:
        raise NotFoundAPIError("Заказ не найден")
    except OrderUpdateInProgress as e:
        raise OrderUpdateConflictAPIError(str(e))

    logger.info(
        "Сотрудник %s выполнил '%s' для заказа %s",
        request.auth.username,
        data.status,
        order_id,
    )
    return order

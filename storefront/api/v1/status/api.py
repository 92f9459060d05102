from typing import List

from ninja import Router

from status.constants import OrderStatusCode
from status.services.presenter import get_status_filter_choices, present_status
from status.services.resolution import resolve_order_status

from ..auth.jwt import auth
from .schemas import (
    StatusFilterOut,
    StatusOut,
    StatusResolutionOut,
    StatusResolveIn,
)

router = Router(tags=["status"])


@router.get(
    "/statuses",
    response=List[StatusOut],
    auth=auth,
    summary="Список статусов",
    description="Оформление всех эффективных статусов заказа",
)
def list_statuses(request):
    return [
        {"code": code.value, **present_status(code).as_dict()}
        for code in OrderStatusCode
    ]


@router.get(
    "/filters",
    response=List[StatusFilterOut],
    auth=auth,
    summary="Фильтр по статусу",
    description="Варианты фильтра списка заказов по статусу",
)
def list_status_filters(request):
    return [{"code": code, "label": label} for code, label in get_status_filter_choices()]


@router.post(
    "/resolve",
    response=StatusResolutionOut,
    auth=auth,
    summary="Вычислить статус",
    description="Эффективный статус, оформление, трекер и действия для пары status/payment_status",
)
def resolve_status(request, data: StatusResolveIn):
    return resolve_order_status(
        data.status, data.payment_status, updating=data.updating
    ).as_dict()

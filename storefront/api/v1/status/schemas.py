from typing import List, Optional

from ninja import Field, Schema


class StatusDisplayOut(Schema):
    label: str
    color: str
    icon: Optional[str] = None


class StatusOut(StatusDisplayOut):
    """Эффективный статус и его оформление."""

    code: str = Field(..., description="Код эффективного статуса")


class ProgressStepOut(Schema):
    code: str
    label: str
    icon: str
    color: str


class ProgressOut(Schema):
    steps: List[ProgressStepOut]
    current_index: int
    fill_ratio: float


class ActionStateOut(Schema):
    action: str
    enabled: bool


class StatusFilterOut(Schema):
    code: str
    label: str


class StatusResolveIn(Schema):
    status: Optional[str] = Field(None, description="Значение поля status заказа")
    payment_status: Optional[str] = Field(
        None, description="Значение поля payment_status заказа"
    )
    updating: bool = False


class StatusResolutionOut(Schema):
    effective_status: str
    display: StatusDisplayOut
    progress: ProgressOut
    available_actions: List[ActionStateOut]

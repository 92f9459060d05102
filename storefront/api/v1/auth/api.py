import logging
from typing import List

from django.contrib.auth import authenticate
from ninja import Router

from user.models import Address, User
from user.services import AddressService, UserService

from ..exceptions import AuthenticationAPIError, ConflictAPIError, NotFoundAPIError
from ..throttling import rate_limit
from .jwt import REFRESH_TOKEN, auth, create_tokens, decode_token
from .schemas import (
    AddressCreate,
    AddressOut,
    AddressUpdate,
    AuthIn,
    RefreshIn,
    TokenOut,
    UserCreate,
    UserOut,
)

logger = logging.getLogger(__name__)

router = Router(tags=["auth"])


@router.post(
    "/token",
    response=TokenOut,
    summary="Получить токен авторизации",
    description="Авторизация пользователя и получение JWT токенов",
)
@rate_limit(calls=20, period=60)
def login(request, auth_data: AuthIn):
    user = authenticate(username=auth_data.username, password=auth_data.password)
    if not user:
        logger.warning("Неудачная попытка входа: %s", auth_data.username)
        raise AuthenticationAPIError("Неверные учетные данные")
    return create_tokens(user.id)


@router.post(
    "/token/refresh",
    response=TokenOut,
    summary="Обновление токенов",
    description="Обновление access токена с помощью refresh токена",
)
def refresh_token(request, refresh_data: RefreshIn):
    user_id = decode_token(refresh_data.refresh_token, REFRESH_TOKEN)
    if not User.objects.filter(id=user_id, is_active=True).exists():
        raise AuthenticationAPIError("Пользователь не найден")
    return create_tokens(user_id)


@router.post(
    "/users",
    response={201: UserOut},
    summary="Регистрация пользователя",
    description="Создание нового покупателя",
)
def create_user(request, user_data: UserCreate):
    """Регистрация нового пользователя."""
    taken = UserService.is_taken(user_data.username, user_data.email)
    if taken["username"]:
        raise ConflictAPIError("Пользователь с таким именем уже существует")
    if taken["email"]:
        raise ConflictAPIError("Пользователь с таким email уже существует")
    user = UserService.create_user(**user_data.dict(exclude_none=True))
    return 201, user


@router.get(
    "/users/me",
    response=UserOut,
    auth=auth,
    summary="Профиль пользователя",
    description="Получение данных текущего авторизованного пользователя",
)
def get_current_user(request):
    return request.auth


@router.get(
    "/users/me/addresses",
    response=List[AddressOut],
    auth=auth,
    summary="Адреса пользователя",
    description="Сохраненные адреса доставки текущего пользователя",
)
def list_addresses(request):
    return request.auth.addresses.all()


@router.post(
    "/users/me/addresses",
    response={201: AddressOut},
    auth=auth,
    summary="Новый адрес",
    description="Сохранение адреса доставки для следующих заказов",
)
def create_address(request, data: AddressCreate):
    return 201, AddressService.create_address(request.auth, **data.dict())


@router.patch(
    "/users/me/addresses/{address_id}",
    response=AddressOut,
    auth=auth,
    summary="Изменение адреса",
    description="Изменение сохраненного адреса доставки",
)
def update_address(request, address_id: int, data: AddressUpdate):
    try:
        return AddressService.update_address(
            request.auth, address_id, **data.dict(exclude_none=True)
        )
    except Address.DoesNotExist:
        raise NotFoundAPIError("Адрес не найден")

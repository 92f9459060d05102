from datetime import datetime, timedelta, timezone

from django.conf import settings
from django.contrib.auth import get_user_model
from jose import JWTError, jwt
from ninja.security import HttpBearer

from ..exceptions import AuthenticationAPIError, PermissionAPIError

User = get_user_model()

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def create_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Создание JWT токена."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.JWT_AUTH["SECRET_KEY"],
        algorithm=settings.JWT_AUTH["ALGORITHM"],
    )


def create_tokens(user_id: int) -> dict:
    """Создание пары access и refresh токенов."""
    access_token = create_token(
        data={"sub": str(user_id), "type": ACCESS_TOKEN},
        expires_delta=timedelta(
            minutes=settings.JWT_AUTH["ACCESS_TOKEN_EXPIRE_MINUTES"]
        ),
    )
    refresh_token = create_token(
        data={"sub": str(user_id), "type": REFRESH_TOKEN},
        expires_delta=timedelta(days=settings.JWT_AUTH["REFRESH_TOKEN_EXPIRE_DAYS"]),
    )
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


def decode_token(token: str, token_type: str) -> int:
    """
    Проверить токен и вернуть ID пользователя.

    Raises:
        AuthenticationAPIError: Если токен просрочен, невалиден или другого типа
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_AUTH["SECRET_KEY"],
            algorithms=[settings.JWT_AUTH["ALGORITHM"]],
        )
    except JWTError:
        raise AuthenticationAPIError("Невалидный токен")

    if payload.get("type") != token_type:
        raise AuthenticationAPIError("Неверный тип токена")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationAPIError("Токен не содержит ID пользователя")
    return int(user_id)


class AuthBearer(HttpBearer):
    """
    Проверка JWT токена в заголовке Authorization.
    Используется как auth=auth в эндпоинтах.
    """

    def authenticate(self, request, token):
        user_id = decode_token(token, ACCESS_TOKEN)
        user = User.objects.filter(id=user_id, is_active=True).first()
        if user is None:
            raise AuthenticationAPIError("Пользователь не найден")
        return user


class AdminAuthBearer(AuthBearer):
    """Проверка JWT токена сотрудника магазина (is_staff)."""

    def authenticate(self, request, token):
        user = super().authenticate(request, token)
        if not user.is_staff:
            raise PermissionAPIError()
        return user


auth = AuthBearer()
admin_auth = AdminAuthBearer()

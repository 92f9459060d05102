"""
Сервисы для приложения user.

Основные компоненты:
    - UserService.create_user: Регистрация покупателя
    - UserService.is_taken: Проверка занятости имени и email
    - AddressService: Сохраненные адреса доставки покупателя

Процесс создания пользователя:
    1. Валидация пароля через django password validators
    2. Проверка обязательных полей (username, email)
    3. Полная очистка полей до записи в базу (включая уникальность email)
    4. Сохранение пользователя в транзакции

Примеры использования:
    user = UserService.create_user(
        username="john_doe",
        email="john@example.com",
        password="secure_password",
        phone="+919876543210",
    )
"""

import logging

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction

from user.models import Address, User

logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с пользователями."""

    @staticmethod
    def normalize_email(email: str) -> str:
        """Email хранится в нижнем регистре, чтобы проверка уникальности не зависела от регистра."""
        return (email or "").strip().lower()

    @staticmethod
    def is_taken(username: str, email: str) -> dict:
        """
        Проверить, заняты ли имя пользователя и email.

        Returns:
            dict: {"username": bool, "email": bool}
        """
        return {
            "username": User.objects.filter(username=username).exists(),
            "email": User.objects.filter(
                email=UserService.normalize_email(email)
            ).exists(),
        }

    @staticmethod
    @transaction.atomic
    def create_user(username: str, email: str, password: str, **extra_fields) -> User:
        """
        Создает нового пользователя.

        Поля проверяются до записи в базу, поэтому дубликат email или
        некорректный телефон дают ValidationError, а не ошибку базы.

        Args:
            username: Имя пользователя
            email: Email пользователя
            password: Пароль пользователя
            **extra_fields: Дополнительные поля (phone, first_name, is_staff...)

        Returns:
            User: Созданный пользователь

        Raises:
            ValidationError: Если данные пользователя не прошли валидацию
        """
        try:
            validate_password(password)
        except ValidationError as e:
            raise ValidationError({"password": e.messages})

        email = UserService.normalize_email(email)
        if not username:
            raise ValidationError({"username": "Имя пользователя обязательно"})
        if not email:
            raise ValidationError({"email": "Email обязателен"})

        user = User(username=username, email=email, **extra_fields)
        user.set_password(password)
        user.full_clean()
        user.save()

        logger.info("Создан пользователь %s", user.username)
        return user


ADDRESS_FIELDS = (
    "full_name",
    "phone1",
    "phone2",
    "country",
    "state",
    "city",
    "pin_code",
    "address",
    "address_type",
)


class AddressService:
    """Сервис сохраненных адресов доставки."""

    @staticmethod
    def _apply(address: Address, data: dict) -> Address:
        unknown = set(data) - set(ADDRESS_FIELDS)
        if unknown:
            raise ValidationError(
                {"address": f"Неизвестные поля адреса: {', '.join(sorted(unknown))}"}
            )
        for field, value in data.items():
            if isinstance(value, str):
                value = value.strip()
            if value is not None:
                setattr(address, field, value)
        address.full_clean()
        address.save()
        return address

    @staticmethod
    def create_address(user, **data) -> Address:
        """
        Сохранить новый адрес покупателя.

        Raises:
            ValidationError: Если поля адреса некорректны
        """
        address = AddressService._apply(Address(user=user), data)
        logger.info("Пользователь %s добавил адрес %s", user.username, address.pk)
        return address

    @staticmethod
    def update_address(user, address_id, **data) -> Address:
        """
        Изменить адрес покупателя. Переданные как None поля не меняются.

        Raises:
            Address.DoesNotExist: Если адрес не найден или принадлежит другому покупателю
            ValidationError: Если поля адреса некорректны
        """
        address = Address.objects.get(pk=address_id, user=user)
        return AddressService._apply(address, data)

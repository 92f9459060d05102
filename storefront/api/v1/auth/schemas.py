from datetime import datetime

from ninja import Field, Schema


class UserOut(Schema):
    """Схема для отображения данных пользователя."""

    id: int = Field(..., description="ID пользователя")
    username: str = Field(..., description="Имя пользователя")
    email: str = Field(..., description="Email пользователя")
    first_name: str | None = Field(None, description="Имя")
    last_name: str | None = Field(None, description="Фамилия")
    phone: str | None = Field(None, description="Телефон")
    is_staff: bool = Field(False, description="Сотрудник магазина")
    created_at: datetime = Field(..., description="Дата регистрации")


class UserCreate(Schema):
    """Схема для создания пользователя."""

    username: str = Field(..., description="Имя пользователя (логин)")
    email: str = Field(..., description="Email пользователя")
    password: str = Field(..., description="Пароль")
    phone: str | None = Field(None, description="Телефон")
    first_name: str | None = Field(None, description="Имя")
    last_name: str | None = Field(None, description="Фамилия")


class TokenOut(Schema):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthIn(Schema):
    username: str
    password: str


class RefreshIn(Schema):
    refresh_token: str


class AddressOut(Schema):
    """Сохраненный адрес доставки."""

    id: int
    full_name: str
    phone1: str
    phone2: str = ""
    country: str
    state: str
    city: str
    pin_code: str
    address: str
    address_type: str


class AddressCreate(Schema):
    full_name: str
    phone1: str
    phone2: str | None = None
    country: str = "India"
    state: str
    city: str
    pin_code: str
    address: str
    address_type: str = Field("home", description="home или work")


class AddressUpdate(Schema):
    """Изменение адреса: передаются только изменяемые поля."""

    full_name: str | None = None
    phone1: str | None = None
    phone2: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    pin_code: str | None = None
    address: str | None = None
    address_type: str | None = None

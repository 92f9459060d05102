"""Модели для приложения user."""

from django.contrib.auth.models import AbstractUser
from django.db import models

from .validators import PhoneNumberValidator, PinCodeValidator


class User(AbstractUser):
    """Покупатель или сотрудник магазина."""

    phone = models.CharField(
        max_length=20,
        blank=True,
        null=True,
        verbose_name="Телефон",
        validators=[PhoneNumberValidator()],
    )
    created_at = models.DateTimeField(
        auto_now_add=True, verbose_name="Дата регистрации"
    )
    email = models.EmailField(
        "email address",
        unique=True,
        error_messages={
            "unique": "Пользователь с таким email уже существует.",
        },
    )

    class Meta:
        verbose_name = "Пользователь"
        verbose_name_plural = "Пользователи"

    def __str__(self):
        return self.username

    def save(self, *args, **kwargs):
        """Сохранение пользователя с защитой системных полей."""
        if self.pk:
            orig = User.objects.filter(pk=self.pk).first()
            if orig is not None:
                self.date_joined = orig.date_joined
        super().save(*args, **kwargs)


class AddressType(models.TextChoices):
    HOME = "home", "Дом"
    WORK = "work", "Работа"


class Address(models.Model):
    """Сохраненный адрес доставки покупателя."""

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="addresses",
        verbose_name="Пользователь",
    )
    full_name = models.CharField("Получатель", max_length=255)
    phone1 = models.CharField(
        "Телефон", max_length=20, validators=[PhoneNumberValidator()]
    )
    phone2 = models.CharField(
        "Дополнительный телефон",
        max_length=20,
        blank=True,
        default="",
        validators=[PhoneNumberValidator()],
    )
    country = models.CharField("Страна", max_length=100, default="India")
    state = models.CharField("Штат", max_length=100)
    city = models.CharField("Город", max_length=100)
    pin_code = models.CharField(
        "Индекс", max_length=6, validators=[PinCodeValidator()]
    )
    address = models.TextField("Адрес")
    address_type = models.CharField(
        "Тип адреса",
        max_length=10,
        choices=AddressType.choices,
        default=AddressType.HOME,
    )
    created_at = models.DateTimeField("Дата создания", auto_now_add=True)
    updated_at = models.DateTimeField("Дата изменения", auto_now=True)

    class Meta:
        verbose_name = "Адрес"
        verbose_name_plural = "Адреса"
        ordering = ["id"]

    def __str__(self):
        return f"{self.full_name}, {self.city} ({self.get_address_type_display()})"

    def as_shipping(self) -> dict:
        """Поля адреса в формате адреса доставки заказа."""
        return {
            "full_name": self.full_name,
            "phone1": self.phone1,
            "phone2": self.phone2,
            "state": self.state,
            "city": self.city,
            "pin_code": self.pin_code,
            "address": self.address,
            "address_type": self.address_type,
        }

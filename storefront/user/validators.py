"""Валидаторы для моделей пользователя и данных доставки."""

import re

from django.core.exceptions import ValidationError
from django.utils.deconstruct import deconstructible


@deconstructible
class PhoneNumberValidator:
    """Валидатор для проверки формата номера телефона."""

    message = "Неверный формат номера телефона"

    def __init__(self):
        # Разрешаем цифры, пробелы, скобки, дефисы и плюс в начале
        self.pattern = re.compile(r"^\+?[\d\s\(\)-]+$")

    def __call__(self, value):
        """
        Проверяет формат номера телефона.

        Args:
            value: Номер телефона для проверки

        Returns:
            str: Очищенный номер телефона

        Raises:
            ValidationError: Если номер не соответствует формату
        """
        if value is None or value == "":
            raise ValidationError(self.message)

        value = str(value).strip()
        if not self.pattern.match(value):
            raise ValidationError(self.message)

        cleaned_number = re.sub(r"[\s\(\)-]", "", value)

        # 10 цифр для местного номера, до 13 символов с кодом страны
        if not (10 <= len(cleaned_number) <= 13):
            raise ValidationError(self.message)

        if not re.match(r"^\+?\d+$", cleaned_number):
            raise ValidationError(self.message)

        return cleaned_number

    def __eq__(self, other):
        return isinstance(other, PhoneNumberValidator)


@deconstructible
class PinCodeValidator:
    """Валидатор почтового индекса (6 цифр)."""

    message = "Почтовый индекс должен состоять из 6 цифр"

    def __call__(self, value):
        if not re.fullmatch(r"\d{6}", str(value or "").strip()):
            raise ValidationError(self.message)
        return str(value).strip()

    def __eq__(self, other):
        return isinstance(other, PinCodeValidator)

"""Тесты для модели User.

Этот модуль содержит тесты для проверки корректности работы модели User
и сервиса регистрации пользователей.
"""

from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.utils import timezone

from user.services import UserService

User = get_user_model()


@pytest.mark.django_db
class TestUser:
    """Тесты для модели User."""

    @pytest.fixture
    def valid_user_data(self):
        return {
            "username": "testuser",
            "email": "test@example.com",
            "password": "securepass123",
            "phone": "+919876543210",
        }

    def test_create_user(self, valid_user_data):
        """Тест создания пользователя с валидными данными."""
        user = UserService.create_user(**valid_user_data)

        assert user.pk is not None
        assert user.username == valid_user_data["username"]
        assert user.email == valid_user_data["email"]
        assert user.phone == valid_user_data["phone"]
        assert user.check_password(valid_user_data["password"])
        assert user.is_active
        assert not user.is_staff
        assert user.created_at <= timezone.now()

    def test_create_user_without_phone(self, valid_user_data):
        """Тест создания пользователя без телефона."""
        valid_user_data.pop("phone")
        user = UserService.create_user(**valid_user_data)

        assert user.phone is None

    def test_email_uniqueness(self, valid_user_data):
        """Тест уникальности email."""
        UserService.create_user(**valid_user_data)

        duplicate_data = valid_user_data.copy()
        duplicate_data["username"] = "another_user"

        with pytest.raises(ValidationError) as exc_info:
            UserService.create_user(**duplicate_data)
        assert "email" in exc_info.value.message_dict

    def test_invalid_phone(self, valid_user_data):
        """Тест валидации телефона."""
        valid_user_data["phone"] = "not-a-phone"

        with pytest.raises(ValidationError):
            UserService.create_user(**valid_user_data)

    def test_invalid_email(self, valid_user_data):
        """Тест создания пользователя с некорректным email."""
        valid_user_data["email"] = "invalid-email"

        with pytest.raises(ValidationError):
            UserService.create_user(**valid_user_data)

    def test_short_password(self, valid_user_data):
        """Тест создания пользователя с коротким паролем."""
        valid_user_data["password"] = "pas24"

        with pytest.raises(ValidationError) as exc_info:
            UserService.create_user(**valid_user_data)
        assert "password" in exc_info.value.message_dict

    def test_required_fields(self):
        """Тест создания пользователя без обязательных полей."""
        with pytest.raises(ValidationError):
            UserService.create_user(username="", email="", password="pass123324abc")

    def test_date_joined_protected(self, valid_user_data):
        """Тест: дата регистрации не меняется при сохранении."""
        user = UserService.create_user(**valid_user_data)
        original = user.date_joined

        user.date_joined = timezone.now() + timedelta(days=10)
        user.save()
        user.refresh_from_db()

        assert user.date_joined == original

    def test_email_normalized(self, valid_user_data):
        """Тест: email хранится в нижнем регистре."""
        valid_user_data["email"] = " Test@Example.COM "
        user = UserService.create_user(**valid_user_data)

        assert user.email == "test@example.com"
        assert UserService.is_taken("nobody", "TEST@example.com") == {
            "username": False,
            "email": True,
        }

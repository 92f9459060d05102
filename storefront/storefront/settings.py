"""Настройки проекта storefront.

Этот модуль содержит все настройки Django проекта, включая:
- Базовые настройки Django
- Настройки безопасности
- Настройки базы данных и кэша
- Настройки статических файлов
- Настройки заказов, оплаты и JWT
- Настройки логирования
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# -----------------------------------------------------------------------------
# Базовые настройки
# -----------------------------------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent

TESTING = "pytest" in sys.argv[0] or os.getenv("DJANGO_ENV") in ("ci", "test")

# Загрузка переменных окружения
if not os.environ.get("SETTINGS_LOADED"):
    if TESTING:
        # В CI и тестах используем переменные окружения напрямую
        os.environ.setdefault("SECRET_KEY", "test-secret-key")
        os.environ.setdefault("DEBUG", "True")
        os.environ.setdefault("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")
        os.environ.setdefault("DB_ENGINE", "django.db.backends.sqlite3")
        os.environ.setdefault("DB_NAME", ":memory:")
        os.environ["SETTINGS_LOADED"] = "True"
    else:
        # Пробуем загрузить .env.dev, если не найден - используем .env.prod
        env_dev = BASE_DIR / ".env.dev"
        env_prod = BASE_DIR / ".env.prod"

        if env_dev.exists():
            env_file = env_dev
        elif env_prod.exists():
            env_file = env_prod
        else:
            raise FileNotFoundError(
                "Не найдены файлы настроек. Необходим .env.dev или .env.prod. "
                "Пожалуйста, создайте один из файлов на основе .env.example"
            )

        load_dotenv(env_file)
        os.environ["SETTINGS_LOADED"] = "True"

# -----------------------------------------------------------------------------
# Проверка обязательных переменных
# -----------------------------------------------------------------------------

required_env_vars = [
    "SECRET_KEY",
    "DEBUG",
    "ALLOWED_HOSTS",
    "DB_ENGINE",
    "DB_NAME",
]

missing_env_vars = [var for var in required_env_vars if not os.getenv(var)]

if missing_env_vars:
    raise ValueError(
        f"Отсутствуют обязательные переменные окружения: {', '.join(missing_env_vars)}"
    )

# -----------------------------------------------------------------------------
# Основные настройки Django
# -----------------------------------------------------------------------------

SECRET_KEY = os.getenv("SECRET_KEY")
DEBUG = os.getenv("DEBUG") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS").split(",")

# -----------------------------------------------------------------------------
# Приложения
# -----------------------------------------------------------------------------

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Приложения
    "user.apps.UserConfig",
    "catalog.apps.CatalogConfig",
    "status.apps.StatusConfig",
    "order.apps.OrderConfig",
]

# -----------------------------------------------------------------------------
# Middleware
# -----------------------------------------------------------------------------

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# -----------------------------------------------------------------------------
# Основные настройки URL и шаблонов
# -----------------------------------------------------------------------------

AUTH_USER_MODEL = "user.User"
ROOT_URLCONF = "storefront.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "storefront.wsgi.application"

# -----------------------------------------------------------------------------
# База данных
# -----------------------------------------------------------------------------

DATABASES = {
    "default": {
        "ENGINE": os.getenv("DB_ENGINE"),
        "NAME": os.getenv("DB_NAME"),
        "USER": os.getenv("DB_USER", ""),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", ""),
        "PORT": os.getenv("DB_PORT", ""),
    }
}

if TESTING:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": ":memory:",
        }
    }

# -----------------------------------------------------------------------------
# Кэш (отметки обновляемых заказов и лимиты запросов)
# -----------------------------------------------------------------------------

REDIS_URL = os.getenv("REDIS_URL")

if REDIS_URL and not TESTING:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": REDIS_URL,
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "storefront",
        }
    }

# -----------------------------------------------------------------------------
# Валидация паролей
# -----------------------------------------------------------------------------

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

# -----------------------------------------------------------------------------
# Интернационализация
# -----------------------------------------------------------------------------

LANGUAGE_CODE = "ru"
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

# -----------------------------------------------------------------------------
# Статические файлы
# -----------------------------------------------------------------------------

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
MEDIA_URL = os.getenv("MEDIA_URL", "media/")
MEDIA_ROOT = os.getenv("MEDIA_ROOT", BASE_DIR / "media")

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": (
            "django.contrib.staticfiles.storage.StaticFilesStorage"
            if TESTING
            else "whitenoise.storage.CompressedManifestStaticFilesStorage"
        ),
    },
}

# -----------------------------------------------------------------------------
# Прочие настройки Django
# -----------------------------------------------------------------------------

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
API_VERSION = os.getenv("API_VERSION", "v1")

# -----------------------------------------------------------------------------
# Настройки безопасности
# -----------------------------------------------------------------------------

if not DEBUG:
    SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "True") == "True"
    SECURE_HSTS_SECONDS = int(os.getenv("SECURE_HSTS_SECONDS", "31536000"))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = (
        os.getenv("SECURE_HSTS_INCLUDE_SUBDOMAINS", "True") == "True"
    )
    SECURE_HSTS_PRELOAD = os.getenv("SECURE_HSTS_PRELOAD", "True") == "True"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "True") == "True"
    CSRF_COOKIE_SECURE = os.getenv("CSRF_COOKIE_SECURE", "True") == "True"
else:
    SECURE_SSL_REDIRECT = False
    SESSION_COOKIE_SECURE = False
    CSRF_COOKIE_SECURE = False

CSRF_TRUSTED_ORIGINS = [
    origin for origin in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if origin
]

# -----------------------------------------------------------------------------
# JWT
# -----------------------------------------------------------------------------

JWT_AUTH = {
    "SECRET_KEY": os.getenv("JWT_SECRET_KEY", SECRET_KEY),
    "ALGORITHM": os.getenv("JWT_ALGORITHM", "HS256"),
    "ACCESS_TOKEN_EXPIRE_MINUTES": int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
    "REFRESH_TOKEN_EXPIRE_DAYS": int(os.getenv("JWT_REFRESH_TOKEN_EXPIRE_DAYS", "7")),
}

# -----------------------------------------------------------------------------
# Заказы
# -----------------------------------------------------------------------------

ORDER_CANCELLATION_WINDOW_HOURS = int(
    os.getenv("ORDER_CANCELLATION_WINDOW_HOURS", "24")
)
ORDER_UPDATE_LOCK_TIMEOUT = int(os.getenv("ORDER_UPDATE_LOCK_TIMEOUT", "30"))
# Неоплаченный pending-заказ отображается как заказ с неуспешной оплатой
ORDER_UNPAID_PENDING_IS_FAILED = (
    os.getenv("ORDER_UNPAID_PENDING_IS_FAILED", "True") == "True"
)

# -----------------------------------------------------------------------------
# Оплата (PayU)
# -----------------------------------------------------------------------------

PAYU_KEY = os.getenv("PAYU_KEY", "")
PAYU_SALT = os.getenv("PAYU_SALT", "")
PAYU_BASE_URL = os.getenv("PAYU_BASE_URL", "https://test.payu.in/_payment")
PAYU_SUCCESS_URL = os.getenv("PAYU_SUCCESS_URL", "")
PAYU_FAILURE_URL = os.getenv("PAYU_FAILURE_URL", "")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# -----------------------------------------------------------------------------
# Настройки логирования
# -----------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "order": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
        "api": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
        "client": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
    },
}

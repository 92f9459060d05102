"""
Структура конфигурации статусов заказа.

Этот модуль содержит единственный источник данных о статусах заказа: коды,
синонимы, оформление для интерфейса, разрешенные действия администратора и
последовательности шагов трекера заказа для покупателя.

Формат конфигурации:
{
    "group_code": {                     # Код группы статусов
        "name": str,                    # Название группы статусов
        "model": str,                   # Путь к модели в формате "app.Model"
        "allowed_status_transitions": { # Разрешенные действия администратора
            "status_code": [            # Код эффективного статуса
                "action",               # Действие, доступное из этого статуса
                ...
            ],
            ...
        },
        "status": [                     # Список статусов
            {
                "code": str,            # Канонический код статуса
                "synonyms": list,       # Сырые значения, которые сводятся к коду
                "name": str,            # Подпись для интерфейса
                "color": str,           # Токен цвета
                "icon": str,            # Токен иконки
                "description": str,     # Описание статуса
                "is_default": bool,     # Флаг статуса по умолчанию
                "order": int,           # Порядок сортировки
            },
            ...
        ],
        "progress_steps": {...},        # Оформление шагов трекера
        "progress_paths": {...},        # Последовательности шагов трекера
    }
}

Примечания:
    - Все статусы должны иметь уникальные коды внутри группы
    - Синонимы сравниваются после приведения к нижнему регистру и обрезки пробелов
    - Порядок статусов влияет на их отображение в фильтрах
    - Действия в allowed_status_transitions перечислены в порядке кнопок
"""

ORDER_STATUS_CONFIG = {
    "ORDER_STATUS_CONFIG": {
        "name": "Статусы заказа",
        "model": "order.Order",
        "allowed_status_transitions": {
            "pending": ["confirm", "reject"],
            "confirmed": ["ongoing", "delivered", "rto", "reject"],
            "ongoing": ["delivered", "rto", "reject"],
            "delivered": [],
            "rto": [],
            "rejected": [],
            "cancelled": [],
            "payment_failed": [],
        },
        "status": [
            {
                "code": "pending",
                "synonyms": ["pending"],
                "name": "Ongoing",
                "color": "yellow",
                "icon": "clock",
                "description": "Заказ создан и ожидает обработки",
                "is_default": True,
                "order": 10,
            },
            {
                "code": "confirmed",
                "synonyms": ["confirm", "confirmed"],
                "name": "Confirmed",
                "color": "blue",
                "icon": "check-circle",
                "description": "Заказ подтвержден",
                "order": 20,
            },
            {
                "code": "ongoing",
                "synonyms": ["ongoing", "out_for_delivery"],
                "name": "Ongoing",
                "color": "yellow",
                "icon": "clock",
                "description": "Заказ передан в доставку",
                "order": 30,
            },
            {
                "code": "delivered",
                "synonyms": ["delivered"],
                "name": "Delivered",
                "color": "green",
                "icon": "truck",
                "description": "Заказ доставлен",
                "order": 40,
            },
            {
                "code": "rto",
                "synonyms": ["rto"],
                "name": "RTO",
                "color": "orange",
                "icon": "x-circle",
                "description": "Заказ возвращен отправителю",
                "order": 50,
            },
            {
                "code": "rejected",
                "synonyms": ["reject", "rejected"],
                "name": "Reject",
                "color": "red",
                "icon": "x-circle",
                "description": "Заказ отклонен магазином",
                "order": 60,
            },
            {
                "code": "cancelled",
                "synonyms": ["cancelled"],
                "name": "Cancelled",
                "color": "red",
                "icon": "x-circle",
                "description": "Заказ отменен покупателем",
                "order": 70,
            },
            {
                "code": "payment_failed",
                "synonyms": ["payment failed", "payment_failed"],
                "name": "Payment Failed",
                "color": "red",
                "icon": "x-circle",
                "description": "Оплата заказа не прошла",
                "order": 80,
            },
        ],
        "progress_steps": {
            "pending": {"label": "Pending", "icon": "clock", "color": "yellow"},
            "confirmed": {"label": "Confirmed", "icon": "check-circle", "color": "blue"},
            "ongoing": {"label": "On the Way", "icon": "truck", "color": "yellow"},
            "delivered": {"label": "Delivered", "icon": "package", "color": "green"},
            "rto": {"label": "RTO", "icon": "x-circle", "color": "orange"},
            "rejected": {"label": "Rejected", "icon": "x-circle", "color": "red"},
            "cancelled": {"label": "Cancelled", "icon": "x-circle", "color": "red"},
            "payment_failed": {
                "label": "Payment Failed",
                "icon": "x-circle",
                "color": "red",
            },
        },
        "progress_paths": {
            "payment_failed": ["pending", "payment_failed"],
            "cancelled": ["pending", "cancelled"],
            "rejected": ["pending", "rejected"],
            "rto": ["pending", "confirmed", "ongoing", "delivered", "rto"],
            "default": ["pending", "confirmed", "ongoing", "delivered"],
        },
    }
}

PAYMENT_STATUS_CONFIG = {
    "PAYMENT_STATUS_CONFIG": {
        "name": "Статусы оплаты",
        "model": "order.Order",
        "status": [
            {"code": "paid", "synonyms": ["paid", "success"]},
            {"code": "failed", "synonyms": ["failed"]},
            {"code": "pending", "synonyms": ["pending"]},
        ],
    }
}

"""Административный интерфейс для приложения order.

Этот модуль содержит классы для:
- Просмотра заказов с эффективным статусом и трекером
- Фильтрации заказов по эффективному статусу
- Действий администратора над статусом заказа
- Экспорта заказов в XLSX
"""

import logging

import pandas as pd
from django.contrib import admin, messages
from django.http import HttpResponse, HttpResponseRedirect
from django.utils import timezone
from django.utils.html import format_html

from status.constants import StatusAction
from status.services.presenter import get_status_filter_choices

from .models import Order, OrderItem
from .services.order_status_service import OrderStatusService

logger = logging.getLogger(__name__)

BADGE_COLORS = {
    "blue": "#007bff",
    "yellow": "#ffc107",
    "green": "#28a745",
    "orange": "#fd7e14",
    "red": "#dc3545",
    "gray": "#6c757d",
}


class EffectiveStatusFilter(admin.SimpleListFilter):
    """Фильтр по эффективному статусу заказа."""

    title = "Статус"
    parameter_name = "effective_status"

    def lookups(self, request, model_admin):
        return get_status_filter_choices()

    def queryset(self, request, queryset):
        if self.value():
            return queryset.with_status_choice(self.value())
        return queryset


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity", "price")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Административный интерфейс для модели Order."""

    list_display = (
        "order_id",
        "user",
        "display_product",
        "quantity",
        "display_total_amount",
        "display_status",
        "display_progress",
        "created_at",
    )
    list_filter = (EffectiveStatusFilter, "address_type", "created_at")
    search_fields = (
        "order_id",
        "user__username",
        "user__email",
        "full_name",
        "phone1",
        "payu_payment_id",
    )
    readonly_fields = (
        "order_id",
        "user",
        "product",
        "quantity",
        "total_amount",
        "status",
        "payment_status",
        "payu_payment_id",
        "display_status",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "created_at"
    ordering = ("-created_at",)
    inlines = [OrderItemInline]

    fieldsets = (
        (
            "Основная информация",
            {
                "fields": (
                    "order_id",
                    "user",
                    "product",
                    "quantity",
                    "total_amount",
                )
            },
        ),
        (
            "Статус",
            {
                "fields": (
                    "display_status",
                    "status",
                    "payment_status",
                    "payu_payment_id",
                )
            },
        ),
        (
            "Доставка",
            {
                "fields": (
                    "full_name",
                    "phone1",
                    "phone2",
                    "state",
                    "city",
                    "pin_code",
                    "address",
                    "address_type",
                )
            },
        ),
        ("Временные метки", {"fields": ("created_at", "updated_at")}),
    )

    actions = [
        "confirm_orders",
        "mark_ongoing",
        "mark_delivered",
        "mark_rto",
        "reject_orders",
        "export_to_xlsx",
    ]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("user", "product")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def display_product(self, obj):
        return obj.product.name if obj.product else "-"

    display_product.short_description = "Товар"

    def display_total_amount(self, obj):
        return format_html("${}", f"{obj.total_amount:.2f}")

    display_total_amount.short_description = "Сумма"

    def display_status(self, obj):
        """Цветной значок эффективного статуса."""
        display = obj.display
        return format_html(
            '<span style="background: {}; color: #fff; padding: 2px 8px; '
            'border-radius: 8px;">{}</span>',
            BADGE_COLORS.get(display.color, BADGE_COLORS["gray"]),
            display.label,
        )

    display_status.short_description = "Статус"

    def display_progress(self, obj):
        progress = obj.progress
        return format_html(
            "{} ({}/{})",
            progress.current_step.label,
            progress.current_index + 1,
            len(progress.steps),
        )

    display_progress.short_description = "Трекер"

    def _apply_status_action(self, request, queryset, action: StatusAction):
        """Выполнить действие над каждым выбранным заказом отдельно."""
        logger.info(
            "Действие '%s' для %d заказов запущено пользователем %s",
            action,
            queryset.count(),
            request.user.username,
        )
        order_ids = list(queryset.values_list("order_id", flat=True))
        results = OrderStatusService().update_many(order_ids, action)

        updated = [order_id for order_id, error in results.items() if error is None]
        if updated:
            messages.success(
                request, f"Статус обновлен для заказов: {len(updated)}"
            )
        for order_id, error in results.items():
            if error is not None:
                messages.error(request, f"Заказ {order_id}: {error}")

    @admin.action(description="Подтвердить заказы", permissions=["change"])
    def confirm_orders(self, request, queryset):
        self._apply_status_action(request, queryset, StatusAction.CONFIRM)

    @admin.action(description="Передать в доставку", permissions=["change"])
    def mark_ongoing(self, request, queryset):
        self._apply_status_action(request, queryset, StatusAction.ONGOING)

    @admin.action(description="Отметить как доставленные", permissions=["change"])
    def mark_delivered(self, request, queryset):
        self._apply_status_action(request, queryset, StatusAction.DELIVERED)

    @admin.action(description="Отметить возврат отправителю (RTO)", permissions=["change"])
    def mark_rto(self, request, queryset):
        self._apply_status_action(request, queryset, StatusAction.RTO)

    @admin.action(description="Отклонить заказы", permissions=["change"])
    def reject_orders(self, request, queryset):
        self._apply_status_action(request, queryset, StatusAction.REJECT)

    @admin.action(description="Экспорт выбранных заказов в Excel")
    def export_to_xlsx(self, request, queryset):
        """Экспорт выбранных заказов в Excel."""
        logger.info("Экспорт %d заказов в XLSX", queryset.count())
        try:
            data = []
            for order in queryset.select_related("user", "product"):
                data.append(
                    {
                        "Номер заказа": order.order_id,
                        "Пользователь": order.user.email,
                        "Товар": order.product.name if order.product else "",
                        "Количество": order.quantity,
                        "Сумма": float(order.total_amount),
                        "Статус": order.display.label,
                        "Статус (сырой)": order.status,
                        "Статус оплаты": order.payment_status or "",
                        "Получатель": order.full_name,
                        "Телефон": order.phone1,
                        "Город": order.city,
                        "Индекс": order.pin_code,
                        # Excel не поддерживает даты с часовым поясом
                        "Создан": timezone.localtime(order.created_at).replace(
                            tzinfo=None
                        ),
                    }
                )

            df = pd.DataFrame(data)
            response = HttpResponse(
                content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
            )
            response["Content-Disposition"] = 'attachment; filename="orders.xlsx"'
            df.to_excel(response, index=False, engine="openpyxl")
            return response

        except Exception as e:
            logger.error("Ошибка при экспорте заказов: %s", e, exc_info=True)
            self.message_user(
                request,
                f"Произошла ошибка при экспорте: {e}",
                level=messages.ERROR,
            )
            return HttpResponseRedirect(request.get_full_path())

    def save_model(self, request, obj, form, change):
        logger.info(
            "Заказ %s изменен пользователем %s", obj.order_id, request.user.username
        )
        super().save_model(request, obj, form, change)

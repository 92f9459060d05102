"""Тесты административного интерфейса заказов."""

from io import BytesIO

import pandas as pd
import pytest
from django.contrib.messages import get_messages
from django.urls import reverse

from order.services.order_update_guard import OrderUpdateGuard

CHANGELIST_URL = "admin:order_order_changelist"


@pytest.mark.django_db
class TestOrderAdmin:
    """Тесты для OrderAdmin."""

    def _run_action(self, admin_client, action, orders):
        return admin_client.post(
            reverse(CHANGELIST_URL),
            {
                "action": action,
                "_selected_action": [order.order_id for order in orders],
            },
            follow=True,
        )

    def test_changelist_shows_effective_status(self, admin_client, make_order):
        make_order(status="pending", payment_status="paid")

        response = admin_client.get(reverse(CHANGELIST_URL))

        assert response.status_code == 200
        content = response.content.decode()
        assert "Confirmed" in content
        assert "Confirmed (2/4)" in content

    def test_filter_by_effective_status(self, admin_client, make_order):
        """Тест: фильтр работает по эффективному, а не по сырому статусу."""
        confirmed = make_order(status="pending", payment_status="paid")
        failed = make_order(status="confirmed", payment_status="failed")

        response = admin_client.get(
            reverse(CHANGELIST_URL), {"effective_status": "confirmed"}
        )

        result = list(response.context["cl"].result_list)
        assert result == [confirmed]
        assert failed not in result

    def test_ongoing_action(self, admin_client, order):
        response = self._run_action(admin_client, "mark_ongoing", [order])

        order.refresh_from_db()
        assert order.status == "ongoing"
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any("Статус обновлен" in m for m in messages)

    def test_action_reports_invalid_orders(self, admin_client, order, make_order):
        """Тест: недопустимые заказы пропускаются с ошибкой, остальные обновляются."""
        delivered = make_order(status="delivered", payment_status="paid")

        response = self._run_action(admin_client, "reject_orders", [order, delivered])

        order.refresh_from_db()
        delivered.refresh_from_db()
        assert order.status == "reject"
        assert delivered.status == "delivered"
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any(delivered.order_id in m for m in messages)

    def test_action_skips_order_in_progress(self, admin_client, order):
        OrderUpdateGuard().acquire(order.order_id)

        self._run_action(admin_client, "mark_ongoing", [order])

        order.refresh_from_db()
        assert order.status == "pending"

    def test_export_to_xlsx(self, admin_client, make_order):
        order = make_order(status="ongoing", payment_status="paid")

        response = admin_client.post(
            reverse(CHANGELIST_URL),
            {"action": "export_to_xlsx", "_selected_action": [order.order_id]},
        )

        assert response.status_code == 200
        assert response["Content-Disposition"] == 'attachment; filename="orders.xlsx"'
        df = pd.read_excel(BytesIO(response.content), engine="openpyxl")
        assert list(df["Номер заказа"]) == [order.order_id]
        assert list(df["Статус"]) == ["Ongoing"]

    def test_no_add_or_delete(self, admin_client):
        response = admin_client.get(reverse("admin:order_order_add"))

        assert response.status_code == 403

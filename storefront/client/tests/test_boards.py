"""Тесты состояния экранов заказов."""

from datetime import datetime, timedelta, timezone
from unittest import mock

import pytest

from client.api_client import ClientError
from client.boards import (
    ACTION_NOT_ALLOWED_MESSAGE,
    UPDATE_IN_PROGRESS_MESSAGE,
    AdminOrderBoard,
    CustomerOrderBoard,
    parse_datetime,
)
from client.errors import NETWORK_ERROR_MESSAGE, SERVER_ERROR_MESSAGE
from status.constants import StatusAction

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_order(order_id="A1", status="pending", payment_status="paid", age=None):
    created_at = NOW - (age or timedelta(hours=1))
    return {
        "order_id": order_id,
        "status": status,
        "payment_status": payment_status,
        "created_at": created_at.isoformat().replace("+00:00", "Z"),
    }


@pytest.fixture
def api():
    return mock.Mock()


@pytest.fixture
def admin_board(api):
    api.get_admin_orders.return_value = {
        "items": [
            make_order("A1", "pending", "paid"),
            make_order("A2", "ongoing", "paid"),
            make_order("A3", "delivered", "paid"),
        ],
        "count": 3,
        "page": 1,
        "size": 20,
        "pages": 1,
    }
    board = AdminOrderBoard(api)
    board.load()
    return board


class TestAdminOrderBoardLoad:
    """Тесты загрузки списка заказов администратора."""

    def test_load(self, admin_board, api):
        assert [o["order_id"] for o in admin_board.orders] == ["A1", "A2", "A3"]
        assert admin_board.count == 3
        api.get_admin_orders.assert_called_once_with(
            status=None, sort="newest", page=1, size=20
        )

    def test_not_found_is_empty_list(self, api):
        """Тест: 404 при загрузке списка означает, что заказов нет."""
        api.get_admin_orders.side_effect = ClientError(404, "Not Found")
        board = AdminOrderBoard(api)

        assert board.load() is True
        assert board.orders == []
        assert board.error is None

    def test_network_error(self, api):
        api.get_admin_orders.side_effect = ClientError(None)
        board = AdminOrderBoard(api)

        assert board.load() is False
        assert board.error == NETWORK_ERROR_MESSAGE


class TestAdminOrderBoardUpdate:
    """Тесты изменения статуса с экрана администратора."""

    def test_actions_for_paid_pending(self, admin_board):
        """Тест: оплаченный pending-заказ получает кнопки подтвержденного."""
        actions = [state.action for state in admin_board.actions_for(admin_board.orders[0])]

        assert actions == [
            StatusAction.ONGOING,
            StatusAction.DELIVERED,
            StatusAction.RTO,
            StatusAction.REJECT,
        ]

    def test_actions_for_unpaid_pending(self, api):
        """Тест: неоплаченный заказ показан как неуспешный, но с кнопками pending."""
        api.get_admin_orders.return_value = {
            "items": [make_order("B1", "pending", None)],
            "count": 1,
            "pages": 1,
        }
        board = AdminOrderBoard(api)
        board.load()
        order = board.orders[0]

        assert board.display(order).label == "Payment Failed"
        assert [s.action for s in board.actions_for(order)] == [
            StatusAction.CONFIRM,
            StatusAction.REJECT,
        ]
        assert board.update_status("B1", "reject") is True
        api.update_order_status.assert_called_once_with("B1", "reject")

    def test_successful_update(self, admin_board, api):
        """Тест: после успеха меняется только локальный статус."""
        order = admin_board.orders[1]
        before = dict(order)

        assert admin_board.update_status("A2", "delivered") is True

        api.update_order_status.assert_called_once_with("A2", "delivered")
        assert order["status"] == "delivered"
        assert {k: v for k, v in order.items() if k != "status"} == {
            k: v for k, v in before.items() if k != "status"
        }
        assert admin_board.success
        assert admin_board.error is None
        assert not admin_board.is_updating("A2")

    def test_failed_update_keeps_order(self, admin_board, api):
        """Тест: при ошибке заказ не меняется, отметка снимается."""
        api.update_order_status.side_effect = ClientError(500, "boom")

        assert admin_board.update_status("A2", "delivered") is False

        assert admin_board.orders[1]["status"] == "ongoing"
        assert admin_board.error == SERVER_ERROR_MESSAGE
        assert not admin_board.is_updating("A2")

    def test_server_message_shown(self, admin_board, api):
        api.update_order_status.side_effect = ClientError(409, "Заказ уже обновляется")

        admin_board.update_status("A2", "rto")

        assert admin_board.error == "Заказ уже обновляется"

    def test_not_allowed_action_is_not_sent(self, admin_board, api):
        """Тест: недоступное действие не отправляется на сервер."""
        assert admin_board.update_status("A3", "reject") is False

        api.update_order_status.assert_not_called()
        assert admin_board.error == ACTION_NOT_ALLOWED_MESSAGE

    def test_second_update_of_same_order_refused(self, admin_board, api):
        """Тест: пока заказ обновляется, второе обновление отклоняется."""
        results = {}

        def update_order_status(order_id, status):
            # Пока первый запрос не завершен
            assert admin_board.is_updating("A2")
            assert all(not s.enabled for s in admin_board.actions_for(admin_board.orders[1]))
            results["same"] = admin_board.update_status("A2", "rto")
            results["same_error"] = admin_board.error
            return {"status": status}

        api.update_order_status.side_effect = update_order_status

        assert admin_board.update_status("A2", "delivered") is True
        assert results == {"same": False, "same_error": UPDATE_IN_PROGRESS_MESSAGE}
        api.update_order_status.assert_called_once_with("A2", "delivered")
        assert admin_board.orders[1]["status"] == "delivered"

    def test_other_order_updates_concurrently(self, admin_board, api):
        """Тест: обновление другого заказа не блокируется."""
        calls = []

        def update_order_status(order_id, status):
            calls.append(order_id)
            if order_id == "A2":
                assert admin_board.update_status("A1", "ongoing") is True
            return {"status": status}

        api.update_order_status.side_effect = update_order_status

        assert admin_board.update_status("A2", "delivered") is True
        assert calls == ["A2", "A1"]
        assert admin_board.orders[0]["status"] == "ongoing"
        assert admin_board.updating == set()

    def test_retry_is_manual(self, admin_board, api):
        """Тест: после ошибки повтор выполняется только вызывающим."""
        api.update_order_status.side_effect = [ClientError(None), {"status": "rto"}]

        assert admin_board.update_status("A2", "rto") is False
        assert api.update_order_status.call_count == 1

        assert admin_board.update_status("A2", "rto") is True
        assert admin_board.orders[1]["status"] == "rto"


class TestCustomerOrderBoard:
    """Тесты экрана "Мои заказы"."""

    @pytest.fixture
    def board(self, api):
        api.get_orders.return_value = [
            make_order("C1", "confirmed", "paid"),
            make_order("C2", "confirmed", "paid", age=timedelta(hours=25)),
            make_order("C3", "pending", None),
        ]
        board = CustomerOrderBoard(api)
        board.load()
        return board

    def test_not_found_is_empty_list(self, api):
        api.get_orders.side_effect = ClientError(404)
        board = CustomerOrderBoard(api)

        assert board.load() is True
        assert board.orders == []

    def test_display_and_progress(self, board):
        order = board.orders[2]

        assert board.display(order).label == "Payment Failed"
        assert [s.label for s in board.progress(order).steps] == [
            "Pending",
            "Payment Failed",
        ]

    def test_can_cancel(self, board):
        assert board.can_cancel(board.orders[0], now=NOW) is True
        assert board.can_cancel(board.orders[1], now=NOW) is False
        assert board.can_cancel(board.orders[2], now=NOW) is False

    def test_cancel(self, board, api):
        """Тест: после успешной отмены заказ отображается отмененным."""
        assert board.cancel("C1", now=NOW) is True

        api.cancel_order.assert_called_once_with("C1")
        order = board.orders[0]
        assert order["status"] == "cancelled"
        assert board.display(order).label == "Cancelled"
        assert board.progress(order).current_index == 1

    def test_cancel_failure_keeps_status(self, board, api):
        api.cancel_order.side_effect = ClientError(None)

        assert board.cancel("C1", now=NOW) is False

        assert board.orders[0]["status"] == "confirmed"
        assert board.error == NETWORK_ERROR_MESSAGE

    def test_cancel_outside_window_not_sent(self, board, api):
        assert board.cancel("C2", now=NOW) is False

        api.cancel_order.assert_not_called()

    def test_malformed_created_at(self, api):
        """Тест: некорректная дата создания означает, что отмена недоступна."""
        order = make_order("C4", "confirmed", "paid")
        order["created_at"] = "yesterday"
        api.get_orders.return_value = [order]
        board = CustomerOrderBoard(api)
        board.load()

        assert board.can_cancel(board.orders[0], now=NOW) is False
        assert board.cancel("C4", now=NOW) is False
        api.cancel_order.assert_not_called()


class TestParseDatetime:
    def test_zulu(self):
        assert parse_datetime("2026-03-01T12:00:00Z") == NOW

    def test_naive_is_utc(self):
        assert parse_datetime("2026-03-01T12:00:00") == NOW

    def test_none(self):
        assert parse_datetime(None) is None

    def test_malformed(self):
        assert parse_datetime("not-a-date") is None

from __future__ import annotations

import json

from payslip import notifications
from payslip.models import NotificationType
from payslip.notifications import NotificationInput


def test_payroll_generated_message(out_dir) -> None:
    row = notifications.notify_payroll_generated("user-42", "2024-06", "4700", "USD")
    assert row.id is not None
    assert row.type == NotificationType.PAYROLL_GENERATED
    assert row.title == "Payslip Generated"
    assert row.message == "Your payslip for June 2024 has been generated. Net pay: $4,700"
    assert row.link_url == "/payroll"
    assert json.loads(row.metadata_json) == {"payroll_month": "2024-06"}
    assert row.is_read is False


def test_payment_status_message(out_dir) -> None:
    row = notifications.notify_payment_status_updated("user-42", "2024-06", "paid")
    assert row.message == "Payment for June 2024 has been marked as paid"


def test_inbox_is_per_user_and_newest_first(out_dir) -> None:
    notifications.create_for_many(
        [
            NotificationInput("user-1", NotificationType.GENERAL, "first", "one"),
            NotificationInput("user-1", NotificationType.GENERAL, "second", "two"),
            NotificationInput("user-2", NotificationType.GENERAL, "other", "three"),
        ]
    )
    titles = [row.title for row in notifications.get_for_user("user-1")]
    assert titles == ["second", "first"]
    assert [row.title for row in notifications.get_for_user("user-1", limit=1)] == ["second"]
    assert notifications.get_unread_count("user-2") == 1


def test_read_and_delete(out_dir) -> None:
    first = notifications.create(NotificationInput("user-1", NotificationType.GENERAL, "a", "a"))
    second = notifications.create(NotificationInput("user-1", NotificationType.GENERAL, "b", "b"))

    # another user cannot touch the row
    assert notifications.mark_as_read(first.id, "user-2") is None
    assert notifications.mark_as_read(first.id, "user-1").is_read is True
    assert notifications.get_unread_count("user-1") == 1
    assert [row.title for row in notifications.get_for_user("user-1", unread_only=True)] == ["b"]

    assert notifications.delete(second.id, "user-1").deleted_at is not None
    assert [row.title for row in notifications.get_for_user("user-1")] == ["a"]
    assert notifications.get_unread_count("user-1") == 0


def test_mark_all_as_read(out_dir) -> None:
    for title in ("a", "b", "c"):
        notifications.create(NotificationInput("user-1", NotificationType.GENERAL, title, title))
    assert notifications.mark_all_as_read("user-1") == 3
    assert notifications.get_unread_count("user-1") == 0
    assert notifications.create_for_many([]) == []

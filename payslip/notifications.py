from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlmodel import col, select

from .config import PAYROLL_LINK_URL
from .models import Notification, NotificationType, get_session, init_db, utc_now
from .pipeline.formatting import format_currency, format_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationInput:
    user_id: str
    type: NotificationType
    title: str
    message: str
    link_url: Optional[str] = None
    metadata: Optional[dict] = None

    def to_row(self) -> Notification:
        return Notification(
            user_id=self.user_id,
            type=self.type,
            title=self.title,
            message=self.message,
            link_url=self.link_url,
            metadata_json=json.dumps(self.metadata, sort_keys=True) if self.metadata else None,
        )


def create(item: NotificationInput) -> Notification:
    return create_for_many([item])[0]


def create_for_many(items: Iterable[NotificationInput]) -> List[Notification]:
    rows = [item.to_row() for item in items]
    if not rows:
        return []
    init_db()
    with get_session() as session:
        session.add_all(rows)
        session.commit()
        for row in rows:
            session.refresh(row)
    logger.info("Created %d notification(s)", len(rows))
    return rows


def _visible(user_id: str):
    return (
        select(Notification)
        .where(Notification.user_id == user_id)
        .where(col(Notification.deleted_at).is_(None))
    )


def get_for_user(user_id: str, limit: int = 20, unread_only: bool = False) -> List[Notification]:
    init_db()
    statement = _visible(user_id)
    if unread_only:
        statement = statement.where(Notification.is_read == False)  # noqa: E712 - SQL expression
    statement = statement.order_by(col(Notification.created_at).desc(), col(Notification.id).desc()).limit(limit)
    with get_session() as session:
        return list(session.exec(statement))


def get_unread_count(user_id: str) -> int:
    init_db()
    statement = _visible(user_id).where(Notification.is_read == False)  # noqa: E712 - SQL expression
    with get_session() as session:
        return len(session.exec(statement).all())


def _update_one(notification_id: int, user_id: str, **changes) -> Optional[Notification]:
    init_db()
    with get_session() as session:
        row = session.get(Notification, notification_id)
        # rows belonging to someone else are treated as missing
        if row is None or row.user_id != user_id:
            return None
        for key, value in changes.items():
            setattr(row, key, value)
        session.add(row)
        session.commit()
        session.refresh(row)
        return row


def mark_as_read(notification_id: int, user_id: str) -> Optional[Notification]:
    return _update_one(notification_id, user_id, is_read=True)


def mark_all_as_read(user_id: str) -> int:
    init_db()
    with get_session() as session:
        rows = list(session.exec(_visible(user_id).where(Notification.is_read == False)))  # noqa: E712
        for row in rows:
            row.is_read = True
            session.add(row)
        session.commit()
    return len(rows)


def delete(notification_id: int, user_id: str) -> Optional[Notification]:
    return _update_one(notification_id, user_id, deleted_at=utc_now())


def notify_payroll_generated(
    employee_user_id: str,
    payroll_month: str,
    net_pay: str,
    currency: str = "USD",
) -> Notification:
    return create(
        NotificationInput(
            user_id=employee_user_id,
            type=NotificationType.PAYROLL_GENERATED,
            title="Payslip Generated",
            message=(
                f"Your payslip for {format_period(payroll_month)} has been generated. "
                f"Net pay: {format_currency(net_pay, currency)}"
            ),
            link_url=PAYROLL_LINK_URL,
            metadata={"payroll_month": payroll_month},
        )
    )


def notify_payment_status_updated(employee_user_id: str, payroll_month: str, status: str) -> Notification:
    return create(
        NotificationInput(
            user_id=employee_user_id,
            type=NotificationType.PAYMENT_STATUS_UPDATED,
            title="Payment Status Updated",
            message=f"Payment for {format_period(payroll_month)} has been marked as {status}",
            link_url=PAYROLL_LINK_URL,
        )
    )

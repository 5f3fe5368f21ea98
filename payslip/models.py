from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, Session, SQLModel, create_engine

from . import config


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    READY = "READY"
    FAILED = "FAILED"


class GeneratedPayslip(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    record_id: str = Field(index=True)
    employee_id: str = Field(index=True)
    payroll_month: str
    slug: str
    status: DocumentStatus = Field(default=DocumentStatus.READY)
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Artifact(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    payslip_id: int = Field(foreign_key="generatedpayslip.id")
    type: str
    path: str
    created_at: datetime = Field(default_factory=utc_now)


class NotificationType(str, Enum):
    PAYROLL_GENERATED = "payroll_generated"
    PAYMENT_STATUS_UPDATED = "payment_status_updated"
    GENERAL = "general"


class Notification(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    type: NotificationType
    title: str
    message: str
    is_read: bool = False
    link_url: Optional[str] = None
    metadata_json: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine.dispose()
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)

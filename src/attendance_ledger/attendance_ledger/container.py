from __future__ import annotations

import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .attendance.service import AttendanceService
from .database.bootstrap import apply_schema
from .database.connection import DatabaseConnection, DBConfig
from .insights.service import InsightService
from .ledger.store import LedgerStore
from .notifications.bus import NotificationBus
from .notifications.detection import describe
from .reports.service import AttendanceReportService
from .storage.memory import InMemoryStorage
from .storage.mysql_storage import MySQLKeyValueStorage
from .storage.port import KeyValueStorage
from .sync.sheets import SheetsSyncService
from .users.service import SessionService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    store: LedgerStore
    bus: NotificationBus
    replication: SheetsSyncService

    attendance_service: AttendanceService
    user_service: UserService
    session_service: SessionService
    report_service: AttendanceReportService
    insight_service: InsightService


def build_storage(settings: ModuleType | object) -> KeyValueStorage:
    backend = str(getattr(settings, "STORAGE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
        return MySQLKeyValueStorage(conn)
    raise ValueError(f"Unsupported STORAGE_BACKEND: {backend!r}")


def _log_notification(log) -> None:
    message = describe(log)
    if message:
        logger.info(message)


def build_container(settings: ModuleType | object, *, storage: Optional[KeyValueStorage] = None) -> Container:
    storage = storage or build_storage(settings)
    store = LedgerStore(storage)

    bus = NotificationBus(recency_seconds=float(getattr(settings, "NOTIFY_RECENCY_SECONDS", 5)))
    bus.attach(storage)
    bus.subscribe(_log_notification)
    storage.poll_changes()

    replication = SheetsSyncService(
        getattr(settings, "SHEETS_WEBHOOK_URL", None),
        timeout=float(getattr(settings, "SYNC_TIMEOUT_SECONDS", 10)),
    )
    insight_service = InsightService(
        getattr(settings, "INSIGHT_API_KEY", None),
        model=str(getattr(settings, "INSIGHT_MODEL", "gemini-2.5-flash")),
        timeout=float(getattr(settings, "INSIGHT_TIMEOUT_SECONDS", 30)),
    )

    return Container(
        storage=storage,
        store=store,
        bus=bus,
        replication=replication,
        attendance_service=AttendanceService(store, store, bus, replication=replication),
        user_service=UserService(store, replication=replication),
        session_service=SessionService(store, store),
        report_service=AttendanceReportService(store),
        insight_service=insight_service,
    )

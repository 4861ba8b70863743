from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import LogType
from ..core.exceptions import PreconditionError
from ..notifications.bus import NotificationBus
from ..sync.sheets import ReplicationSink
from ..users.model import User
from ..users.repository import UserRepository
from . import engine
from .factory import AttendanceStrategyFactory
from .model import TimeLog, TodaySummary
from .repository import TimeLogRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: check in, check out, manual entry, dashboard reads.

    Each mutation persists first and returns the saved log; the in-session
    notification and the outbound replication run after the save and cannot
    change its outcome.
    """

    def __init__(
        self,
        logs: TimeLogRepository,
        users: UserRepository,
        bus: NotificationBus,
        *,
        replication: Optional[ReplicationSink] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._logs = logs
        self._users = users
        self._bus = bus
        self._replication = replication
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, user: User, *, now: Optional[datetime] = None) -> TimeLog:
        now = now or now_local()
        log = engine.check_in(self._logs.list_logs(), user, now)
        return self._commit(log, email=user.email)

    def check_out(self, user: User, *, now: Optional[datetime] = None) -> TimeLog:
        now = now or now_local()
        active = self._logs.get_active_log(user.id)
        if active is None:
            raise PreconditionError(f"{user.name} has no active entry to check out")
        log = engine.close_work(active, now)
        return self._commit(log, email=user.email)

    def add_manual_entry(
        self,
        user: User,
        *,
        day: str,
        log_type: LogType | str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TimeLog:
        log = engine.manual_entry(
            user,
            day=day,
            log_type=log_type,
            start_time=start_time,
            end_time=end_time,
            notes=notes,
            factory=self._factory,
        )
        return self._commit(log, email=user.email)

    def active_entry(self, user_id: str) -> Optional[TimeLog]:
        return self._logs.get_active_log(user_id)

    def history(self, user_id: str) -> list[TimeLog]:
        return engine.user_history(self._logs.list_logs(), user_id)

    def company_activity(self) -> list[TimeLog]:
        return sorted(self._logs.list_logs(), key=lambda log: log.check_in, reverse=True)

    def today(self, user_id: str, *, now: Optional[datetime] = None) -> TodaySummary:
        return engine.summarize_today(self._logs.list_logs(), user_id, now or now_local())

    def _commit(self, log: TimeLog, *, email: Optional[str]) -> TimeLog:
        self._logs.save_log(log)
        self._bus.publish(log)
        if self._replication is not None:
            try:
                self._replication.sync_log(log, email)
            except Exception:
                logger.exception("Could not schedule replication for log %s", log.id)
        return log

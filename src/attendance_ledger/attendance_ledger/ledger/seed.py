from __future__ import annotations

import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..attendance.model import TimeLog
from ..common.datetime_utils import start_of_day
from ..core.constants import DEMO_SEED_DAYS
from ..core.enums import LogStatus, LogType, Role
from .store import LedgerStore

logger = logging.getLogger(__name__)


def generate_demo_logs(users, today: date, *, days: int = DEMO_SEED_DAYS, rng: Optional[random.Random] = None) -> list[TimeLog]:
    """Plausible history for the last ``days`` days, weekdays only.

    Each employee gets either a sick day (10%) or a shift starting between
    08:00 and 10:59 and lasting 7.5 to 9.5 hours.
    """
    rng = rng or random.Random()
    logs: list[TimeLog] = []

    for offset in range(days):
        day = today - timedelta(days=offset)
        if day.weekday() >= 5:
            continue
        date_str = day.isoformat()

        for user in users:
            if user.role != Role.EMPLOYEE:
                continue

            if rng.random() < 0.1:
                marker = start_of_day(day)
                logs.append(
                    TimeLog(
                        id=f"log-{date_str}-{user.id}",
                        user_id=user.id,
                        user_name=user.name,
                        type=LogType.SICK_LEAVE,
                        check_in=marker,
                        check_out=marker,
                        duration_minutes=0,
                        status=LogStatus.COMPLETED,
                        date=date_str,
                        remarks="Not feeling well",
                    )
                )
                continue

            check_in = datetime.combine(day, time(8 + rng.randrange(3), rng.randrange(60)))
            duration_minutes = int((8 + rng.random() * 2 - 0.5) * 60)
            logs.append(
                TimeLog(
                    id=f"log-{date_str}-{user.id}",
                    user_id=user.id,
                    user_name=user.name,
                    type=LogType.OFFICE_WORK,
                    check_in=check_in,
                    check_out=check_in + timedelta(minutes=duration_minutes),
                    duration_minutes=duration_minutes,
                    status=LogStatus.COMPLETED,
                    date=date_str,
                    remarks="",
                )
            )
    return logs


def seed_demo_logs(store: LedgerStore, today: date, *, days: int = DEMO_SEED_DAYS, rng: Optional[random.Random] = None) -> int:
    """Write demo history only when the ledger has never stored logs."""
    if store.has_logs():
        return 0
    logs = generate_demo_logs(store.list_users(), today, days=days, rng=rng)
    store.save_logs(logs)
    logger.info("Seeded %d demo logs", len(logs))
    return len(logs)

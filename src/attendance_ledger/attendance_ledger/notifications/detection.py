"""Derive which log changed from two full snapshots of the log collection.

The storage change signal carries whole collections, not a diff. The log
with the most recent event timestamp in the new snapshot is taken as the
changed one. This is a best-effort heuristic: it misidentifies the entry
when several logs change in one write or when a write back-dates a log.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..attendance.model import TimeLog
from ..core.constants import NOTIFY_RECENCY_SECONDS
from ..core.enums import LogStatus, LogType, NotificationKind
from ..core.exceptions import StorageError
from ..ledger.store import decode_logs

logger = logging.getLogger(__name__)


def latest_log(logs: list[TimeLog]) -> Optional[TimeLog]:
    return max(logs, key=lambda log: log.last_event_at, default=None)


def detect_changed_log(
    old_raw: Optional[str],
    new_raw: Optional[str],
    now: datetime,
    *,
    threshold_seconds: float = NOTIFY_RECENCY_SECONDS,
) -> Optional[TimeLog]:
    """Return the log a cross-session write most likely touched, or None.

    Only the new snapshot decides. None is returned when it is unreadable or
    empty, or when the candidate's timestamp is more than
    ``threshold_seconds`` old (initial loads and unrelated writes replay
    history). An unreadable old snapshot is only logged.
    """
    try:
        decode_logs(old_raw)
    except StorageError as e:
        logger.warning("Previous log snapshot is unreadable: %s", e)
    try:
        new_logs = decode_logs(new_raw)
    except StorageError as e:
        logger.warning("Ignoring log change event: %s", e)
        return None

    candidate = latest_log(new_logs)
    if candidate is None:
        return None

    if now - candidate.last_event_at > timedelta(seconds=threshold_seconds):
        logger.debug("Dropping stale log change %s (%s)", candidate.id, candidate.last_event_at)
        return None
    return candidate


def classify(log: TimeLog) -> Optional[NotificationKind]:
    if log.status == LogStatus.ACTIVE:
        return NotificationKind.CHECKED_IN
    if log.status == LogStatus.COMPLETED and log.type == LogType.OFFICE_WORK:
        return NotificationKind.CHECKED_OUT
    return None


def describe(log: TimeLog) -> Optional[str]:
    kind = classify(log)
    if kind == NotificationKind.CHECKED_IN:
        return f"{log.user_name} checked in at {log.check_in.strftime('%I:%M %p')}"
    if kind == NotificationKind.CHECKED_OUT and log.check_out:
        return f"{log.user_name} checked out at {log.check_out.strftime('%I:%M %p')}"
    return None

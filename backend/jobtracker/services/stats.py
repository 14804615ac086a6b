from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from jobtracker.models.job_application import ApplicationStatus

RESPONDED_STATUSES = (ApplicationStatus.INTERVIEWING.value, ApplicationStatus.OFFER.value)
SECONDS_PER_DAY = 60 * 60 * 24


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, ApplicationStatus) else str(status)


def compute_job_stats(rows: Iterable[Any], now: datetime | None = None) -> dict[str, Any]:
    """Summarize a snapshot of job rows.

    Each row needs ``status`` and ``date_applied`` attributes. The response
    rate counts interviewing and offer rows against the total; the average
    time to response is the mean age in whole days of the dateApplied of
    those same rows, skipping rows that were never marked applied.
    """
    current = now or datetime.utcnow()
    statuses: list[str] = []
    response_days: list[int] = []

    for row in rows:
        status = _status_value(row.status)
        statuses.append(status)
        if status in RESPONDED_STATUSES and row.date_applied is not None:
            elapsed = (current - row.date_applied).total_seconds()
            response_days.append(math.floor(elapsed / SECONDS_PER_DAY))

    total = len(statuses)
    counts = Counter(statuses)
    by_status = {status.value: counts.get(status.value, 0) for status in ApplicationStatus}

    responded = sum(counts.get(status, 0) for status in RESPONDED_STATUSES)
    response_rate = _round_half_up(responded / total, 2) if total else 0
    average_days = int(_round_half_up(sum(response_days) / len(response_days))) if response_days else 0

    return {
        "total": total,
        "by_status": by_status,
        "response_rate": response_rate,
        "average_time_to_response": average_days,
    }

"""Review SLA clock.

The deadline is never stored: it is recomputed from the submission timestamp
on every query, so moving "now" forward needs no write. It is advisory only;
nothing transitions a week when it passes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.constants import REVIEW_SLA_HOURS, URGENT_WINDOW_HOURS
from ..core.enums import DeadlineBucket

REVIEW_SLA = timedelta(hours=REVIEW_SLA_HOURS)
URGENT_WINDOW = timedelta(hours=URGENT_WINDOW_HOURS)


@dataclass(frozen=True)
class ReviewDeadline:
    submitted_at: datetime
    deadline: datetime
    elapsed: timedelta
    remaining: timedelta
    bucket: DeadlineBucket

    @property
    def is_overdue(self) -> bool:
        return self.bucket == DeadlineBucket.OVERDUE


def bucket_for(remaining: timedelta) -> DeadlineBucket:
    if remaining < timedelta(0):
        return DeadlineBucket.OVERDUE
    if remaining < URGENT_WINDOW:
        return DeadlineBucket.URGENT
    return DeadlineBucket.NORMAL


def review_deadline(submitted_at: datetime, now: datetime) -> ReviewDeadline:
    deadline = submitted_at + REVIEW_SLA
    remaining = deadline - now
    return ReviewDeadline(
        submitted_at=submitted_at,
        deadline=deadline,
        elapsed=now - submitted_at,
        remaining=remaining,
        bucket=bucket_for(remaining),
    )


def format_remaining(remaining: timedelta) -> str:
    """Short label for worklists, e.g. "5h 12m left" or "3h 0m overdue"."""
    seconds = int(abs(remaining.total_seconds()))
    hours, rest = divmod(seconds, 3600)
    label = f"{hours}h {rest // 60}m"
    return f"{label} overdue" if remaining < timedelta(0) else f"{label} left"

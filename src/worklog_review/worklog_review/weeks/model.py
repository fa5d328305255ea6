from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional, Tuple

from ..core.constants import WEEKLY_TARGET_MINUTES
from ..core.enums import DayStatus, LogStatus, WorkCategory
from ..worklogs.model import DailyLogRecord


@dataclass(frozen=True)
class WeekSubmission:
    """Read-model: every record of one employee in one Monday-Sunday window.

    Never persisted. ``status`` is derived from the record statuses each time
    the week is aggregated.
    """

    employee_id: int
    week_start: date
    week_end: date
    records: Tuple[DailyLogRecord, ...]
    total_minutes: int
    days_logged: int
    status: LogStatus
    submitted_at: Optional[datetime]
    category_minutes: Dict[WorkCategory, int] = field(default_factory=dict)
    category_counts: Dict[WorkCategory, int] = field(default_factory=dict)

    @property
    def target_minutes(self) -> int:
        return WEEKLY_TARGET_MINUTES

    @property
    def progress_percent(self) -> int:
        return min(100, round(self.total_minutes * 100 / WEEKLY_TARGET_MINUTES))

    @property
    def earliest_record(self) -> Optional[DailyLogRecord]:
        return self.records[0] if self.records else None


@dataclass(frozen=True)
class DaySummary:
    log_date: date
    day_name: str
    minutes: int
    status: DayStatus
    record_id: Optional[int] = None

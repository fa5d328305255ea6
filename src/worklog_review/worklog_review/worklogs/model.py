from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LogStatus, WorkCategory


@dataclass(frozen=True)
class DailyLogRecord:
    """Domain entity: one employee's work entry for one calendar date.

    At most one record exists per (employee_id, log_date).
    """

    record_id: int
    employee_id: int
    log_date: date
    category: WorkCategory
    description: str
    duration_minutes: int
    status: LogStatus
    blockers: Optional[str] = None
    submitted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from ..common.datetime_utils import monday_of, now_local
from ..core.constants import DEFAULT_HISTORY_WEEKS
from ..core.exceptions import ValidationError
from ..worklogs.repository import WorkLogRepository
from .aggregator import aggregate_week, group_into_weeks, week_bounds
from .model import WeekSubmission


class WeekService:
    """Read-only entry point to the Week Aggregator, shared by employee and manager views."""

    def __init__(self, worklogs: WorkLogRepository):
        self._worklogs = worklogs

    def get_week(self, *, employee_id: int, reference_date: date) -> Optional[WeekSubmission]:
        week_start, week_end = week_bounds(reference_date)
        records = self._worklogs.list_records(employee_id=int(employee_id), date_from=week_start, date_to=week_end)
        return aggregate_week(int(employee_id), week_start, records)

    def list_weeks(
        self,
        *,
        employee_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        today: Optional[date] = None,
    ) -> List[WeekSubmission]:
        """Historical scan: weeks with at least one record, newest first."""
        today = today or now_local().date()
        date_to = date_to or today
        date_from = date_from or monday_of(today) - timedelta(weeks=DEFAULT_HISTORY_WEEKS)
        if date_to < date_from:
            raise ValidationError("End date must be on or after start date", field="date_to")

        start = monday_of(date_from)
        end = monday_of(date_to) + timedelta(days=6)
        records = self._worklogs.list_records(employee_id=int(employee_id), date_from=start, date_to=end)
        return group_into_weeks(int(employee_id), records)

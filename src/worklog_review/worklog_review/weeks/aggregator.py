"""Week aggregation.

Groups daily log records into Monday-Sunday submission units and derives the
week status. Everything here is a pure function of its inputs.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from ..common.datetime_utils import monday_of, sunday_of
from ..core.enums import DayStatus, LogStatus
from ..worklogs.model import DailyLogRecord
from .model import DaySummary, WeekSubmission

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def week_bounds(reference: date) -> Tuple[date, date]:
    return monday_of(reference), sunday_of(reference)


def derive_status(statuses: Iterable[LogStatus]) -> LogStatus:
    """Rework > Submitted > Approved > Draft.

    Approved requires every status to be Approved and at least one status.
    Anything else (all Draft, Draft mixed with Approved, empty) is Draft.
    """
    seen = set(statuses)
    if LogStatus.REWORK in seen:
        return LogStatus.REWORK
    if LogStatus.SUBMITTED in seen:
        return LogStatus.SUBMITTED
    if seen == {LogStatus.APPROVED}:
        return LogStatus.APPROVED
    return LogStatus.DRAFT


def aggregate_week(
    employee_id: int,
    week_start: date,
    records: Iterable[DailyLogRecord],
) -> Optional[WeekSubmission]:
    """Build the WeekSubmission for the window starting at ``week_start``.

    Records of other employees or outside the window are ignored. Returns None
    when nothing was logged in the window.
    """
    week_start = monday_of(week_start)
    week_end = week_start + timedelta(days=6)

    in_week = sorted(
        (r for r in records if r.employee_id == employee_id and week_start <= r.log_date <= week_end),
        key=lambda r: (r.log_date, r.record_id),
    )
    if not in_week:
        return None

    category_minutes: Counter = Counter()
    category_counts: Counter = Counter()
    for r in in_week:
        category_minutes[r.category] += r.duration_minutes
        category_counts[r.category] += 1

    submitted = [r.submitted_at for r in in_week if r.submitted_at is not None]

    return WeekSubmission(
        employee_id=employee_id,
        week_start=week_start,
        week_end=week_end,
        records=tuple(in_week),
        total_minutes=sum(r.duration_minutes for r in in_week),
        days_logged=len({r.log_date for r in in_week}),
        status=derive_status(r.status for r in in_week),
        submitted_at=max(submitted) if submitted else None,
        category_minutes=dict(category_minutes),
        category_counts=dict(category_counts),
    )


def group_into_weeks(employee_id: int, records: Sequence[DailyLogRecord]) -> List[WeekSubmission]:
    """Every week that has at least one record, newest week first."""
    by_week = defaultdict(list)
    for r in records:
        if r.employee_id == employee_id:
            by_week[monday_of(r.log_date)].append(r)

    weeks = []
    for week_start in sorted(by_week, reverse=True):
        submission = aggregate_week(employee_id, week_start, by_week[week_start])
        if submission is not None:
            weeks.append(submission)
    return weeks


def day_breakdown(submission: WeekSubmission) -> List[DaySummary]:
    by_date = {}
    for r in submission.records:
        by_date.setdefault(r.log_date, []).append(r)

    days = []
    for offset, name in enumerate(DAY_NAMES):
        day = submission.week_start + timedelta(days=offset)
        day_records = by_date.get(day, [])
        if day_records:
            status = DayStatus(derive_status(r.status for r in day_records).value)
        else:
            status = DayStatus.NO_ENTRY
        days.append(
            DaySummary(
                log_date=day,
                day_name=name,
                minutes=sum(r.duration_minutes for r in day_records),
                status=status,
                record_id=day_records[0].record_id if day_records else None,
            )
        )
    return days

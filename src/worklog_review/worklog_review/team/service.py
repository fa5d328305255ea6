from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from ..common.datetime_utils import monday_of, now_local
from ..core.enums import LogStatus, ReviewWindow, Role, SortOrder
from ..core.exceptions import AuthorizationError, ValidationError
from ..deadlines.tracker import review_deadline
from ..weeks.aggregator import day_breakdown, group_into_weeks
from ..worklogs.repository import WorkLogRepository
from .model import Employee, TeamStats, TeamSubmissionRow
from .repository import TeamDirectory

logger = logging.getLogger(__name__)


def window_range(window: ReviewWindow, today: date) -> Tuple[date, date]:
    """First Monday and last Sunday covered by ``window``."""
    this_monday = monday_of(today)
    this_sunday = this_monday + timedelta(days=6)

    if window == ReviewWindow.CURRENT_WEEK:
        return this_monday, this_sunday
    if window == ReviewWindow.LAST_WEEK:
        return this_monday - timedelta(weeks=1), this_monday - timedelta(days=1)
    if window == ReviewWindow.LAST_2_WEEKS:
        return this_monday - timedelta(weeks=2), this_sunday
    if window == ReviewWindow.LAST_MONTH:
        return this_monday - timedelta(weeks=4), this_sunday
    raise ValidationError(f"Unsupported window: {window}", field="window")


def _coerce(enum_cls, value, field_name: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(v.value for v in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", field=field_name)


def sort_rows(rows: Iterable[TeamSubmissionRow], order: SortOrder) -> List[TeamSubmissionRow]:
    rows = sorted(rows, key=lambda r: (r.employee.full_name, r.submission.week_start))

    if order == SortOrder.DEADLINE:
        with_deadline = sorted((r for r in rows if r.deadline), key=lambda r: r.deadline.deadline)
        return with_deadline + [r for r in rows if not r.deadline]

    submitted = [r for r in rows if r.submission.submitted_at]
    unsubmitted = [r for r in rows if not r.submission.submitted_at]
    submitted.sort(key=lambda r: r.submission.submitted_at, reverse=(order == SortOrder.NEWEST))
    return submitted + unsubmitted


class TeamRollupService:
    """Use case: a reviewer's worklist of team week submissions. Read-only."""

    def __init__(self, worklogs: WorkLogRepository, directory: TeamDirectory):
        self._worklogs = worklogs
        self._directory = directory

    def _population(self, current_role: Role, viewer_id: int) -> List[Employee]:
        if current_role == Role.ADMIN:
            return list(self._directory.list_active_employees())
        if current_role == Role.MANAGER:
            return list(self._directory.list_reports(manager_id=int(viewer_id)))
        raise AuthorizationError("Only managers and admins can view team work logs")

    def list_team_submissions(
        self,
        *,
        current_role: Role,
        viewer_id: int,
        window=ReviewWindow.CURRENT_WEEK,
        employee_id: Optional[int] = None,
        status=None,
        sort=SortOrder.DEADLINE,
        now: Optional[datetime] = None,
    ) -> List[TeamSubmissionRow]:
        window = _coerce(ReviewWindow, window, "window")
        status = _coerce(LogStatus, status, "status")
        sort = _coerce(SortOrder, sort, "sort")
        now = now or now_local()

        members = self._population(current_role, viewer_id)
        if employee_id is not None:
            members = [m for m in members if m.employee_id == int(employee_id)]
        if not members:
            return []

        start, end = window_range(window, now.date())
        records = self._worklogs.list_records_for_employees(
            employee_ids=[m.employee_id for m in members],
            date_from=start,
            date_to=end,
        )

        rows: List[TeamSubmissionRow] = []
        for member in members:
            for week in group_into_weeks(member.employee_id, records):
                if status is not None and week.status != status:
                    continue
                deadline = None
                if week.status == LogStatus.SUBMITTED and week.submitted_at is not None:
                    deadline = review_deadline(week.submitted_at, now)
                rows.append(
                    TeamSubmissionRow(
                        employee=member,
                        submission=week,
                        days=day_breakdown(week),
                        deadline=deadline,
                    )
                )

        logger.debug(
            "Team rollup viewer=%s window=%s members=%d rows=%d", viewer_id, window.value, len(members), len(rows)
        )
        return sort_rows(rows, sort)

    @staticmethod
    def summarize(rows: Iterable[TeamSubmissionRow]) -> TeamStats:
        rows = list(rows)
        return TeamStats(
            pending=sum(1 for r in rows if r.submission.status == LogStatus.SUBMITTED),
            approved=sum(1 for r in rows if r.submission.status == LogStatus.APPROVED),
            rework=sum(1 for r in rows if r.submission.status == LogStatus.REWORK),
            overdue=sum(1 for r in rows if r.deadline is not None and r.deadline.is_overdue),
        )

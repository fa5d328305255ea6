from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.worklog_review.worklog_review.core.enums import DeadlineBucket, LogStatus, ReviewWindow, Role, SortOrder, WorkCategory
from src.worklog_review.worklog_review.core.exceptions import AuthorizationError, ValidationError
from src.worklog_review.worklog_review.team.service import TeamRollupService, window_range
from tests.fakes import InMemoryWorkLogs, default_directory

NOW = datetime(2026, 10, 21, 10, 0, 0)
MONDAY = date(2026, 10, 19)


@pytest.mark.parametrize(
    "window, expected",
    [
        (ReviewWindow.CURRENT_WEEK, (MONDAY, date(2026, 10, 25))),
        (ReviewWindow.LAST_WEEK, (date(2026, 10, 12), date(2026, 10, 18))),
        (ReviewWindow.LAST_2_WEEKS, (date(2026, 10, 5), date(2026, 10, 25))),
        (ReviewWindow.LAST_MONTH, (date(2026, 9, 21), date(2026, 10, 25))),
    ],
)
def test_window_range(window, expected):
    assert window_range(window, NOW.date()) == expected


def _seeded():
    repo = InMemoryWorkLogs()
    # Bea (reports to 10): submitted 47h ago, urgent
    repo.add(employee_id=2, log_date=MONDAY, minutes=480, status=LogStatus.SUBMITTED, submitted_at=NOW - timedelta(hours=47))
    repo.add(
        employee_id=2, log_date=date(2026, 10, 20), minutes=240, category=WorkCategory.MEETING,
        status=LogStatus.SUBMITTED, submitted_at=NOW - timedelta(hours=47),
    )
    # Carl (reports to 10): submitted 2h ago, normal
    repo.add(employee_id=3, log_date=MONDAY, status=LogStatus.SUBMITTED, submitted_at=NOW - timedelta(hours=2))
    # Carl last week: overdue, still pending
    repo.add(employee_id=3, log_date=date(2026, 10, 13), status=LogStatus.SUBMITTED, submitted_at=NOW - timedelta(days=7))
    # Dina (reports to 20): approved
    repo.add(employee_id=4, log_date=MONDAY, status=LogStatus.APPROVED, submitted_at=NOW - timedelta(hours=20))
    # Eli is inactive and never listed
    repo.add(employee_id=5, log_date=MONDAY, status=LogStatus.SUBMITTED, submitted_at=NOW - timedelta(hours=1))
    return repo, TeamRollupService(repo, default_directory())


def test_manager_sees_only_active_direct_reports():
    _, svc = _seeded()

    rows = svc.list_team_submissions(current_role=Role.MANAGER, viewer_id=10, window=ReviewWindow.CURRENT_WEEK, now=NOW)

    assert {r.employee.employee_id for r in rows} == {2, 3}


def test_admin_sees_everyone_active():
    _, svc = _seeded()

    rows = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="current_week", now=NOW)

    assert {r.employee.employee_id for r in rows} == {2, 3, 4}


def test_employee_cannot_view_team():
    _, svc = _seeded()
    with pytest.raises(AuthorizationError):
        svc.list_team_submissions(current_role=Role.EMPLOYEE, viewer_id=2, now=NOW)


def test_rows_carry_summary_and_deadline():
    _, svc = _seeded()

    rows = svc.list_team_submissions(current_role=Role.MANAGER, viewer_id=10, employee_id=2, now=NOW)

    [row] = rows
    assert row.submission.total_minutes == 720
    assert row.submission.days_logged == 2
    assert row.submission.category_minutes == {WorkCategory.TASK: 480, WorkCategory.MEETING: 240}
    assert row.deadline.bucket == DeadlineBucket.URGENT
    assert len(row.days) == 7


def test_approved_weeks_have_no_deadline():
    _, svc = _seeded()

    [row] = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, employee_id=4, now=NOW)

    assert row.submission.status == LogStatus.APPROVED
    assert row.deadline is None


def test_status_filter():
    _, svc = _seeded()

    rows = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, status="Approved", now=NOW)

    assert [r.employee.employee_id for r in rows] == [4]


def test_sort_by_deadline_soonest_first():
    _, svc = _seeded()

    rows = svc.list_team_submissions(
        current_role=Role.ADMIN, viewer_id=1, window=ReviewWindow.LAST_2_WEEKS, sort=SortOrder.DEADLINE, now=NOW
    )

    assert [(r.employee.employee_id, r.submission.week_start) for r in rows] == [
        (3, date(2026, 10, 12)),
        (2, MONDAY),
        (3, MONDAY),
        (4, MONDAY),
    ]
    assert rows[0].deadline.bucket == DeadlineBucket.OVERDUE


def test_sort_by_submission_time():
    _, svc = _seeded()

    newest = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="last_month", sort="newest", now=NOW)
    oldest = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="last_month", sort="oldest", now=NOW)

    assert [r.employee.employee_id for r in newest] == [3, 4, 2, 3]
    assert [r.employee.employee_id for r in oldest] == [3, 2, 4, 3]


def test_last_week_window_excludes_current_week():
    _, svc = _seeded()

    rows = svc.list_team_submissions(current_role=Role.MANAGER, viewer_id=10, window=ReviewWindow.LAST_WEEK, now=NOW)

    assert [(r.employee.employee_id, r.submission.week_start) for r in rows] == [(3, date(2026, 10, 12))]


def test_unknown_window_or_sort_is_validation_error():
    _, svc = _seeded()
    with pytest.raises(ValidationError):
        svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="last_year", now=NOW)
    with pytest.raises(ValidationError):
        svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, sort="alphabetical", now=NOW)


def test_summarize_counts():
    repo, svc = _seeded()
    repo.add(employee_id=2, log_date=date(2026, 10, 13), status=LogStatus.REWORK)

    rows = svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="last_2_weeks", now=NOW)
    stats = svc.summarize(rows)

    assert stats.pending == 3
    assert stats.approved == 1
    assert stats.rework == 1
    assert stats.overdue == 1


def test_rollup_performs_no_writes():
    repo, svc = _seeded()
    before = {e: repo.statuses(e) for e in (2, 3, 4, 5)}

    svc.list_team_submissions(current_role=Role.ADMIN, viewer_id=1, window="last_month", now=NOW)

    assert {e: repo.statuses(e) for e in (2, 3, 4, 5)} == before

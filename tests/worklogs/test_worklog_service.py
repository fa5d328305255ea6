from __future__ import annotations

from datetime import date, datetime

import pytest

from src.worklog_review.worklog_review.core.enums import FeedbackAction, LogStatus, Role, WorkCategory
from src.worklog_review.worklog_review.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from src.worklog_review.worklog_review.feedback.service import FeedbackService
from src.worklog_review.worklog_review.review.service import ReviewService
from src.worklog_review.worklog_review.worklogs.service import WorkLogService
from tests.fakes import InMemoryWorkLogs, default_directory

TODAY = date(2026, 10, 21)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
DESCRIPTION = "Reviewed the onboarding checklist with HR"


def _save(svc, **overrides):
    kwargs = dict(
        employee_id=2,
        log_date=MONDAY,
        category="Task",
        description=DESCRIPTION,
        minutes=480,
        today=TODAY,
    )
    kwargs.update(overrides)
    return svc.upsert_record(**kwargs)


def test_new_record_is_draft():
    svc = WorkLogService(InMemoryWorkLogs())

    rec = _save(svc, blockers="  waiting on VPN access ")

    assert rec.status == LogStatus.DRAFT
    assert rec.category == WorkCategory.TASK
    assert rec.duration_minutes == 480
    assert rec.blockers == "waiting on VPN access"


def test_upsert_updates_same_day_instead_of_duplicating():
    repo = InMemoryWorkLogs()
    svc = WorkLogService(repo)

    first = _save(svc)
    second = _save(svc, minutes=300, category="Meeting")

    assert first.record_id == second.record_id
    assert second.duration_minutes == 300
    assert len(repo.list_records(employee_id=2, date_from=MONDAY, date_to=TODAY)) == 1


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"description": "too short"}, "description"),
        ({"description": "x" * 1001}, "description"),
        ({"description": "   "}, "description"),
        ({"minutes": 0}, "duration_minutes"),
        ({"minutes": 961}, "duration_minutes"),
        ({"minutes": "abc"}, "duration_minutes"),
        ({"minutes": 480.7}, "duration_minutes"),
        ({"minutes": True}, "duration_minutes"),
        ({"category": None}, "category"),
        ({"category": "Gaming"}, "category"),
        ({"blockers": "b" * 501}, "blockers"),
    ],
)
def test_invalid_input_names_the_field(overrides, field):
    repo = InMemoryWorkLogs()
    svc = WorkLogService(repo)

    with pytest.raises(ValidationError) as exc:
        _save(svc, **overrides)

    assert exc.value.field == field
    assert repo.list_records(employee_id=2, date_from=MONDAY, date_to=TODAY) == []


def test_boundary_values_are_accepted():
    svc = WorkLogService(InMemoryWorkLogs())

    assert _save(svc, minutes=1, description="d" * 20).duration_minutes == 1
    assert _save(svc, log_date=TODAY, minutes=960, description="d" * 1000).duration_minutes == 960


def test_future_date_rejected():
    svc = WorkLogService(InMemoryWorkLogs())
    with pytest.raises(InvalidTransitionError):
        _save(svc, log_date=date(2026, 10, 22))


def test_previous_week_rejected():
    svc = WorkLogService(InMemoryWorkLogs())
    with pytest.raises(InvalidTransitionError):
        _save(svc, log_date=date(2026, 10, 16))


def test_submitted_week_is_locked():
    repo = InMemoryWorkLogs()
    repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.SUBMITTED)
    svc = WorkLogService(repo)

    with pytest.raises(InvalidTransitionError):
        _save(svc, log_date=date(2026, 10, 20))
    with pytest.raises(InvalidTransitionError):
        _save(svc, minutes=100)


def test_new_day_cannot_be_added_to_approved_week():
    repo = InMemoryWorkLogs()
    repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.APPROVED)
    svc = WorkLogService(repo)

    with pytest.raises(InvalidTransitionError):
        _save(svc, log_date=TODAY)


def test_rework_record_keeps_rework_status_when_edited():
    repo = InMemoryWorkLogs()
    repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.REWORK)
    svc = WorkLogService(repo)

    rec = _save(svc, description=DESCRIPTION + " and added meeting notes")

    assert rec.status == LogStatus.REWORK


def test_approved_day_in_reworked_week_stays_read_only():
    repo = InMemoryWorkLogs()
    repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.REWORK)
    approved = repo.add(employee_id=2, log_date=TUESDAY, status=LogStatus.APPROVED)
    svc = WorkLogService(repo)

    with pytest.raises(InvalidTransitionError, match="approved"):
        _save(svc, log_date=TUESDAY, minutes=30)
    with pytest.raises(InvalidTransitionError, match="approved"):
        svc.delete_record(employee_id=2, record_id=approved.record_id, today=TODAY)

    kept = repo.get_record(record_id=approved.record_id)
    assert kept.status == LogStatus.APPROVED
    assert kept.duration_minutes == 480


def test_empty_day_can_be_added_to_reworked_week():
    repo = InMemoryWorkLogs()
    repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.REWORK)
    svc = WorkLogService(repo)

    rec = _save(svc, log_date=TUESDAY)

    assert rec.status == LogStatus.DRAFT


def test_delete_own_draft():
    repo = InMemoryWorkLogs()
    rec = repo.add(employee_id=2, log_date=MONDAY)
    svc = WorkLogService(repo)

    svc.delete_record(employee_id=2, record_id=rec.record_id, today=TODAY)

    assert repo.get_record(record_id=rec.record_id) is None


def test_delete_someone_elses_record_is_not_found():
    repo = InMemoryWorkLogs()
    rec = repo.add(employee_id=3, log_date=MONDAY)
    svc = WorkLogService(repo)

    with pytest.raises(NotFoundError):
        svc.delete_record(employee_id=2, record_id=rec.record_id, today=TODAY)
    with pytest.raises(NotFoundError):
        svc.delete_record(employee_id=2, record_id=999, today=TODAY)


def test_delete_in_submitted_week_is_rejected():
    repo = InMemoryWorkLogs()
    rec = repo.add(employee_id=2, log_date=MONDAY, status=LogStatus.SUBMITTED)
    svc = WorkLogService(repo)

    with pytest.raises(InvalidTransitionError):
        svc.delete_record(employee_id=2, record_id=rec.record_id, today=TODAY)
    assert repo.get_record(record_id=rec.record_id) is not None


def test_list_records_rejects_inverted_range():
    svc = WorkLogService(InMemoryWorkLogs())
    with pytest.raises(ValidationError):
        svc.list_records(employee_id=2, date_from=TODAY, date_to=MONDAY)


def test_whole_number_strings_and_floats_are_accepted():
    svc = WorkLogService(InMemoryWorkLogs())

    assert _save(svc, minutes="300").duration_minutes == 300
    assert _save(svc, minutes=240.0).duration_minutes == 240


def test_day_carrying_week_feedback_cannot_be_deleted():
    repo = InMemoryWorkLogs()
    worklogs = WorkLogService(repo)
    review = ReviewService(repo, default_directory())
    feedback = FeedbackService(repo.feedback, repo)
    monday = _save(worklogs, log_date=MONDAY)
    tuesday = _save(worklogs, log_date=TUESDAY, category="Meeting", minutes=240)
    review.submit_week(employee_id=2, week_start=MONDAY, now=datetime(2026, 10, 21, 9, 0))
    review.request_rework(
        current_role=Role.MANAGER, reviewer_id=10, employee_id=2, week_start=MONDAY,
        comment="Break Monday down into the individual tickets.",
    )

    with pytest.raises(InvalidTransitionError, match="feedback"):
        worklogs.delete_record(employee_id=2, record_id=monday.record_id, today=TODAY)

    assert repo.get_record(record_id=monday.record_id) is not None
    [comment] = feedback.list_comments(employee_id=2, week_start=MONDAY)
    assert comment.action == FeedbackAction.REWORK

    # Days without feedback in the reopened week can still go.
    worklogs.delete_record(employee_id=2, record_id=tuesday.record_id, today=TODAY)
    assert repo.get_record(record_id=tuesday.record_id) is None
    assert len(feedback.list_comments(employee_id=2, week_start=MONDAY)) == 1

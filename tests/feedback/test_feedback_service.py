from __future__ import annotations

from datetime import date

import pytest

from src.worklog_review.worklog_review.core.enums import FeedbackAction
from src.worklog_review.worklog_review.core.exceptions import NotFoundError, ValidationError
from src.worklog_review.worklog_review.feedback.service import FeedbackService
from tests.fakes import InMemoryWorkLogs

MONDAY = date(2026, 10, 19)


def _service():
    repo = InMemoryWorkLogs()
    first = repo.add(employee_id=2, log_date=MONDAY)
    repo.add(employee_id=2, log_date=date(2026, 10, 20))
    return repo, FeedbackService(repo.feedback, repo), first


def test_comments_are_listed_newest_first():
    repo, svc, rec = _service()
    svc.add_comment(record_id=rec.record_id, manager_id=10, text="Missing Friday entry", action="Rework")
    svc.add_comment(record_id=rec.record_id, manager_id=10, text="Thanks, looks good", action=FeedbackAction.APPROVED)

    comments = svc.list_comments(employee_id=2, week_start=date(2026, 10, 22))

    assert [c.comment for c in comments] == ["Thanks, looks good", "Missing Friday entry"]
    assert svc.latest_comment(employee_id=2, week_start=MONDAY).action == FeedbackAction.APPROVED
    assert len(svc.list_record_comments(record_id=rec.record_id)) == 2


def test_comments_are_scoped_to_the_week():
    repo, svc, rec = _service()
    other = repo.add(employee_id=2, log_date=date(2026, 10, 12))
    svc.add_comment(record_id=other.record_id, manager_id=10, text="Approved last week", action="Approved")

    assert svc.list_comments(employee_id=2, week_start=MONDAY) == []
    assert svc.latest_comment(employee_id=2, week_start=MONDAY) is None


def test_empty_comment_rejected():
    _, svc, rec = _service()
    with pytest.raises(ValidationError):
        svc.add_comment(record_id=rec.record_id, manager_id=10, text="   ", action="Approved")


def test_rework_comment_needs_ten_characters():
    repo, svc, rec = _service()
    with pytest.raises(ValidationError):
        svc.add_comment(record_id=rec.record_id, manager_id=10, text="Too vague", action="Rework")
    assert repo.feedback.all() == []


def test_unknown_action_rejected():
    _, svc, rec = _service()
    with pytest.raises(ValidationError) as exc:
        svc.add_comment(record_id=rec.record_id, manager_id=10, text="Looks fine to me", action="Rejected")
    assert exc.value.field == "action"


def test_comment_on_missing_record_is_not_found():
    _, svc, _ = _service()
    with pytest.raises(NotFoundError):
        svc.add_comment(record_id=404, manager_id=10, text="Looks fine to me", action="Approved")

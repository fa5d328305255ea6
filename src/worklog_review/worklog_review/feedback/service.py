from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import REWORK_COMMENT_MIN_LENGTH
from ..core.enums import FeedbackAction
from ..core.exceptions import NotFoundError, ValidationError
from ..weeks.aggregator import week_bounds
from ..worklogs.repository import WorkLogRepository
from .model import FeedbackComment
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


def validate_comment(text: Optional[str], action: FeedbackAction) -> str:
    text = require_non_empty(text, "comment")
    if action == FeedbackAction.REWORK:
        require_min_length(text, "comment", REWORK_COMMENT_MIN_LENGTH)
    return text


def _newest_first(comments) -> List[FeedbackComment]:
    return sorted(comments, key=lambda c: (c.created_at, c.comment_id), reverse=True)


class FeedbackService:
    """Manager feedback history. Corrections are new comments, never edits."""

    def __init__(self, feedback: FeedbackRepository, worklogs: WorkLogRepository):
        self._feedback = feedback
        self._worklogs = worklogs

    def add_comment(self, *, record_id: int, manager_id: int, text: Optional[str], action) -> FeedbackComment:
        try:
            action = FeedbackAction(action)
        except ValueError:
            raise ValidationError("Unknown feedback action", field="action")
        text = validate_comment(text, action)

        record = self._worklogs.get_record(record_id=int(record_id))
        if record is None:
            raise NotFoundError("Work log record not found")

        comment_id = self._feedback.add_comment(
            record_id=record.record_id,
            manager_id=int(manager_id),
            comment=text,
            action=action,
        )
        logger.info("Feedback %s added record=%s manager=%s action=%s", comment_id, record_id, manager_id, action.value)

        for c in self._feedback.list_for_record(record_id=record.record_id):
            if c.comment_id == comment_id:
                return c
        raise NotFoundError("Saved comment could not be read back")

    def list_comments(self, *, employee_id: int, week_start: date) -> List[FeedbackComment]:
        start, end = week_bounds(week_start)
        return _newest_first(self._feedback.list_for_week(employee_id=int(employee_id), week_start=start, week_end=end))

    def list_record_comments(self, *, record_id: int) -> List[FeedbackComment]:
        return _newest_first(self._feedback.list_for_record(record_id=int(record_id)))

    def latest_comment(self, *, employee_id: int, week_start: date) -> Optional[FeedbackComment]:
        comments = self.list_comments(employee_id=employee_id, week_start=week_start)
        return comments[0] if comments else None

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import FeedbackAction
from .model import FeedbackComment


class FeedbackRepository(Protocol):
    """Append-only store: there is deliberately no update or delete."""

    def add_comment(self, *, record_id: int, manager_id: int, comment: str, action: FeedbackAction) -> int:
        raise NotImplementedError

    def list_for_record(self, *, record_id: int) -> Sequence[FeedbackComment]:
        raise NotImplementedError

    def list_for_week(self, *, employee_id: int, week_start: date, week_end: date) -> Sequence[FeedbackComment]:
        """Comments attached to any record of the employee inside the window."""

        raise NotImplementedError

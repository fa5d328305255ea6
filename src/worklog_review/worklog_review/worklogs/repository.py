from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import FeedbackAction, LogStatus, WorkCategory
from .model import DailyLogRecord


class WorkLogRepository(Protocol):
    """Daily Log Store interface.

    The service layer depends on this protocol, never on a concrete database.
    Batch status changes (``transition_week``/``review_week``) must be applied
    as a single transaction.
    """

    def list_records(self, *, employee_id: int, date_from: date, date_to: date) -> Sequence[DailyLogRecord]:
        raise NotImplementedError

    def list_records_for_employees(
        self,
        *,
        employee_ids: Iterable[int],
        date_from: date,
        date_to: date,
    ) -> Sequence[DailyLogRecord]:
        raise NotImplementedError

    def get_record(self, *, record_id: int) -> Optional[DailyLogRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, *, employee_id: int, log_date: date) -> Optional[DailyLogRecord]:
        raise NotImplementedError

    def upsert_record(
        self,
        *,
        employee_id: int,
        log_date: date,
        category: WorkCategory,
        description: str,
        duration_minutes: int,
        blockers: Optional[str],
        status: LogStatus,
    ) -> int:
        """Insert or update the record for (employee_id, log_date); return its id."""

        raise NotImplementedError

    def delete_record(self, *, record_id: int) -> bool:
        raise NotImplementedError

    def has_feedback(self, *, record_id: int) -> bool:
        """True when a review comment is attached to the record."""

        raise NotImplementedError

    def transition_week(
        self,
        *,
        employee_id: int,
        week_start: date,
        week_end: date,
        from_statuses: Sequence[LogStatus],
        to_status: LogStatus,
        submitted_at: Optional[datetime] = None,
    ) -> int:
        """Move every record of the week in ``from_statuses`` to ``to_status``; return rows changed."""

        raise NotImplementedError

    def review_week(
        self,
        *,
        employee_id: int,
        week_start: date,
        week_end: date,
        to_status: LogStatus,
        manager_id: int,
        comment: str,
        action: FeedbackAction,
    ) -> int:
        """Move the week's Submitted records to ``to_status`` and append one comment.

        Both writes happen in one transaction. Returns the new comment id, or 0
        when no Submitted record was found (nothing written).
        """

        raise NotImplementedError

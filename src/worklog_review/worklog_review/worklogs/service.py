from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import monday_of, now_local, sunday_of
from ..common.validators import require_int_range, require_max_length, require_min_length, require_non_empty
from ..core.constants import (
    BLOCKERS_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
)
from ..core.enums import LogStatus, WorkCategory
from ..core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from ..weeks.aggregator import derive_status
from .editability import ensure_editable
from .model import DailyLogRecord
from .repository import WorkLogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewDailyLog:
    """Validated form input for one day's entry."""

    log_date: date
    category: WorkCategory
    description: str
    duration_minutes: int
    blockers: Optional[str]


def validate_daily_log(
    *,
    log_date: date,
    category,
    description: Optional[str],
    minutes,
    blockers: Optional[str] = None,
) -> NewDailyLog:
    if log_date is None:
        raise ValidationError("Date is required", field="log_date")

    try:
        category = WorkCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in WorkCategory)
        raise ValidationError(f"Category must be one of: {allowed}", field="category")

    description = require_non_empty(description, "description")
    require_min_length(description, "description", DESCRIPTION_MIN_LENGTH)
    require_max_length(description, "description", DESCRIPTION_MAX_LENGTH)

    duration = require_int_range(minutes, "duration_minutes", MIN_DURATION_MINUTES, MAX_DURATION_MINUTES)

    blockers = (blockers or "").strip() or None
    require_max_length(blockers, "blockers", BLOCKERS_MAX_LENGTH)

    return NewDailyLog(
        log_date=log_date,
        category=category,
        description=description,
        duration_minutes=duration,
        blockers=blockers,
    )


class WorkLogService:
    """Use case: an employee creates, edits and deletes their own daily records."""

    def __init__(self, worklogs: WorkLogRepository):
        self._worklogs = worklogs

    def _week_status(self, employee_id: int, day: date) -> LogStatus:
        records = self._worklogs.list_records(employee_id=employee_id, date_from=monday_of(day), date_to=sunday_of(day))
        return derive_status(r.status for r in records)

    def list_records(self, *, employee_id: int, date_from: date, date_to: date) -> Sequence[DailyLogRecord]:
        if date_to < date_from:
            raise ValidationError("End date must be on or after start date", field="date_to")
        return self._worklogs.list_records(employee_id=int(employee_id), date_from=date_from, date_to=date_to)

    def upsert_record(
        self,
        *,
        employee_id: int,
        log_date: date,
        category,
        description: Optional[str],
        minutes,
        blockers: Optional[str] = None,
        today: Optional[date] = None,
    ) -> DailyLogRecord:
        entry = validate_daily_log(
            log_date=log_date,
            category=category,
            description=description,
            minutes=minutes,
            blockers=blockers,
        )
        today = today or now_local().date()
        employee_id = int(employee_id)

        existing = self._worklogs.get_for_employee_and_date(employee_id=employee_id, log_date=entry.log_date)
        ensure_editable(
            entry.log_date,
            self._week_status(employee_id, entry.log_date),
            today,
            existing.status if existing else None,
        )

        # Draft stays Draft; Rework stays Rework until the week is resubmitted.
        status = existing.status if existing else LogStatus.DRAFT

        record_id = self._worklogs.upsert_record(
            employee_id=employee_id,
            log_date=entry.log_date,
            category=entry.category,
            description=entry.description,
            duration_minutes=entry.duration_minutes,
            blockers=entry.blockers,
            status=status,
        )
        record = self._worklogs.get_record(record_id=record_id)
        if record is None:
            raise NotFoundError("Saved record could not be read back")

        logger.info(
            "%s work log employee=%s date=%s status=%s",
            "Created" if existing is None else "Updated",
            employee_id,
            entry.log_date,
            status.value,
        )
        return record

    def delete_record(self, *, employee_id: int, record_id: int, today: Optional[date] = None) -> None:
        today = today or now_local().date()
        record = self._worklogs.get_record(record_id=int(record_id))
        if record is None or record.employee_id != int(employee_id):
            raise NotFoundError("Work log record not found")

        ensure_editable(record.log_date, self._week_status(record.employee_id, record.log_date), today, record.status)
        if self._worklogs.has_feedback(record_id=record.record_id):
            raise InvalidTransitionError("This day carries review feedback for the week and cannot be deleted")

        if not self._worklogs.delete_record(record_id=record.record_id):
            raise NotFoundError("Work log record not found")
        logger.info("Deleted work log record=%s employee=%s date=%s", record.record_id, employee_id, record.log_date)

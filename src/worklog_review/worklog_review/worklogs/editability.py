"""Editability policy for daily log records.

Editability is computed from the derived week status and the calendar, never
from a stored flag, so it cannot disagree with the submission state machine.
Inside a week that is open again (Draft or Rework) a day the manager already
approved stays read-only; only Draft and Rework days, or empty days, change.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import monday_of, sunday_of
from ..core.enums import LogStatus
from ..core.exceptions import InvalidTransitionError


def locked_reason(
    record_date: date,
    week_status: LogStatus,
    today: date,
    record_status: Optional[LogStatus] = None,
) -> Optional[str]:
    """Return why the date is read-only, or None when it may be edited.

    ``record_status`` is the status of the day's existing record, if any.
    """
    if week_status == LogStatus.SUBMITTED:
        return "Week is submitted and locked pending review"
    if week_status == LogStatus.APPROVED:
        return "Week is approved and can no longer be changed"
    if record_status == LogStatus.APPROVED:
        return "This day is already approved and can no longer be changed"
    if record_status == LogStatus.SUBMITTED:
        return "This day is submitted and locked pending review"
    if record_date > today:
        return "Cannot log work for a future date"
    if not (monday_of(today) <= record_date <= sunday_of(today)):
        return "Only the current week can be edited"
    return None


def is_editable(
    record_date: date,
    week_status: LogStatus,
    today: date,
    record_status: Optional[LogStatus] = None,
) -> bool:
    return locked_reason(record_date, week_status, today, record_status) is None


def ensure_editable(
    record_date: date,
    week_status: LogStatus,
    today: date,
    record_status: Optional[LogStatus] = None,
) -> None:
    reason = locked_reason(record_date, week_status, today, record_status)
    if reason:
        raise InvalidTransitionError(reason)

from __future__ import annotations

from typing import Optional

from ..deadlines.tracker import ReviewDeadline, format_remaining
from ..feedback.model import FeedbackComment
from ..team.model import TeamStats, TeamSubmissionRow
from ..weeks.aggregator import day_breakdown
from ..weeks.model import DaySummary, WeekSubmission
from ..worklogs.model import DailyLogRecord
from .datetime_utils import format_minutes


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def record_to_dict(r: DailyLogRecord) -> dict:
    return {
        "record_id": r.record_id,
        "employee_id": r.employee_id,
        "log_date": r.log_date.isoformat(),
        "category": r.category.value,
        "description": r.description,
        "duration_minutes": r.duration_minutes,
        "blockers": r.blockers,
        "status": r.status.value,
        "submitted_at": _iso(r.submitted_at),
        "created_at": _iso(r.created_at),
        "updated_at": _iso(r.updated_at),
    }


def day_to_dict(d: DaySummary) -> dict:
    return {
        "log_date": d.log_date.isoformat(),
        "day_name": d.day_name,
        "minutes": d.minutes,
        "status": d.status.value,
        "record_id": d.record_id,
    }


def week_to_dict(w: WeekSubmission) -> dict:
    return {
        "employee_id": w.employee_id,
        "week_start": w.week_start.isoformat(),
        "week_end": w.week_end.isoformat(),
        "status": w.status.value,
        "submitted_at": _iso(w.submitted_at),
        "total_minutes": w.total_minutes,
        "total_hours": format_minutes(w.total_minutes),
        "target_minutes": w.target_minutes,
        "progress_percent": w.progress_percent,
        "days_logged": w.days_logged,
        "category_minutes": {c.value: m for c, m in w.category_minutes.items()},
        "category_counts": {c.value: n for c, n in w.category_counts.items()},
        "records": [record_to_dict(r) for r in w.records],
        "days": [day_to_dict(d) for d in day_breakdown(w)],
    }


def deadline_to_dict(d: ReviewDeadline) -> dict:
    return {
        "deadline": d.deadline.isoformat(),
        "elapsed_seconds": int(d.elapsed.total_seconds()),
        "remaining_seconds": int(d.remaining.total_seconds()),
        "remaining_label": format_remaining(d.remaining),
        "bucket": d.bucket.value,
    }


def comment_to_dict(c: FeedbackComment) -> dict:
    return {
        "comment_id": c.comment_id,
        "record_id": c.record_id,
        "manager_id": c.manager_id,
        "comment": c.comment,
        "action": c.action.value,
        "created_at": _iso(c.created_at),
    }


def row_to_dict(row: TeamSubmissionRow) -> dict:
    data = week_to_dict(row.submission)
    data["employee"] = {"employee_id": row.employee.employee_id, "full_name": row.employee.full_name}
    data["deadline"] = deadline_to_dict(row.deadline) if row.deadline else None
    return data


def stats_to_dict(s: TeamStats) -> dict:
    return {"pending": s.pending, "approved": s.approved, "rework": s.rework, "overdue": s.overdue}

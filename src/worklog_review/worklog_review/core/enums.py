from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Capability of the caller, passed explicitly into every operation."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class WorkCategory(str, Enum):
    TASK = "Task"
    MEETING = "Meeting"
    SUPPORT = "Support"
    LEARNING = "Learning"
    OTHER = "Other"


class LogStatus(str, Enum):
    """Status of a single daily log record, and the derived week status."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REWORK = "Rework"


class DayStatus(str, Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    REWORK = "Rework"
    NO_ENTRY = "NoEntry"


class FeedbackAction(str, Enum):
    APPROVED = "Approved"
    REWORK = "Rework"


class DeadlineBucket(str, Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    NORMAL = "normal"


class ReviewWindow(str, Enum):
    """Closed set of time windows the team worklist can be scoped to."""

    CURRENT_WEEK = "current_week"
    LAST_WEEK = "last_week"
    LAST_2_WEEKS = "last_2_weeks"
    LAST_MONTH = "last_month"


class SortOrder(str, Enum):
    DEADLINE = "deadline"
    NEWEST = "newest"
    OLDEST = "oldest"

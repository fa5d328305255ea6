from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.enums import Role
from ..deadlines.tracker import ReviewDeadline
from ..weeks.model import DaySummary, WeekSubmission


@dataclass(frozen=True)
class Employee:
    """Directory entry. Owned by the HR directory, read-only here."""

    employee_id: int
    full_name: str
    role: Role
    manager_id: Optional[int] = None
    is_active: bool = True


@dataclass(frozen=True)
class TeamSubmissionRow:
    """One line of a reviewer's worklist."""

    employee: Employee
    submission: WeekSubmission
    days: List[DaySummary]
    deadline: Optional[ReviewDeadline] = None


@dataclass(frozen=True)
class TeamStats:
    pending: int
    approved: int
    rework: int
    overdue: int

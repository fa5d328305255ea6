from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class TeamDirectory(Protocol):
    """Reporting-line lookups against the HR directory."""

    def get_employee(self, *, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_reports(self, *, manager_id: int) -> Sequence[Employee]:
        """Active direct reports of a manager."""

        raise NotImplementedError

    def list_active_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import TeamDirectory


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        role=Role(r["role"]),
        manager_id=int(r["manager_id"]) if r.get("manager_id") is not None else None,
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLTeamDirectory(TeamDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_employee(self, *, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, role, manager_id, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_reports(self, *, manager_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, role, manager_id, is_active
                FROM employees
                WHERE manager_id=%s AND is_active=1
                ORDER BY full_name ASC
                """,
                (int(manager_id),),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, role, manager_id, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY full_name ASC
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]

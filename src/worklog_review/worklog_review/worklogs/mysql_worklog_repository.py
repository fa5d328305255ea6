from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import FeedbackAction, LogStatus, WorkCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders
from .model import DailyLogRecord
from .repository import WorkLogRepository

_RECORD_COLUMNS = """
    record_id, employee_id, log_date, category, description, duration_minutes,
    blockers, status, submitted_at, created_at, updated_at
"""


def _to_record(r: Dict[str, Any]) -> DailyLogRecord:
    return DailyLogRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        log_date=r["log_date"],
        category=WorkCategory(r["category"]),
        description=r["description"],
        duration_minutes=int(r["duration_minutes"]),
        status=LogStatus(r["status"]),
        blockers=r.get("blockers"),
        submitted_at=r.get("submitted_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(self, *, employee_id: int, date_from: date, date_to: date) -> Sequence[DailyLogRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM daily_work_logs
                WHERE employee_id=%s AND log_date BETWEEN %s AND %s
                ORDER BY log_date ASC
                """,
                (int(employee_id), date_from, date_to),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_records_for_employees(
        self,
        *,
        employee_ids: Iterable[int],
        date_from: date,
        date_to: date,
    ) -> Sequence[DailyLogRecord]:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM daily_work_logs
                WHERE employee_id IN ({in_placeholders(ids)}) AND log_date BETWEEN %s AND %s
                ORDER BY employee_id ASC, log_date ASC
                """,
                tuple(ids + [date_from, date_to]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_record(self, *, record_id: int) -> Optional[DailyLogRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM daily_work_logs WHERE record_id=%s",
                (int(record_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, *, employee_id: int, log_date: date) -> Optional[DailyLogRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM daily_work_logs WHERE employee_id=%s AND log_date=%s",
                (int(employee_id), log_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_work_logs(
                    employee_id, log_date, category, description, duration_minutes, blockers, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    category=VALUES(category),
                    description=VALUES(description),
                    duration_minutes=VALUES(duration_minutes),
                    blockers=VALUES(blockers),
                    status=VALUES(status),
                    updated_at=NOW()
                """,
                (
                    int(employee_id),
                    log_date,
                    category.value,
                    description,
                    int(duration_minutes),
                    blockers,
                    status.value,
                ),
            )

            # If it was an update, lastrowid can be 0; fetch record_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT record_id FROM daily_work_logs WHERE employee_id=%s AND log_date=%s",
                (int(employee_id), log_date),
            )
            r = fetchone(cur)
            return int(r["record_id"]) if r else 0

    def delete_record(self, *, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_work_logs WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def has_feedback(self, *, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM work_log_feedback WHERE record_id=%s LIMIT 1", (int(record_id),))
            return fetchone(cur) is not None

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
        statuses = [s.value for s in from_statuses]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE daily_work_logs
                SET status=%s, submitted_at=COALESCE(%s, submitted_at), updated_at=NOW()
                WHERE employee_id=%s AND log_date BETWEEN %s AND %s
                  AND status IN ({in_placeholders(statuses)})
                """,
                tuple([to_status.value, submitted_at, int(employee_id), week_start, week_end] + statuses),
            )
            return cur.rowcount

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
        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the week's rows so the batch acts on one consistent snapshot.
            cur.execute(
                """
                SELECT record_id, status
                FROM daily_work_logs
                WHERE employee_id=%s AND log_date BETWEEN %s AND %s
                ORDER BY log_date ASC
                FOR UPDATE
                """,
                (int(employee_id), week_start, week_end),
            )
            rows = fetchall(cur)
            if not any(r["status"] == LogStatus.SUBMITTED.value for r in rows):
                return 0

            cur.execute(
                """
                UPDATE daily_work_logs
                SET status=%s, updated_at=NOW()
                WHERE employee_id=%s AND log_date BETWEEN %s AND %s AND status=%s
                """,
                (to_status.value, int(employee_id), week_start, week_end, LogStatus.SUBMITTED.value),
            )

            cur.execute(
                """
                INSERT INTO work_log_feedback(record_id, manager_id, comment, action)
                VALUES(%s,%s,%s,%s)
                """,
                (int(rows[0]["record_id"]), int(manager_id), comment, action.value),
            )
            return int(cur.lastrowid)

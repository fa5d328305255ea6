from __future__ import annotations

from datetime import date
from typing import Any, Dict, Sequence

from ..core.enums import FeedbackAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import FeedbackComment
from .repository import FeedbackRepository


def _to_comment(r: Dict[str, Any]) -> FeedbackComment:
    return FeedbackComment(
        comment_id=int(r["comment_id"]),
        record_id=int(r["record_id"]),
        manager_id=int(r["manager_id"]),
        comment=r["comment"],
        action=FeedbackAction(r["action"]),
        created_at=r["created_at"],
    )


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add_comment(self, *, record_id: int, manager_id: int, comment: str, action: FeedbackAction) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_log_feedback(record_id, manager_id, comment, action)
                VALUES(%s,%s,%s,%s)
                """,
                (int(record_id), int(manager_id), comment, action.value),
            )
            return int(cur.lastrowid)

    def list_for_record(self, *, record_id: int) -> Sequence[FeedbackComment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT comment_id, record_id, manager_id, comment, action, created_at
                FROM work_log_feedback
                WHERE record_id=%s
                ORDER BY created_at DESC, comment_id DESC
                """,
                (int(record_id),),
            )
            return [_to_comment(r) for r in fetchall(cur)]

    def list_for_week(self, *, employee_id: int, week_start: date, week_end: date) -> Sequence[FeedbackComment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT f.comment_id, f.record_id, f.manager_id, f.comment, f.action, f.created_at
                FROM work_log_feedback f
                JOIN daily_work_logs d ON d.record_id = f.record_id
                WHERE d.employee_id=%s AND d.log_date BETWEEN %s AND %s
                ORDER BY f.created_at DESC, f.comment_id DESC
                """,
                (int(employee_id), week_start, week_end),
            )
            return [_to_comment(r) for r in fetchall(cur)]

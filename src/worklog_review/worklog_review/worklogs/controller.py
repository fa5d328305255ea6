from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.serializers import record_to_dict, week_to_dict
from ..common.web import current_user_id, domain_errors, login_required, optional_date_arg, parse_date_arg
from ..container import Container
from ..core.enums import LogStatus
from ..weeks.aggregator import week_bounds
from .editability import is_editable


def register(app: Flask, container: Container) -> None:
    @app.route("/worklogs", methods=["GET"], endpoint="list_worklogs")
    @login_required
    @domain_errors
    def list_worklogs():
        today = now_local().date()
        date_from = optional_date_arg(request.args.get("from"), "from") or week_bounds(today)[0]
        date_to = optional_date_arg(request.args.get("to"), "to") or week_bounds(today)[1]
        records = container.worklog_service.list_records(
            employee_id=current_user_id(),
            date_from=date_from,
            date_to=date_to,
        )
        return jsonify({"records": [record_to_dict(r) for r in records]})

    @app.route("/worklogs/<log_date>", methods=["PUT"], endpoint="save_worklog")
    @login_required
    @domain_errors
    def save_worklog(log_date: str):
        payload = request.get_json(silent=True) or {}
        record = container.worklog_service.upsert_record(
            employee_id=current_user_id(),
            log_date=parse_date_arg(log_date, "log_date"),
            category=payload.get("category"),
            description=payload.get("description"),
            minutes=payload.get("duration_minutes"),
            blockers=payload.get("blockers"),
        )
        return jsonify({"record": record_to_dict(record)})

    @app.route("/worklogs/records/<int:record_id>", methods=["DELETE"], endpoint="delete_worklog")
    @login_required
    @domain_errors
    def delete_worklog(record_id: int):
        container.worklog_service.delete_record(employee_id=current_user_id(), record_id=record_id)
        return "", 204

    @app.route("/worklogs/week", methods=["GET"], endpoint="my_week")
    @login_required
    @domain_errors
    def my_week():
        today = now_local().date()
        reference = optional_date_arg(request.args.get("date"), "date") or today
        week = container.week_service.get_week(employee_id=current_user_id(), reference_date=reference)

        week_start, _ = week_bounds(reference)
        status = week.status if week else LogStatus.DRAFT
        day_status = {r.log_date: r.status for r in week.records} if week else {}
        editable = {}
        for offset in range(7):
            day = week_start + timedelta(days=offset)
            editable[day.isoformat()] = is_editable(day, status, today, day_status.get(day))

        return jsonify(
            {
                "week_start": week_start.isoformat(),
                "week": week_to_dict(week) if week else None,
                "editable": editable,
            }
        )

    @app.route("/worklogs/weeks", methods=["GET"], endpoint="my_weeks")
    @login_required
    @domain_errors
    def my_weeks():
        weeks = container.week_service.list_weeks(
            employee_id=current_user_id(),
            date_from=optional_date_arg(request.args.get("from"), "from"),
            date_to=optional_date_arg(request.args.get("to"), "to"),
        )
        return jsonify({"weeks": [week_to_dict(w) for w in weeks]})

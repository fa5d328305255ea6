from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import comment_to_dict, week_to_dict
from ..common.web import (
    current_role,
    current_user_id,
    domain_errors,
    login_required,
    parse_date_arg,
    reviewer_required,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/worklogs/weeks/<week_start>/submit", methods=["POST"], endpoint="submit_week")
    @login_required
    @domain_errors
    def submit_week(week_start: str):
        week = container.review_service.submit_week(
            employee_id=current_user_id(),
            week_start=parse_date_arg(week_start, "week_start"),
        )
        return jsonify({"week": week_to_dict(week)})

    @app.route("/worklogs/weeks/<week_start>/comments", methods=["GET"], endpoint="my_week_comments")
    @login_required
    @domain_errors
    def my_week_comments(week_start: str):
        comments = container.feedback_service.list_comments(
            employee_id=current_user_id(),
            week_start=parse_date_arg(week_start, "week_start"),
        )
        return jsonify({"comments": [comment_to_dict(c) for c in comments]})

    @app.route(
        "/team/worklogs/<int:employee_id>/weeks/<week_start>/approve",
        methods=["POST"],
        endpoint="approve_week",
    )
    @reviewer_required
    @domain_errors
    def approve_week(employee_id: int, week_start: str):
        payload = request.get_json(silent=True) or {}
        week = container.review_service.approve_week(
            current_role=current_role(),
            reviewer_id=current_user_id(),
            employee_id=employee_id,
            week_start=parse_date_arg(week_start, "week_start"),
            comment=payload.get("comment"),
        )
        return jsonify({"week": week_to_dict(week)})

    @app.route(
        "/team/worklogs/<int:employee_id>/weeks/<week_start>/rework",
        methods=["POST"],
        endpoint="request_rework",
    )
    @reviewer_required
    @domain_errors
    def request_rework(employee_id: int, week_start: str):
        payload = request.get_json(silent=True) or {}
        week = container.review_service.request_rework(
            current_role=current_role(),
            reviewer_id=current_user_id(),
            employee_id=employee_id,
            week_start=parse_date_arg(week_start, "week_start"),
            comment=payload.get("comment"),
        )
        return jsonify({"week": week_to_dict(week)})

    @app.route(
        "/team/worklogs/<int:employee_id>/weeks/<week_start>/comments",
        methods=["GET"],
        endpoint="team_week_comments",
    )
    @reviewer_required
    @domain_errors
    def team_week_comments(employee_id: int, week_start: str):
        container.review_service.ensure_can_review(
            current_role=current_role(),
            reviewer_id=current_user_id(),
            employee_id=employee_id,
        )
        comments = container.feedback_service.list_comments(
            employee_id=employee_id,
            week_start=parse_date_arg(week_start, "week_start"),
        )
        return jsonify({"comments": [comment_to_dict(c) for c in comments]})

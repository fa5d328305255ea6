from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import row_to_dict, stats_to_dict
from ..common.web import current_role, current_user_id, domain_errors, reviewer_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/team/worklogs", methods=["GET"], endpoint="team_worklogs")
    @reviewer_required
    @domain_errors
    def team_worklogs():
        employee_id = request.args.get("employee_id") or None
        if employee_id is not None:
            try:
                employee_id = int(employee_id)
            except ValueError:
                raise ValidationError("employee_id must be a number", field="employee_id")

        rows = container.team_service.list_team_submissions(
            current_role=current_role(),
            viewer_id=current_user_id(),
            window=request.args.get("window") or "current_week",
            employee_id=employee_id,
            status=request.args.get("status") or None,
            sort=request.args.get("sort") or "deadline",
        )
        return jsonify(
            {
                "stats": stats_to_dict(container.team_service.summarize(rows)),
                "submissions": [row_to_dict(r) for r in rows],
            }
        )

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import monday_of, now_local
from ..core.constants import DEFAULT_APPROVE_COMMENT
from ..core.enums import FeedbackAction, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..feedback.service import validate_comment
from ..team.repository import TeamDirectory
from ..weeks.model import WeekSubmission
from ..weeks.service import WeekService
from ..worklogs.repository import WorkLogRepository
from .state_machine import Transition, check_transition

logger = logging.getLogger(__name__)

REVIEWER_ROLES = frozenset({Role.MANAGER, Role.ADMIN})


class ReviewService:
    """Use case: submit a week, then approve it or send it back for rework."""

    def __init__(self, worklogs: WorkLogRepository, directory: TeamDirectory, weeks: Optional[WeekService] = None):
        self._worklogs = worklogs
        self._directory = directory
        self._weeks = weeks or WeekService(worklogs)

    def _load_week(self, employee_id: int, week_start: date) -> Optional[WeekSubmission]:
        return self._weeks.get_week(employee_id=int(employee_id), reference_date=week_start)

    def ensure_can_review(self, *, current_role: Role, reviewer_id: int, employee_id: int) -> None:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("Only managers and admins can review work logs")
        if int(reviewer_id) == int(employee_id):
            raise AuthorizationError("You cannot review your own work log")

        employee = self._directory.get_employee(employee_id=int(employee_id))
        if employee is None:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise AuthorizationError("Inactive employees cannot be reviewed")
        if current_role == Role.MANAGER and employee.manager_id != int(reviewer_id):
            raise AuthorizationError("This employee does not report to you")

    def submit_week(self, *, employee_id: int, week_start: date, now: Optional[datetime] = None) -> WeekSubmission:
        now = now or now_local()
        week = self._load_week(employee_id, week_start)
        rule = check_transition(Transition.SUBMIT, week)

        moved = self._worklogs.transition_week(
            employee_id=int(employee_id),
            week_start=week.week_start,
            week_end=week.week_end,
            from_statuses=rule.acts_on,
            to_status=rule.target,
            submitted_at=now,
        )
        if moved == 0:
            raise InvalidTransitionError("Nothing to submit in this week")

        logger.info("Submitted week employee=%s week=%s records=%d", employee_id, week.week_start, moved)
        return self._load_week(employee_id, week.week_start)

    def _review(
        self,
        *,
        transition: Transition,
        action: FeedbackAction,
        reviewer_id: int,
        employee_id: int,
        week_start: date,
        comment: str,
    ) -> WeekSubmission:
        week = self._load_week(employee_id, week_start)
        rule = check_transition(transition, week)

        comment_id = self._worklogs.review_week(
            employee_id=int(employee_id),
            week_start=week.week_start,
            week_end=week.week_end,
            to_status=rule.target,
            manager_id=int(reviewer_id),
            comment=comment,
            action=action,
        )
        if not comment_id:
            raise InvalidTransitionError("Week is no longer awaiting review")

        logger.info(
            "Week %s employee=%s week=%s reviewer=%s comment=%s",
            action.value.lower(),
            employee_id,
            week.week_start,
            reviewer_id,
            comment_id,
        )
        return self._load_week(employee_id, week.week_start)

    def approve_week(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        employee_id: int,
        week_start: date,
        comment: Optional[str] = None,
    ) -> WeekSubmission:
        self.ensure_can_review(current_role=current_role, reviewer_id=reviewer_id, employee_id=employee_id)
        text = (comment or "").strip() or DEFAULT_APPROVE_COMMENT
        return self._review(
            transition=Transition.APPROVE,
            action=FeedbackAction.APPROVED,
            reviewer_id=reviewer_id,
            employee_id=employee_id,
            week_start=monday_of(week_start),
            comment=text,
        )

    def request_rework(
        self,
        *,
        current_role: Role,
        reviewer_id: int,
        employee_id: int,
        week_start: date,
        comment: Optional[str],
    ) -> WeekSubmission:
        self.ensure_can_review(current_role=current_role, reviewer_id=reviewer_id, employee_id=employee_id)
        try:
            text = validate_comment(comment, FeedbackAction.REWORK)
        except ValidationError:
            logger.warning("Rejected rework request employee=%s week=%s: invalid comment", employee_id, week_start)
            raise
        return self._review(
            transition=Transition.REWORK,
            action=FeedbackAction.REWORK,
            reviewer_id=reviewer_id,
            employee_id=employee_id,
            week_start=monday_of(week_start),
            comment=text,
        )

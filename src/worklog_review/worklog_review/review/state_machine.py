"""Weekly submission state machine.

Week states are never stored; they are derived from record statuses (see
``weeks.aggregator.derive_status``). A transition is a batch move of the
week's eligible records from one record status to another. There is no
"reopen" edge: a week reopens only when a new Draft record appears in it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ..core.enums import LogStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError
from ..weeks.model import WeekSubmission
from ..worklogs.model import DailyLogRecord


class Transition(str, Enum):
    SUBMIT = "submit"
    APPROVE = "approve"
    REWORK = "rework"


@dataclass(frozen=True)
class TransitionRule:
    allowed_from: FrozenSet[LogStatus]
    acts_on: Tuple[LogStatus, ...]
    target: LogStatus


RULES = {
    Transition.SUBMIT: TransitionRule(
        allowed_from=frozenset({LogStatus.DRAFT, LogStatus.REWORK}),
        acts_on=(LogStatus.DRAFT, LogStatus.REWORK),
        target=LogStatus.SUBMITTED,
    ),
    Transition.APPROVE: TransitionRule(
        allowed_from=frozenset({LogStatus.SUBMITTED}),
        acts_on=(LogStatus.SUBMITTED,),
        target=LogStatus.APPROVED,
    ),
    Transition.REWORK: TransitionRule(
        allowed_from=frozenset({LogStatus.SUBMITTED}),
        acts_on=(LogStatus.SUBMITTED,),
        target=LogStatus.REWORK,
    ),
}


def eligible_records(transition: Transition, week: WeekSubmission) -> List[DailyLogRecord]:
    rule = RULES[transition]
    return [r for r in week.records if r.status in rule.acts_on]


def check_transition(transition: Transition, week: Optional[WeekSubmission]) -> TransitionRule:
    """Validate that ``transition`` may run on ``week``; return its rule."""
    if week is None:
        raise NotFoundError("No work logged for this week")

    rule = RULES[transition]
    if week.status not in rule.allowed_from:
        raise InvalidTransitionError(
            f"Cannot {transition.value} a week that is {week.status.value}"
        )
    if not eligible_records(transition, week):
        raise InvalidTransitionError(f"Nothing to {transition.value} in this week")
    return rule

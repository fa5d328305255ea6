from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import FeedbackAction


@dataclass(frozen=True)
class FeedbackComment:
    """Append-only manager comment.

    Attached to one record (the earliest of its week) but scoped to the whole
    week submission.
    """

    comment_id: int
    record_id: int
    manager_id: int
    comment: str
    action: FeedbackAction
    created_at: datetime

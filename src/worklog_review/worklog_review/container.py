from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.service import FeedbackService
from .review.service import ReviewService
from .team.mysql_team_repository import MySQLTeamDirectory
from .team.service import TeamRollupService
from .weeks.service import WeekService
from .worklogs.mysql_worklog_repository import MySQLWorkLogRepository
from .worklogs.service import WorkLogService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    worklogs_repo: MySQLWorkLogRepository
    feedback_repo: MySQLFeedbackRepository
    team_directory: MySQLTeamDirectory

    worklog_service: WorkLogService
    week_service: WeekService
    review_service: ReviewService
    feedback_service: FeedbackService
    team_service: TeamRollupService


def build_services(*, conn, worklogs_repo, feedback_repo, team_directory) -> Container:
    week_service = WeekService(worklogs_repo)
    return Container(
        conn=conn,
        worklogs_repo=worklogs_repo,
        feedback_repo=feedback_repo,
        team_directory=team_directory,
        worklog_service=WorkLogService(worklogs_repo),
        week_service=week_service,
        review_service=ReviewService(worklogs_repo, team_directory, week_service),
        feedback_service=FeedbackService(feedback_repo, worklogs_repo),
        team_service=TeamRollupService(worklogs_repo, team_directory),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        conn=conn,
        worklogs_repo=MySQLWorkLogRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
        team_directory=MySQLTeamDirectory(conn),
    )

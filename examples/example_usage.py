"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the review workflow lives in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.worklog_review.worklog_review.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    week = container.week_service.get_week(employee_id=2, reference_date=date.today())
    if week is None:
        print("Nothing logged this week")
        return
    print(week.week_start, week.status.value, week.total_minutes, "minutes over", week.days_logged, "days")


if __name__ == "__main__":
    main()

import math
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List

from app.schemas.client import ClientOut
from app.schemas.dashboard import DashboardStats, ReportSummary, ReportTotals
from app.schemas.follow_up import FollowUpOut
from app.schemas.task import TaskOut
from app.services.queries import by_status, overdue_tasks
from app.utils.dates import end_of_week, start_of_week


def dashboard_stats(
    clients: List[ClientOut],
    tasks: List[TaskOut],
    follow_ups: List[FollowUpOut],
    now: datetime,
) -> DashboardStats:
    one_week_ago = now - timedelta(days=7)

    return DashboardStats(
        total_clients=len(clients),
        # Overdue follow-ups are still scheduled, so they count as pending too
        pending_followups=len(by_status(follow_ups, "scheduled")),
        overdue_tasks=len(overdue_tasks(tasks, now)),
        completed_this_week=sum(
            1 for t in by_status(tasks, "completed") if t.updated_at >= one_week_ago
        ),
    )


def _completed_between(records: Iterable, start: datetime, end: datetime) -> int:
    return sum(1 for r in by_status(records, "completed") if start <= r.updated_at <= end)


def report_summary(
    clients: List[ClientOut],
    tasks: List[TaskOut],
    follow_ups: List[FollowUpOut],
    now: datetime,
) -> ReportSummary:
    """
    Activity report: new clients over the last 30 days, work completed in the
    current calendar week (Sunday to Saturday), and how clients and tasks
    are distributed across statuses and priorities.
    """
    thirty_days_ago = now - timedelta(days=30)
    week_start, week_end = start_of_week(now), end_of_week(now)

    completed = len(by_status(tasks, "completed"))
    # Halves round up
    completion_rate = math.floor(completed / len(tasks) * 100 + 0.5) if tasks else 0

    return ReportSummary(
        generated_at=now,
        clients_this_month=sum(1 for c in clients if c.created_at >= thirty_days_ago),
        tasks_completed_this_week=_completed_between(tasks, week_start, week_end),
        follow_ups_completed_this_week=_completed_between(follow_ups, week_start, week_end),
        client_status_distribution=dict(Counter(c.status for c in clients)),
        task_priority_distribution=dict(Counter(t.priority for t in tasks)),
        totals=ReportTotals(clients=len(clients), tasks=len(tasks), follow_ups=len(follow_ups)),
        task_completion_rate=completion_rate,
    )

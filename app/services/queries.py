"""
Read-only filters over snapshots of the store.

Nothing here mutates its input or keeps state; "now" is always passed in so
every derived answer (overdue, upcoming) is a pure function of the records
and the moment asked about.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, TypeVar

from app.schemas.client import ClientOut
from app.schemas.follow_up import FollowUpOut
from app.schemas.interaction import InteractionOut
from app.schemas.task import TaskOut

R = TypeVar("R")

NO_CLIENT = "No client"
UNKNOWN_CLIENT = "Unknown client"


def by_status(records: Iterable[R], status: str) -> List[R]:
    return [r for r in records if r.status == status]


def by_client(records: Iterable[R], client_id: int) -> List[R]:
    return [r for r in records if r.client_id == client_id]


def search_clients(clients: Iterable[ClientOut], query: str) -> List[ClientOut]:
    """Case-insensitive substring match on name, company or email."""
    needle = query.lower()
    return [
        c for c in clients
        if needle in c.name.lower()
        or (c.company is not None and needle in c.company.lower())
        or needle in c.email.lower()
    ]


def is_task_overdue(task: TaskOut, now: datetime) -> bool:
    return task.due_date is not None and task.due_date < now and task.status != "completed"


def is_follow_up_overdue(follow_up: FollowUpOut, now: datetime) -> bool:
    return follow_up.status == "scheduled" and follow_up.scheduled_date < now


def overdue_tasks(tasks: Iterable[TaskOut], now: datetime) -> List[TaskOut]:
    return [t for t in tasks if is_task_overdue(t, now)]


def overdue_follow_ups(follow_ups: Iterable[FollowUpOut], now: datetime) -> List[FollowUpOut]:
    return [f for f in follow_ups if is_follow_up_overdue(f, now)]


def upcoming_follow_ups(
    follow_ups: Iterable[FollowUpOut], now: datetime, horizon_days: int = 7
) -> List[FollowUpOut]:
    """Scheduled follow-ups due between now and now + horizon (both ends inclusive), soonest first."""
    until = now + timedelta(days=horizon_days)
    upcoming = [
        f for f in follow_ups
        if f.status == "scheduled" and now <= f.scheduled_date <= until
    ]
    # sorted() is stable: equal dates keep insertion order
    return sorted(upcoming, key=lambda f: f.scheduled_date)


def interactions_for_client(
    interactions: Iterable[InteractionOut], client_id: int
) -> List[InteractionOut]:
    """Most recent first."""
    return sorted(by_client(interactions, client_id), key=lambda i: i.date, reverse=True)


def client_name(clients_by_id: Dict[int, ClientOut], client_id: Optional[int]) -> str:
    if client_id is None:
        return NO_CLIENT
    client = clients_by_id.get(client_id)
    return client.name if client else UNKNOWN_CLIENT

"""
Entity store for the CRM.

`Storage` is the interface every backend implements: plain CRUD per entity
kind, ids assigned sequentially per kind and never reused, timestamps stamped
here rather than by callers. The derived queries (search, overdue, upcoming,
dashboard counters) are written once on the base class against the CRUD
methods, so all backends answer them identically.

References between entities (task -> client, ...) are weak: deleting a client
never touches its tasks, follow-ups or interactions, and readers resolve a
missing client to a placeholder name instead of failing.

`MemStorage` keeps everything in process memory. Records handed out are
copies; changing one does not change what the store holds.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from app.core.config import Settings
from app.schemas.client import ClientCreate, ClientOut, ClientUpdate
from app.schemas.dashboard import DashboardStats, ReportSummary
from app.schemas.follow_up import FollowUpCreate, FollowUpOut, FollowUpUpdate
from app.schemas.integration import CrmIntegrationCreate, CrmIntegrationOut, CrmIntegrationUpdate
from app.schemas.interaction import InteractionCreate, InteractionOut
from app.schemas.task import TaskCreate, TaskOut, TaskUpdate
from app.schemas.user import UserCreate, UserOut
from app.services import queries, stats
from app.services.security import get_password_hash, verify_password
from app.utils.dates import as_utc, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

ADMIN_USERNAME = "admin"


class UsernameTakenError(ValueError):
    def __init__(self, username: str):
        super().__init__(f"Username {username!r} is already taken")
        self.username = username


class Storage(ABC):
    def __init__(
        self,
        clock: Optional[Clock] = None,
        upcoming_horizon_days: int = 7,
        bcrypt_rounds: int = 12,
    ):
        self.clock = clock or utc_now
        self.upcoming_horizon_days = upcoming_horizon_days
        self.bcrypt_rounds = bcrypt_rounds

    def now(self) -> datetime:
        return as_utc(self.clock())

    def _moment(self, now: Optional[datetime]) -> datetime:
        # Callers may pass naive datetimes; they are read as UTC
        return as_utc(now) if now is not None else self.now()

    # === Users ===
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserOut]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserOut]: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserOut: ...

    # === Clients ===
    @abstractmethod
    def get_all_clients(self) -> List[ClientOut]: ...

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[ClientOut]: ...

    @abstractmethod
    def create_client(self, data: ClientCreate) -> ClientOut: ...

    @abstractmethod
    def update_client(self, client_id: int, data: ClientUpdate) -> Optional[ClientOut]: ...

    @abstractmethod
    def delete_client(self, client_id: int) -> bool: ...

    # === Tasks ===
    @abstractmethod
    def get_all_tasks(self) -> List[TaskOut]: ...

    @abstractmethod
    def get_task(self, task_id: int) -> Optional[TaskOut]: ...

    @abstractmethod
    def create_task(self, data: TaskCreate) -> TaskOut: ...

    @abstractmethod
    def update_task(self, task_id: int, data: TaskUpdate) -> Optional[TaskOut]: ...

    @abstractmethod
    def delete_task(self, task_id: int) -> bool: ...

    # === Follow-ups ===
    @abstractmethod
    def get_all_follow_ups(self) -> List[FollowUpOut]: ...

    @abstractmethod
    def get_follow_up(self, follow_up_id: int) -> Optional[FollowUpOut]: ...

    @abstractmethod
    def create_follow_up(self, data: FollowUpCreate) -> FollowUpOut: ...

    @abstractmethod
    def update_follow_up(self, follow_up_id: int, data: FollowUpUpdate) -> Optional[FollowUpOut]: ...

    @abstractmethod
    def delete_follow_up(self, follow_up_id: int) -> bool: ...

    # === Interactions (no update) ===
    @abstractmethod
    def get_all_interactions(self) -> List[InteractionOut]: ...

    @abstractmethod
    def get_interaction(self, interaction_id: int) -> Optional[InteractionOut]: ...

    @abstractmethod
    def create_interaction(self, data: InteractionCreate) -> InteractionOut: ...

    @abstractmethod
    def delete_interaction(self, interaction_id: int) -> bool: ...

    # === CRM integrations ===
    @abstractmethod
    def get_all_crm_integrations(self) -> List[CrmIntegrationOut]: ...

    @abstractmethod
    def get_crm_integration(self, integration_id: int) -> Optional[CrmIntegrationOut]: ...

    @abstractmethod
    def create_crm_integration(self, data: CrmIntegrationCreate) -> CrmIntegrationOut: ...

    @abstractmethod
    def update_crm_integration(
        self, integration_id: int, data: CrmIntegrationUpdate
    ) -> Optional[CrmIntegrationOut]: ...

    @abstractmethod
    def delete_crm_integration(self, integration_id: int) -> bool: ...

    # -----------------------------
    # Derived queries
    # -----------------------------
    def get_clients_by_status(self, status: str) -> List[ClientOut]:
        return queries.by_status(self.get_all_clients(), status)

    def search_clients(self, query: str) -> List[ClientOut]:
        return queries.search_clients(self.get_all_clients(), query)

    def get_tasks_by_client(self, client_id: int) -> List[TaskOut]:
        return queries.by_client(self.get_all_tasks(), client_id)

    def get_tasks_by_status(self, status: str) -> List[TaskOut]:
        return queries.by_status(self.get_all_tasks(), status)

    def get_overdue_tasks(self, now: Optional[datetime] = None) -> List[TaskOut]:
        return queries.overdue_tasks(self.get_all_tasks(), self._moment(now))

    def get_follow_ups_by_client(self, client_id: int) -> List[FollowUpOut]:
        return queries.by_client(self.get_all_follow_ups(), client_id)

    def get_upcoming_follow_ups(
        self, now: Optional[datetime] = None, horizon_days: Optional[int] = None
    ) -> List[FollowUpOut]:
        if horizon_days is None:
            horizon_days = self.upcoming_horizon_days
        return queries.upcoming_follow_ups(self.get_all_follow_ups(), self._moment(now), horizon_days)

    def get_overdue_follow_ups(self, now: Optional[datetime] = None) -> List[FollowUpOut]:
        return queries.overdue_follow_ups(self.get_all_follow_ups(), self._moment(now))

    def get_interactions_by_client(self, client_id: int) -> List[InteractionOut]:
        return queries.interactions_for_client(self.get_all_interactions(), client_id)

    def clients_by_id(self) -> Dict[int, ClientOut]:
        return {c.id: c for c in self.get_all_clients()}

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> DashboardStats:
        return stats.dashboard_stats(
            self.get_all_clients(), self.get_all_tasks(), self.get_all_follow_ups(), self._moment(now)
        )

    def get_report_summary(self, now: Optional[datetime] = None) -> ReportSummary:
        return stats.report_summary(
            self.get_all_clients(), self.get_all_tasks(), self.get_all_follow_ups(), self._moment(now)
        )

    # -----------------------------
    # Simulated provider actions
    # -----------------------------
    def toggle_crm_integration(self, integration_id: int) -> Optional[CrmIntegrationOut]:
        integration = self.get_crm_integration(integration_id)
        if integration is None:
            return None
        return self.update_crm_integration(
            integration_id, CrmIntegrationUpdate(is_connected=not integration.is_connected)
        )

    def sync_crm_integration(self, integration_id: int) -> Optional[CrmIntegrationOut]:
        return self.update_crm_integration(integration_id, CrmIntegrationUpdate(last_sync=self.now()))

    def authenticate_user(self, username: str, password: str) -> Optional[UserOut]:
        """Returns the user when the password matches its stored hash, else None."""
        user = self.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            return None
        return user

    def seed_admin(self, password: str) -> UserOut:
        existing = self.get_user_by_username(ADMIN_USERNAME)
        if existing:
            return existing
        return self.create_user(
            UserCreate(
                username=ADMIN_USERNAME,
                password=password,
                name="Sarah Johnson",
                role="Project Manager",
            )
        )


M = TypeVar("M", bound=BaseModel)


class _Table(Generic[M]):
    """Records of one kind, by id, in insertion order."""

    def __init__(self, kind: str):
        self.kind = kind
        self.rows: Dict[int, M] = {}
        self.ids = itertools.count(1)

    def insert(self, build: Callable[[int], M]) -> M:
        # unique even under concurrent inserts
        record_id = next(self.ids)
        record = build(record_id)
        self.rows[record_id] = record
        logger.info(f"Created {self.kind} {record_id}")
        return record.model_copy()

    def get(self, record_id: int) -> Optional[M]:
        record = self.rows.get(record_id)
        return record.model_copy() if record is not None else None

    def all(self) -> List[M]:
        return [r.model_copy() for r in self.rows.values()]

    def find(self, predicate: Callable[[M], bool]) -> Optional[M]:
        for record in self.rows.values():
            if predicate(record):
                return record.model_copy()
        return None

    def merge(self, record_id: int, changes: dict) -> Optional[M]:
        record = self.rows.get(record_id)
        if record is None:
            return None
        updated = record.model_copy(update=changes)
        self.rows[record_id] = updated
        logger.info(f"Updated {self.kind} {record_id}: {', '.join(sorted(changes))}")
        return updated.model_copy()

    def delete(self, record_id: int) -> bool:
        existed = self.rows.pop(record_id, None) is not None
        if existed:
            logger.info(f"Deleted {self.kind} {record_id}")
        return existed


class MemStorage(Storage):
    def __init__(
        self,
        clock: Optional[Clock] = None,
        upcoming_horizon_days: int = 7,
        bcrypt_rounds: int = 12,
    ):
        super().__init__(clock, upcoming_horizon_days, bcrypt_rounds)
        self.users: _Table[UserOut] = _Table("user")
        self.clients: _Table[ClientOut] = _Table("client")
        self.tasks: _Table[TaskOut] = _Table("task")
        self.follow_ups: _Table[FollowUpOut] = _Table("follow-up")
        self.interactions: _Table[InteractionOut] = _Table("interaction")
        self.crm_integrations: _Table[CrmIntegrationOut] = _Table("CRM integration")

    def _touch(self, table: _Table, record_id: int, data: BaseModel):
        """Applies only the fields the caller set and moves updated_at forward."""
        current = table.rows.get(record_id)
        if current is None:
            return None
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = max(self.now(), current.updated_at)
        return table.merge(record_id, changes)

    # === Users ===
    def get_user(self, user_id: int) -> Optional[UserOut]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserOut]:
        return self.users.find(lambda u: u.username == username)

    def create_user(self, data: UserCreate) -> UserOut:
        if self.get_user_by_username(data.username):
            raise UsernameTakenError(data.username)
        values = data.model_dump()
        values["password"] = get_password_hash(data.password, self.bcrypt_rounds)
        return self.users.insert(lambda id: UserOut(id=id, **values))

    # === Clients ===
    def get_all_clients(self) -> List[ClientOut]:
        return self.clients.all()

    def get_client(self, client_id: int) -> Optional[ClientOut]:
        return self.clients.get(client_id)

    def create_client(self, data: ClientCreate) -> ClientOut:
        now = self.now()
        return self.clients.insert(
            lambda id: ClientOut(id=id, **data.model_dump(), created_at=now, updated_at=now)
        )

    def update_client(self, client_id: int, data: ClientUpdate) -> Optional[ClientOut]:
        return self._touch(self.clients, client_id, data)

    def delete_client(self, client_id: int) -> bool:
        return self.clients.delete(client_id)

    # === Tasks ===
    def get_all_tasks(self) -> List[TaskOut]:
        return self.tasks.all()

    def get_task(self, task_id: int) -> Optional[TaskOut]:
        return self.tasks.get(task_id)

    def create_task(self, data: TaskCreate) -> TaskOut:
        now = self.now()
        return self.tasks.insert(
            lambda id: TaskOut(id=id, **data.model_dump(), created_at=now, updated_at=now)
        )

    def update_task(self, task_id: int, data: TaskUpdate) -> Optional[TaskOut]:
        return self._touch(self.tasks, task_id, data)

    def delete_task(self, task_id: int) -> bool:
        return self.tasks.delete(task_id)

    # === Follow-ups ===
    def get_all_follow_ups(self) -> List[FollowUpOut]:
        return self.follow_ups.all()

    def get_follow_up(self, follow_up_id: int) -> Optional[FollowUpOut]:
        return self.follow_ups.get(follow_up_id)

    def create_follow_up(self, data: FollowUpCreate) -> FollowUpOut:
        now = self.now()
        return self.follow_ups.insert(
            lambda id: FollowUpOut(id=id, **data.model_dump(), created_at=now, updated_at=now)
        )

    def update_follow_up(self, follow_up_id: int, data: FollowUpUpdate) -> Optional[FollowUpOut]:
        return self._touch(self.follow_ups, follow_up_id, data)

    def delete_follow_up(self, follow_up_id: int) -> bool:
        return self.follow_ups.delete(follow_up_id)

    # === Interactions ===
    def get_all_interactions(self) -> List[InteractionOut]:
        return self.interactions.all()

    def get_interaction(self, interaction_id: int) -> Optional[InteractionOut]:
        return self.interactions.get(interaction_id)

    def create_interaction(self, data: InteractionCreate) -> InteractionOut:
        now = self.now()
        values = data.model_dump()
        values["date"] = values["date"] or now
        return self.interactions.insert(lambda id: InteractionOut(id=id, **values, created_at=now))

    def delete_interaction(self, interaction_id: int) -> bool:
        return self.interactions.delete(interaction_id)

    # === CRM integrations ===
    def get_all_crm_integrations(self) -> List[CrmIntegrationOut]:
        return self.crm_integrations.all()

    def get_crm_integration(self, integration_id: int) -> Optional[CrmIntegrationOut]:
        return self.crm_integrations.get(integration_id)

    def create_crm_integration(self, data: CrmIntegrationCreate) -> CrmIntegrationOut:
        now = self.now()
        return self.crm_integrations.insert(
            lambda id: CrmIntegrationOut(id=id, **data.model_dump(), created_at=now)
        )

    def update_crm_integration(
        self, integration_id: int, data: CrmIntegrationUpdate
    ) -> Optional[CrmIntegrationOut]:
        # Integrations carry no updated_at
        return self.crm_integrations.merge(integration_id, data.model_dump(exclude_unset=True))

    def delete_crm_integration(self, integration_id: int) -> bool:
        return self.crm_integrations.delete(integration_id)


def create_storage(settings: Settings, clock: Optional[Clock] = None) -> Storage:
    """Builds the configured backend and seeds the default admin user."""
    options = dict(
        clock=clock,
        upcoming_horizon_days=settings.upcoming_horizon_days,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    if settings.storage_backend == "sql":
        from app.services.sql_storage import SqlStorage

        storage = SqlStorage(settings.database_url, **options)
    else:
        storage = MemStorage(**options)

    admin = storage.seed_admin(settings.admin_password)
    logger.info(f"✅ {type(storage).__name__} ready, admin user id {admin.id}")
    return storage

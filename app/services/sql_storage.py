import logging
from typing import List, Optional, Type

from pydantic import BaseModel

from app.core.db import Base, make_session_factory
from app.models.client import Client
from app.models.crm_integration import CrmIntegration
from app.models.follow_up import FollowUp
from app.models.interaction import Interaction
from app.models.task import Task
from app.models.user import User
from app.schemas.client import ClientCreate, ClientOut, ClientUpdate
from app.schemas.follow_up import FollowUpCreate, FollowUpOut, FollowUpUpdate
from app.schemas.integration import CrmIntegrationCreate, CrmIntegrationOut, CrmIntegrationUpdate
from app.schemas.interaction import InteractionCreate, InteractionOut
from app.schemas.task import TaskCreate, TaskOut, TaskUpdate
from app.schemas.user import UserCreate, UserOut
from app.services.security import get_password_hash
from app.services.storage import Clock, Storage, UsernameTakenError

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """
    The same store over SQLAlchemy tables. Ids come from autoincrement
    columns, so a deleted id is never handed out again.
    """

    def __init__(
        self,
        database_url: str = "sqlite://",
        clock: Optional[Clock] = None,
        upcoming_horizon_days: int = 7,
        bcrypt_rounds: int = 12,
    ):
        super().__init__(clock, upcoming_horizon_days, bcrypt_rounds)
        self.SessionLocal = make_session_factory(database_url)

    # -----------------------------
    # Generic row helpers
    # -----------------------------
    def _insert(self, row: Base, out: Type[BaseModel]):
        with self.SessionLocal() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info(f"Created {row.__tablename__} {row.id}")
            return out.model_validate(row)

    def _get(self, model, out: Type[BaseModel], record_id: int):
        with self.SessionLocal() as db:
            row = db.get(model, record_id)
            return out.model_validate(row) if row is not None else None

    def _all(self, model, out: Type[BaseModel]) -> list:
        with self.SessionLocal() as db:
            rows = db.query(model).order_by(model.id).all()
            return [out.model_validate(r) for r in rows]

    def _update(self, model, out: Type[BaseModel], record_id: int, data: BaseModel, touch: bool = True):
        changes = data.model_dump(exclude_unset=True)
        with self.SessionLocal() as db:
            row = db.get(model, record_id)
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            if touch:
                row.updated_at = max(self.now(), row.updated_at)
            db.commit()
            db.refresh(row)
            logger.info(f"Updated {model.__tablename__} {record_id}: {', '.join(sorted(changes))}")
            return out.model_validate(row)

    def _delete(self, model, record_id: int) -> bool:
        with self.SessionLocal() as db:
            row = db.get(model, record_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            logger.info(f"Deleted {model.__tablename__} {record_id}")
            return True

    def _stamped(self, model, data: BaseModel, updated: bool = True):
        now = self.now()
        values = data.model_dump()
        values["created_at"] = now
        if updated:
            values["updated_at"] = now
        return model(**values)

    # === Users ===
    def get_user(self, user_id: int) -> Optional[UserOut]:
        return self._get(User, UserOut, user_id)

    def get_user_by_username(self, username: str) -> Optional[UserOut]:
        with self.SessionLocal() as db:
            row = db.query(User).filter(User.username == username).first()
            return UserOut.model_validate(row) if row is not None else None

    def create_user(self, data: UserCreate) -> UserOut:
        if self.get_user_by_username(data.username):
            raise UsernameTakenError(data.username)
        values = data.model_dump()
        values["password"] = get_password_hash(data.password, self.bcrypt_rounds)
        return self._insert(User(**values), UserOut)

    # === Clients ===
    def get_all_clients(self) -> List[ClientOut]:
        return self._all(Client, ClientOut)

    def get_client(self, client_id: int) -> Optional[ClientOut]:
        return self._get(Client, ClientOut, client_id)

    def create_client(self, data: ClientCreate) -> ClientOut:
        return self._insert(self._stamped(Client, data), ClientOut)

    def update_client(self, client_id: int, data: ClientUpdate) -> Optional[ClientOut]:
        return self._update(Client, ClientOut, client_id, data)

    def delete_client(self, client_id: int) -> bool:
        return self._delete(Client, client_id)

    # === Tasks ===
    def get_all_tasks(self) -> List[TaskOut]:
        return self._all(Task, TaskOut)

    def get_task(self, task_id: int) -> Optional[TaskOut]:
        return self._get(Task, TaskOut, task_id)

    def create_task(self, data: TaskCreate) -> TaskOut:
        return self._insert(self._stamped(Task, data), TaskOut)

    def update_task(self, task_id: int, data: TaskUpdate) -> Optional[TaskOut]:
        return self._update(Task, TaskOut, task_id, data)

    def delete_task(self, task_id: int) -> bool:
        return self._delete(Task, task_id)

    # === Follow-ups ===
    def get_all_follow_ups(self) -> List[FollowUpOut]:
        return self._all(FollowUp, FollowUpOut)

    def get_follow_up(self, follow_up_id: int) -> Optional[FollowUpOut]:
        return self._get(FollowUp, FollowUpOut, follow_up_id)

    def create_follow_up(self, data: FollowUpCreate) -> FollowUpOut:
        return self._insert(self._stamped(FollowUp, data), FollowUpOut)

    def update_follow_up(self, follow_up_id: int, data: FollowUpUpdate) -> Optional[FollowUpOut]:
        return self._update(FollowUp, FollowUpOut, follow_up_id, data)

    def delete_follow_up(self, follow_up_id: int) -> bool:
        return self._delete(FollowUp, follow_up_id)

    # === Interactions ===
    def get_all_interactions(self) -> List[InteractionOut]:
        return self._all(Interaction, InteractionOut)

    def get_interaction(self, interaction_id: int) -> Optional[InteractionOut]:
        return self._get(Interaction, InteractionOut, interaction_id)

    def create_interaction(self, data: InteractionCreate) -> InteractionOut:
        row = self._stamped(Interaction, data, updated=False)
        if row.date is None:
            row.date = row.created_at
        return self._insert(row, InteractionOut)

    def delete_interaction(self, interaction_id: int) -> bool:
        return self._delete(Interaction, interaction_id)

    # === CRM integrations ===
    def get_all_crm_integrations(self) -> List[CrmIntegrationOut]:
        return self._all(CrmIntegration, CrmIntegrationOut)

    def get_crm_integration(self, integration_id: int) -> Optional[CrmIntegrationOut]:
        return self._get(CrmIntegration, CrmIntegrationOut, integration_id)

    def create_crm_integration(self, data: CrmIntegrationCreate) -> CrmIntegrationOut:
        return self._insert(self._stamped(CrmIntegration, data, updated=False), CrmIntegrationOut)

    def update_crm_integration(
        self, integration_id: int, data: CrmIntegrationUpdate
    ) -> Optional[CrmIntegrationOut]:
        return self._update(CrmIntegration, CrmIntegrationOut, integration_id, data, touch=False)

    def delete_crm_integration(self, integration_id: int) -> bool:
        return self._delete(CrmIntegration, integration_id)

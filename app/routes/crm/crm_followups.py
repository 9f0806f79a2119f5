import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies.storage import get_storage
from app.schemas.follow_up import FollowUpCreate, FollowUpOut, FollowUpUpdate, FollowUpView
from app.services.queries import client_name, is_follow_up_overdue
from app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


def present_follow_ups(follow_ups: List[FollowUpOut], storage: Storage) -> List[FollowUpView]:
    now = storage.now()
    clients = storage.clients_by_id()
    return [
        FollowUpView(
            **follow_up.model_dump(),
            is_overdue=is_follow_up_overdue(follow_up, now),
            client_name=client_name(clients, follow_up.client_id),
        )
        for follow_up in follow_ups
    ]


# -----------------------------
# 📤 List Follow-ups
# -----------------------------
@router.get("/followups", response_model=List[FollowUpView])
def get_follow_ups(
    client_id: Optional[int] = Query(None, alias="clientId"),
    upcoming: bool = Query(False),
    storage: Storage = Depends(get_storage),
):
    if client_id is not None:
        follow_ups = storage.get_follow_ups_by_client(client_id)
    elif upcoming:
        follow_ups = storage.get_upcoming_follow_ups()
    else:
        follow_ups = storage.get_all_follow_ups()
    return present_follow_ups(follow_ups, storage)


@router.get("/followups/overdue", response_model=List[FollowUpView])
def get_overdue_follow_ups(storage: Storage = Depends(get_storage)):
    return present_follow_ups(storage.get_overdue_follow_ups(), storage)


@router.get("/followups/{follow_up_id}", response_model=FollowUpView)
def get_follow_up(follow_up_id: int, storage: Storage = Depends(get_storage)):
    follow_up = storage.get_follow_up(follow_up_id)
    if not follow_up:
        raise HTTPException(status_code=404, detail="Follow-up not found")
    return present_follow_ups([follow_up], storage)[0]


# -----------------------------
# 📥 Schedule Follow-up
# -----------------------------
@router.post("/followups", response_model=FollowUpView, status_code=status.HTTP_201_CREATED)
def create_follow_up(follow_up: FollowUpCreate, storage: Storage = Depends(get_storage)):
    return present_follow_ups([storage.create_follow_up(follow_up)], storage)[0]


# -----------------------------
# ✏️ Update Follow-up
# -----------------------------
@router.patch("/followups/{follow_up_id}", response_model=FollowUpView)
def update_follow_up(
    follow_up_id: int, follow_up: FollowUpUpdate, storage: Storage = Depends(get_storage)
):
    updated = storage.update_follow_up(follow_up_id, follow_up)
    if not updated:
        logger.warning(f"⚠️ Update for unknown follow-up {follow_up_id}")
        raise HTTPException(status_code=404, detail="Follow-up not found")
    return present_follow_ups([updated], storage)[0]


# -----------------------------
# 🗑️ Delete Follow-up
# -----------------------------
@router.delete("/followups/{follow_up_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_follow_up(follow_up_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_follow_up(follow_up_id):
        logger.warning(f"⚠️ Delete for unknown follow-up {follow_up_id}")
        raise HTTPException(status_code=404, detail="Follow-up not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies.storage import get_storage
from app.schemas.client import ClientCreate, ClientOut, ClientStatus, ClientUpdate
from app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


# -----------------------------
# 📤 List / Search Clients
# -----------------------------
@router.get("/clients", response_model=List[ClientOut])
def get_clients(
    search: Optional[str] = Query(None),
    client_status: Optional[ClientStatus] = Query(None, alias="status"),
    storage: Storage = Depends(get_storage),
):
    # A search term takes precedence over the status filter
    if search:
        return storage.search_clients(search)
    if client_status:
        return storage.get_clients_by_status(client_status)
    return storage.get_all_clients()


@router.get("/clients/{client_id}", response_model=ClientOut)
def get_client(client_id: int, storage: Storage = Depends(get_storage)):
    client = storage.get_client(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


# -----------------------------
# 📥 Create Client
# -----------------------------
@router.post("/clients", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(client: ClientCreate, storage: Storage = Depends(get_storage)):
    return storage.create_client(client)


# -----------------------------
# ✏️ Update Client
# -----------------------------
@router.patch("/clients/{client_id}", response_model=ClientOut)
def update_client(client_id: int, client: ClientUpdate, storage: Storage = Depends(get_storage)):
    updated = storage.update_client(client_id, client)
    if not updated:
        logger.warning(f"⚠️ Update for unknown client {client_id}")
        raise HTTPException(status_code=404, detail="Client not found")
    return updated


# -----------------------------
# 🗑️ Delete Client
# -----------------------------
@router.delete("/clients/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: int, storage: Storage = Depends(get_storage)):
    # Tasks, follow-ups and interactions of the client are left in place
    if not storage.delete_client(client_id):
        logger.warning(f"⚠️ Delete for unknown client {client_id}")
        raise HTTPException(status_code=404, detail="Client not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

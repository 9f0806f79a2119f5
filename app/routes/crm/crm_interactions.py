from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.dependencies.storage import get_storage
from app.schemas.interaction import InteractionCreate, InteractionOut
from app.services.storage import Storage

router = APIRouter()


@router.get("/interactions", response_model=List[InteractionOut])
def get_interactions(
    client_id: Optional[int] = Query(None, alias="clientId"),
    storage: Storage = Depends(get_storage),
):
    if client_id is not None:
        return storage.get_interactions_by_client(client_id)
    return storage.get_all_interactions()


@router.get("/interactions/{interaction_id}", response_model=InteractionOut)
def get_interaction(interaction_id: int, storage: Storage = Depends(get_storage)):
    interaction = storage.get_interaction(interaction_id)
    if not interaction:
        raise HTTPException(status_code=404, detail="Interaction not found")
    return interaction


@router.post("/interactions", response_model=InteractionOut, status_code=status.HTTP_201_CREATED)
def create_interaction(interaction: InteractionCreate, storage: Storage = Depends(get_storage)):
    return storage.create_interaction(interaction)


@router.delete("/interactions/{interaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_interaction(interaction_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_interaction(interaction_id):
        raise HTTPException(status_code=404, detail="Interaction not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

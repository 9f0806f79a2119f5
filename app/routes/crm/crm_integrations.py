import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.dependencies.storage import get_storage
from app.schemas.integration import CrmIntegrationCreate, CrmIntegrationOut, CrmIntegrationUpdate
from app.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Integration not found"


# -----------------------------
# 🔌 Third-party CRM connections
# No provider is ever contacted: connecting stores the record,
# toggle and sync only flip isConnected / stamp lastSync.
# -----------------------------
@router.get("/integrations", response_model=List[CrmIntegrationOut])
def get_integrations(storage: Storage = Depends(get_storage)):
    return storage.get_all_crm_integrations()


@router.get("/integrations/{integration_id}", response_model=CrmIntegrationOut)
def get_integration(integration_id: int, storage: Storage = Depends(get_storage)):
    integration = storage.get_crm_integration(integration_id)
    if not integration:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return integration


@router.post("/integrations", response_model=CrmIntegrationOut, status_code=status.HTTP_201_CREATED)
def create_integration(integration: CrmIntegrationCreate, storage: Storage = Depends(get_storage)):
    created = storage.create_crm_integration(integration)
    logger.info(f"🔌 Connected {created.type} integration {created.id}")
    return created


@router.patch("/integrations/{integration_id}", response_model=CrmIntegrationOut)
def update_integration(
    integration_id: int, integration: CrmIntegrationUpdate, storage: Storage = Depends(get_storage)
):
    updated = storage.update_crm_integration(integration_id, integration)
    if not updated:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.post("/integrations/{integration_id}/toggle", response_model=CrmIntegrationOut)
def toggle_integration(integration_id: int, storage: Storage = Depends(get_storage)):
    updated = storage.toggle_crm_integration(integration_id)
    if not updated:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return updated


@router.post("/integrations/{integration_id}/sync", response_model=CrmIntegrationOut)
def sync_integration(integration_id: int, storage: Storage = Depends(get_storage)):
    updated = storage.sync_crm_integration(integration_id)
    if not updated:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    logger.info(f"🔄 Simulated sync for integration {integration_id}")
    return updated


@router.delete("/integrations/{integration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_integration(integration_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_crm_integration(integration_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

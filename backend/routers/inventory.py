import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from core.errors import InputError, InventoryStatusError
from core.statuses import BusinessStatus, PhysicalStatus, get_status_display_info
from db.inventory_store import InventoryStore, get_inventory_store
from schemas.inventory import (
    BulkStatusUpdateRequest,
    BulkStatusUpdateResponse,
    CancelItemRequest,
    DualStatusResponse,
    PartNumberModificationRequest,
    StatusUpdateRequest,
    StatusUpdateResponse,
)
from services.item_lifecycle import cancel_item, delete_item
from services.part_number_history import get_status_history, record_part_number_modification
from services.status_updates import bulk_update_status, update_status

logger = logging.getLogger(__name__)

router = APIRouter()


async def _respond(store: InventoryStore, action: str, call):
    """Await a service call and map its errors onto JSON error bodies."""
    try:
        return await call
    except InventoryStatusError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_response())
    except Exception as e:
        await store.rollback()
        logger.exception("%s failed: %r", action, e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "details": str(e)},
        )


async def _list_dual_status(
    store: InventoryStore,
    inventory_id: Optional[UUID],
    physical_status: Optional[str],
    business_status: Optional[str],
) -> dict:
    physical_values = [s.value for s in PhysicalStatus]
    business_values = [s.value for s in BusinessStatus]
    if physical_status and physical_status not in physical_values:
        raise InputError(f"Invalid physical_status. Must be one of: {', '.join(physical_values)}")
    if business_status and business_status not in business_values:
        raise InputError(f"Invalid business_status. Must be one of: {', '.join(business_values)}")

    rows = await store.list_items(
        inventory_id=inventory_id,
        physical_status=physical_status,
        business_status=business_status,
    )
    for row in rows:
        row["status_display"] = get_status_display_info(row["physical_status"], row["business_status"]).to_dict()
    return {"success": True, "data": rows, "count": len(rows)}


@router.get("/dual-status", response_model=DualStatusResponse)
async def list_dual_status(
    inventory_id: Optional[UUID] = None,
    physical_status: Optional[str] = None,
    business_status: Optional[str] = None,
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(
        store,
        "list_dual_status",
        _list_dual_status(store, inventory_id, physical_status, business_status),
    )


@router.put("/status", response_model=StatusUpdateResponse)
async def update_inventory_status(
    payload: StatusUpdateRequest,
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(
        store,
        "update_inventory_status",
        update_status(
            store,
            payload.inventory_id,
            physical_status=payload.physical_status,
            business_status=payload.business_status,
            updated_by=payload.status_updated_by,
            notes=payload.notes,
        ),
    )


@router.put("/bulk-status", response_model=BulkStatusUpdateResponse)
async def bulk_update_inventory_status(
    payload: BulkStatusUpdateRequest,
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(
        store,
        "bulk_update_inventory_status",
        bulk_update_status(
            store,
            payload.inventory_ids,
            physical_status=payload.physical_status,
            business_status=payload.business_status,
            updated_by=payload.status_updated_by,
            notes=payload.notes,
        ),
    )


@router.get("/status-history")
async def read_status_history(
    inventory_id: Optional[UUID] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(
        store,
        "read_status_history",
        get_status_history(store, inventory_id, limit=limit, offset=offset),
    )


@router.post("/status-history")
async def create_status_history(
    payload: PartNumberModificationRequest,
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(
        store,
        "create_status_history",
        record_part_number_modification(store, **payload.model_dump()),
    )


@router.post("/{inventory_id}/cancel")
async def cancel_inventory_item(
    inventory_id: UUID,
    payload: Optional[CancelItemRequest] = None,
    store: InventoryStore = Depends(get_inventory_store),
):
    updated_by = payload.status_updated_by if payload else None
    return await _respond(
        store,
        "cancel_inventory_item",
        cancel_item(store, inventory_id, updated_by=updated_by),
    )


@router.delete("/{inventory_id}")
async def delete_inventory_item(
    inventory_id: UUID,
    store: InventoryStore = Depends(get_inventory_store),
):
    return await _respond(store, "delete_inventory_item", delete_item(store, inventory_id))

"""Cancel / delete guards for inventory items.

Cancelling moves an in-stock item to business status 'cancelled'; only
cancelled items may then be deleted.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from core.errors import InputError, NotFoundError
from core.statuses import BusinessStatus, StatusPair
from core.transitions import can_cancel_item, can_delete_item

logger = logging.getLogger(__name__)


async def _locked_status(store, inventory_id) -> StatusPair:
    row = await store.fetch_status_by_id(inventory_id)
    if row is None:
        await store.rollback()
        raise NotFoundError("Inventory item not found")
    return StatusPair.from_values(row["physical_status"], row["business_status"])


async def cancel_item(store, inventory_id, updated_by: Optional[str] = None) -> dict:
    current = await _locked_status(store, inventory_id)
    if not can_cancel_item(current):
        await store.rollback()
        raise InputError(
            "Only in-stock items (available at depot) can be cancelled",
            details=f"Current status: {current.business_status.value} - {current.physical_status.value}",
        )

    now = datetime.now(timezone.utc)
    patch = {
        "business_status": BusinessStatus.CANCELLED,
        "status": "Cancelled",
        "status_updated_at": now,
        "updated_at": now,
    }
    if updated_by:
        patch["status_updated_by"] = updated_by

    updated = await store.update_status_by_id(inventory_id, patch)
    await store.commit()
    logger.info("Inventory %s cancelled", inventory_id)
    return {"success": True, "message": "Inventory item cancelled", "data": updated}


async def delete_item(store, inventory_id) -> dict:
    current = await _locked_status(store, inventory_id)
    if not can_delete_item(current):
        await store.rollback()
        raise InputError(
            "Only cancelled items can be deleted",
            details=f"Current status: {current.business_status.value} - {current.physical_status.value}",
        )

    await store.delete_item(inventory_id)
    await store.commit()
    logger.info("Inventory %s deleted", inventory_id)
    return {"success": True, "message": "Inventory item deleted", "inventory_id": str(inventory_id)}

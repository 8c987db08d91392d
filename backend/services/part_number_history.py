import logging
from datetime import datetime, timezone
from typing import Optional

from core.errors import InputError, NotFoundError

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("inventory_id", "original_pn_id", "modified_pn_id", "modification_reason")


async def get_status_history(store, inventory_id, limit: int = 50, offset: int = 0) -> dict:
    if not inventory_id:
        raise InputError("inventory_id parameter is required")

    current_item = await store.fetch_item(inventory_id)
    if current_item is None:
        raise NotFoundError("Inventory item not found")

    history = await store.list_history(inventory_id, limit=limit, offset=offset)
    return {
        "success": True,
        "current_item": current_item,
        "status_history": history,
        "pagination": {
            "limit": limit,
            "offset": offset,
            "total": len(history),
            "has_more": len(history) == limit,
        },
    }


async def record_part_number_modification(
    store,
    inventory_id=None,
    original_pn_id=None,
    modified_pn_id=None,
    modification_reason: Optional[str] = None,
    traceability_notes: Optional[str] = None,
    business_value_adjustment: Optional[float] = None,
    modified_by_user_id: Optional[str] = None,
    repair_order_id: Optional[str] = None,
) -> dict:
    """
    Record a part-number modification for an inventory item.

    When the item currently carries `original_pn_id` it is moved to
    `modified_pn_id` in the same transaction as the history record.
    """
    given = {
        "inventory_id": inventory_id,
        "original_pn_id": original_pn_id,
        "modified_pn_id": modified_pn_id,
        "modification_reason": modification_reason,
    }
    if any(not given[f] for f in _REQUIRED_FIELDS):
        raise InputError(f"Required fields: {', '.join(_REQUIRED_FIELDS)}")

    item = await store.fetch_status_by_id(inventory_id)
    if item is None:
        await store.rollback()
        raise NotFoundError("Inventory item not found")

    pn_ids = {str(original_pn_id), str(modified_pn_id)}
    part_numbers = await store.fetch_part_numbers(pn_ids)
    if len(pn_ids) != 2 or len(part_numbers) != 2:
        await store.rollback()
        raise InputError("Invalid part number IDs provided")

    now = datetime.now(timezone.utc)
    record = await store.create_history(
        {
            "inventory_id": inventory_id,
            "original_pn_id": original_pn_id,
            "modified_pn_id": modified_pn_id,
            "modification_reason": modification_reason,
            "modification_date": now,
            "traceability_notes": traceability_notes,
            "business_value_adjustment": business_value_adjustment,
            "modified_by_user_id": modified_by_user_id,
            "repair_order_id": repair_order_id,
            "is_active": True,
        }
    )

    if item.get("pn_id") == str(original_pn_id):
        await store.set_part_number(inventory_id, modified_pn_id, updated_at=now)

    await store.commit()
    logger.info("Recorded part-number modification for inventory %s", inventory_id)
    return {
        "success": True,
        "message": "Part number modification history created successfully",
        "data": record,
    }

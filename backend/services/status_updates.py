"""
Status updates for inventory items, single and bulk.

Both paths run fetch -> validate -> write against the injected store. The
fetch locks the rows, so the transition is validated against the state that
the write replaces. The bulk path is all-or-nothing: one failing item means
nothing is written.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

from core.errors import InputError, NotFoundError, TransitionValidationError
from core.statuses import (
    UPDATABLE_BUSINESS_STATUSES,
    UPDATABLE_PHYSICAL_STATUSES,
    BusinessStatus,
    PhysicalStatus,
    StatusPair,
)
from core.transitions import validate_status_transition

logger = logging.getLogger(__name__)

MAX_BULK_ITEMS = 100


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check_status_fields(physical_status: Optional[str], business_status: Optional[str]) -> None:
    if not physical_status and not business_status:
        raise InputError("At least one status field (physical_status or business_status) is required")

    if physical_status and physical_status not in UPDATABLE_PHYSICAL_STATUSES:
        raise InputError(
            f"Invalid physical_status. Must be one of: {', '.join(UPDATABLE_PHYSICAL_STATUSES)}"
        )

    if business_status and business_status not in UPDATABLE_BUSINESS_STATUSES:
        raise InputError(
            f"Invalid business_status. Must be one of: {', '.join(UPDATABLE_BUSINESS_STATUSES)}"
        )


def _status_patch(
    physical_status: Optional[str],
    business_status: Optional[str],
    updated_by: Optional[str],
) -> dict:
    # Only supplied fields are written
    patch = {}
    if physical_status:
        patch["physical_status"] = PhysicalStatus(physical_status)
    if business_status:
        patch["business_status"] = BusinessStatus(business_status)
    if updated_by:
        patch["status_updated_by"] = updated_by
    return patch


async def update_status(
    store,
    inventory_id,
    physical_status: Optional[str] = None,
    business_status: Optional[str] = None,
    updated_by: Optional[str] = None,
    notes: Optional[str] = None,
) -> dict:
    if not inventory_id:
        raise InputError("inventory_id is required")
    _check_status_fields(physical_status, business_status)

    current_row = await store.fetch_status_by_id(inventory_id)
    if current_row is None:
        await store.rollback()
        raise NotFoundError("Inventory item not found")

    current = StatusPair.from_values(current_row["physical_status"], current_row["business_status"])
    desired = current.resolve(physical_status, business_status)

    result = validate_status_transition(current, desired)
    if not result.valid:
        await store.rollback()
        logger.info("Rejected status transition for %s: %s", inventory_id, result.reason)
        raise TransitionValidationError("Invalid status transition", details=result.reason)

    physical_changed = desired.physical_status is not current.physical_status
    business_changed = desired.business_status is not current.business_status

    now = _now()
    patch = _status_patch(physical_status, business_status, updated_by)
    if notes:
        patch["remarks"] = notes
    if physical_changed or business_changed:
        patch["status_updated_at"] = now
    patch["updated_at"] = now

    updated = await store.update_status_by_id(inventory_id, patch)
    await store.commit()

    logger.info(
        "Inventory %s status %s/%s -> %s/%s",
        inventory_id,
        current.physical_status.value,
        current.business_status.value,
        desired.physical_status.value,
        desired.business_status.value,
    )
    return {
        "success": True,
        "message": "Inventory status updated successfully",
        "data": updated,
        "changes": {
            "physical_status_changed": physical_changed,
            "business_status_changed": business_changed,
            "previous_physical_status": current.physical_status.value,
            "previous_business_status": current.business_status.value,
            "new_physical_status": desired.physical_status.value,
            "new_business_status": desired.business_status.value,
        },
    }


async def bulk_update_status(
    store,
    inventory_ids: Optional[Sequence],
    physical_status: Optional[str] = None,
    business_status: Optional[str] = None,
    updated_by: Optional[str] = None,
    notes: Optional[str] = None,
) -> dict:
    if not inventory_ids or not isinstance(inventory_ids, (list, tuple)):
        raise InputError("inventory_ids array is required and cannot be empty")
    _check_status_fields(physical_status, business_status)
    if len(inventory_ids) > MAX_BULK_ITEMS:
        raise InputError(f"Bulk operations are limited to {MAX_BULK_ITEMS} items at a time")

    try:
        # Canonical lowercase form, matching the ids the store returns
        requested = list(dict.fromkeys(str(uuid.UUID(str(i))) for i in inventory_ids))
    except ValueError:
        raise InputError("inventory_ids must be valid UUIDs")

    current_rows = await store.fetch_status_by_ids(requested)
    if not current_rows:
        await store.rollback()
        raise NotFoundError("No inventory items found with provided IDs")

    found_ids = {row["inventory_id"] for row in current_rows}
    not_found_ids = [i for i in requested if i not in found_ids]

    validation_errors = []
    for row in current_rows:
        current = StatusPair.from_values(row["physical_status"], row["business_status"])
        desired = current.resolve(physical_status, business_status)
        result = validate_status_transition(current, desired)
        if not result.valid:
            validation_errors.append(
                {
                    "inventory_id": row["inventory_id"],
                    "part_number": row.get("part_number") or "Unknown",
                    "error": result.reason or "Invalid transition",
                }
            )

    if validation_errors:
        await store.rollback()
        logger.info(
            "Rejected bulk status update: %d of %d items failed validation",
            len(validation_errors),
            len(current_rows),
        )
        raise TransitionValidationError(
            "Status transition validation failed for some items",
            validation_errors=validation_errors,
            valid_items=len(current_rows) - len(validation_errors),
            total_items=len(current_rows),
            not_found_ids=not_found_ids,
        )

    now = _now()
    patch = _status_patch(physical_status, business_status, updated_by)
    if notes:
        patch["notes"] = notes
    patch["status_updated_at"] = now
    patch["updated_at"] = now

    updated_items = await store.update_status_by_ids([row["inventory_id"] for row in current_rows], patch)
    await store.commit()

    if not_found_ids:
        logger.warning("Bulk status update skipped %d unknown ids", len(not_found_ids))
    logger.info("Bulk status update applied to %d inventory items", len(updated_items))

    return {
        "success": True,
        "message": f"Successfully updated {len(updated_items)} inventory items",
        "data": {
            "updated_items": updated_items,
            "update_summary": {
                "total_requested": len(inventory_ids),
                "total_updated": len(updated_items),
                "physical_status_applied": physical_status,
                "business_status_applied": business_status,
                "updated_by": updated_by,
                "not_found_ids": not_found_ids,
                "timestamp": now.isoformat(),
            },
        },
    }

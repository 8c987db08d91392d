from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator


def _strip_or_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


# Status values stay plain strings here: membership is checked by the services
# so the error bodies carry the documented messages.

class StatusUpdateRequest(BaseModel):
    inventory_id: Optional[UUID] = None
    physical_status: Optional[str] = None
    business_status: Optional[str] = None
    status_updated_by: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("physical_status", "business_status", "status_updated_by", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return _strip_or_none(v)


class BulkStatusUpdateRequest(BaseModel):
    inventory_ids: Optional[List[UUID]] = None
    physical_status: Optional[str] = None
    business_status: Optional[str] = None
    status_updated_by: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("physical_status", "business_status", "status_updated_by", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return _strip_or_none(v)


class PartNumberModificationRequest(BaseModel):
    inventory_id: Optional[UUID] = None
    original_pn_id: Optional[UUID] = None
    modified_pn_id: Optional[UUID] = None
    modification_reason: Optional[str] = None
    traceability_notes: Optional[str] = None
    business_value_adjustment: Optional[float] = None
    modified_by_user_id: Optional[str] = None
    repair_order_id: Optional[str] = None

    @field_validator("modification_reason", "traceability_notes", "modified_by_user_id", "repair_order_id")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return _strip_or_none(v)


class CancelItemRequest(BaseModel):
    status_updated_by: Optional[str] = None

    @field_validator("status_updated_by")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return _strip_or_none(v)


class StatusChanges(BaseModel):
    physical_status_changed: bool
    business_status_changed: bool
    previous_physical_status: str
    previous_business_status: str
    new_physical_status: str
    new_business_status: str


class BulkUpdateSummary(BaseModel):
    total_requested: int
    total_updated: int
    physical_status_applied: Optional[str] = None
    business_status_applied: Optional[str] = None
    updated_by: Optional[str] = None
    not_found_ids: List[str] = []
    timestamp: str


class StatusUpdateResponse(BaseModel):
    success: bool
    message: str
    data: dict
    changes: StatusChanges


class BulkUpdateData(BaseModel):
    updated_items: List[dict]
    update_summary: BulkUpdateSummary


class BulkStatusUpdateResponse(BaseModel):
    success: bool
    message: str
    data: BulkUpdateData


class DualStatusResponse(BaseModel):
    success: bool
    data: List[dict]
    count: int

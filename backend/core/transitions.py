from dataclasses import dataclass
from typing import Optional

from core.statuses import BusinessStatus, PhysicalStatus, StatusPair


SOLD_IN_REPAIR = "Cannot mark items as sold while they are in repair"
SOLD_ITEM_MOVED = "Cannot change physical status of sold items"
RESERVED_IN_REPAIR = "Reserved items should not be in repair status"


@dataclass(frozen=True)
class TransitionResult:
    valid: bool
    reason: Optional[str] = None


def validate_status_transition(current: StatusPair, desired: StatusPair) -> TransitionResult:
    """
    Check a move from `current` to `desired`.

    Both pairs must be fully resolved: fields the caller is not changing carry
    their current value. Rules are evaluated in order and the first match wins.
    The sold-item rule is the only one keyed on the current state; the others
    reject landing in a bad combination.
    """
    if (
        desired.business_status is BusinessStatus.SOLD
        and desired.physical_status is PhysicalStatus.IN_REPAIR
    ):
        return TransitionResult(False, SOLD_IN_REPAIR)

    if (
        current.business_status is BusinessStatus.SOLD
        and desired.physical_status is not current.physical_status
    ):
        return TransitionResult(False, SOLD_ITEM_MOVED)

    if (
        desired.business_status is BusinessStatus.RESERVED
        and desired.physical_status is PhysicalStatus.IN_REPAIR
    ):
        return TransitionResult(False, RESERVED_IN_REPAIR)

    return TransitionResult(True)


def can_cancel_item(status: StatusPair) -> bool:
    # Only in-stock items: available at the depot
    return (
        status.physical_status is PhysicalStatus.DEPOT
        and status.business_status is BusinessStatus.AVAILABLE
    )


def can_delete_item(status: StatusPair) -> bool:
    # Only cancelled items that are not on their way somewhere
    return (
        status.business_status is BusinessStatus.CANCELLED
        and status.physical_status is not PhysicalStatus.IN_TRANSIT
    )

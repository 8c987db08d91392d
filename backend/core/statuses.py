"""
Dual inventory status.

Every inventory item carries two independent dimensions:
- PhysicalStatus: where the unit sits in the operational pipeline
- BusinessStatus: the commercial / ownership state

Values are str-valued enums so they compare equal to the exact lowercase
strings stored in the database and exchanged over JSON.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PhysicalStatus(str, Enum):
    DEPOT = "depot"
    IN_REPAIR = "in_repair"
    IN_TRANSIT = "in_transit"


class BusinessStatus(str, Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"
    CANCELLED = "cancelled"


# Values accepted by the status update endpoints. 'cancelled' is only reachable
# through the cancel endpoint.
UPDATABLE_PHYSICAL_STATUSES = [s.value for s in PhysicalStatus]
UPDATABLE_BUSINESS_STATUSES = [
    BusinessStatus.AVAILABLE.value,
    BusinessStatus.RESERVED.value,
    BusinessStatus.SOLD.value,
]


@dataclass(frozen=True)
class StatusPair:
    physical_status: PhysicalStatus
    business_status: BusinessStatus

    @classmethod
    def from_values(cls, physical_status: str, business_status: str) -> "StatusPair":
        return cls(PhysicalStatus(physical_status), BusinessStatus(business_status))

    def resolve(
        self,
        physical_status: Optional[str] = None,
        business_status: Optional[str] = None,
    ) -> "StatusPair":
        """Apply a partial update; omitted fields keep their current value."""
        return StatusPair(
            PhysicalStatus(physical_status) if physical_status else self.physical_status,
            BusinessStatus(business_status) if business_status else self.business_status,
        )


INITIAL_STATUS = StatusPair(PhysicalStatus.DEPOT, BusinessStatus.AVAILABLE)


@dataclass(frozen=True)
class StatusCombination:
    physical_status: PhysicalStatus
    business_status: BusinessStatus
    legacy_status: Optional[str]
    display_label: str
    color_class: str

    def to_dict(self) -> dict:
        return {
            "physical_status": self.physical_status.value,
            "business_status": self.business_status.value,
            "legacy_status": self.legacy_status,
            "display_label": self.display_label,
            "color_class": self.color_class,
        }


COMMON_STATUS_COMBINATIONS: list[StatusCombination] = [
    StatusCombination(
        PhysicalStatus.DEPOT,
        BusinessStatus.AVAILABLE,
        legacy_status="Available",
        display_label="In Stock",
        color_class="bg-green-100 text-green-800 border-green-200",
    ),
    StatusCombination(
        PhysicalStatus.DEPOT,
        BusinessStatus.RESERVED,
        legacy_status="Reserved",
        display_label="Reserved - In Stock",
        color_class="bg-yellow-100 text-yellow-800 border-yellow-200",
    ),
    StatusCombination(
        PhysicalStatus.IN_TRANSIT,
        BusinessStatus.SOLD,
        legacy_status="Sold",
        display_label="Sold - In Transit",
        color_class="bg-blue-100 text-blue-800 border-blue-200",
    ),
    StatusCombination(
        PhysicalStatus.IN_REPAIR,
        BusinessStatus.AVAILABLE,
        legacy_status="Under Repair",
        display_label="In Repair - Available",
        color_class="bg-purple-100 text-purple-800 border-purple-200",
    ),
]

_DEFAULT_COLOR_CLASS = "bg-gray-100 text-gray-800 border-gray-200"


def get_status_display_info(physical_status: str, business_status: str) -> StatusCombination:
    physical = PhysicalStatus(physical_status)
    business = BusinessStatus(business_status)
    for combo in COMMON_STATUS_COMBINATIONS:
        if combo.physical_status == physical and combo.business_status == business:
            return combo
    return StatusCombination(
        physical,
        business,
        legacy_status=None,
        display_label=f"{business.value} - {physical.value}",
        color_class=_DEFAULT_COLOR_CLASS,
    )

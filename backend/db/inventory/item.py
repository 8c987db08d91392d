import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from core.statuses import BusinessStatus, PhysicalStatus
from ..database import Base


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


def _iso(dt):
    return dt.isoformat() if dt is not None else None


class InventoryItem(Base):
    __tablename__ = "inventory"

    inventory_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    pn_id = Column(UUID(as_uuid=True), ForeignKey("pn_master_table.pn_id", ondelete="RESTRICT"), nullable=False, index=True)

    sn = Column(String, nullable=True)
    location = Column(String, nullable=True)
    po_price = Column(Numeric(12, 2), nullable=True)
    remarks = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    # Legacy single status text ('Available', 'Sold', ...), kept for old reports
    status = Column(Text, nullable=True)

    physical_status = Column(
        Enum(PhysicalStatus, name="physical_status_enum", values_callable=_enum_values),
        nullable=False,
        default=PhysicalStatus.DEPOT,
        index=True,
    )
    business_status = Column(
        Enum(BusinessStatus, name="business_status_enum", values_callable=_enum_values),
        nullable=False,
        default=BusinessStatus.AVAILABLE,
        index=True,
    )
    status_updated_at = Column(DateTime(timezone=True), nullable=True)
    status_updated_by = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

    part = relationship("PartNumber")
    history = relationship("PartNumberHistory", back_populates="inventory_item", cascade="all, delete-orphan")

    @property
    def to_schema(self):
        """Row shape returned by the store. `part` must be loaded."""
        part = self.part
        return {
            "inventory_id": str(self.inventory_id),
            "pn_id": str(self.pn_id) if self.pn_id else None,
            "part_number": part.pn if part else "Unknown",
            "description": part.description if part else None,
            "sn": self.sn,
            "location": self.location,
            "po_price": float(self.po_price) if self.po_price is not None else None,
            "remarks": self.remarks,
            "notes": self.notes,
            "status": self.status,
            "physical_status": PhysicalStatus(self.physical_status).value,
            "business_status": BusinessStatus(self.business_status).value,
            "status_updated_at": _iso(self.status_updated_at),
            "status_updated_by": self.status_updated_by,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

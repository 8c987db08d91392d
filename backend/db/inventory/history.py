import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class PartNumberHistory(Base):
    """Part-number modification applied to one inventory item (e.g. after a repair)."""
    __tablename__ = "part_number_history"

    history_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    inventory_id = Column(
        UUID(as_uuid=True),
        ForeignKey("inventory.inventory_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    original_pn_id = Column(UUID(as_uuid=True), ForeignKey("pn_master_table.pn_id"), nullable=False)
    modified_pn_id = Column(UUID(as_uuid=True), ForeignKey("pn_master_table.pn_id"), nullable=False)

    modification_reason = Column(Text, nullable=False)
    modification_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    traceability_notes = Column(Text, nullable=True)
    business_value_adjustment = Column(Numeric(12, 2), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Account references live in the auth service; stored opaque
    modified_by_user_id = Column(Text, nullable=True)
    approved_by_user_id = Column(Text, nullable=True)
    approval_date = Column(DateTime(timezone=True), nullable=True)
    repair_order_id = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    inventory_item = relationship("InventoryItem", back_populates="history")
    original_pn = relationship("PartNumber", foreign_keys=[original_pn_id])
    modified_pn = relationship("PartNumber", foreign_keys=[modified_pn_id])

    @property
    def to_schema(self):
        """`original_pn` and `modified_pn` must be loaded."""
        return {
            "history_id": str(self.history_id),
            "inventory_id": str(self.inventory_id),
            "modification_date": self.modification_date.isoformat() if self.modification_date else None,
            "modification_reason": self.modification_reason,
            "traceability_notes": self.traceability_notes,
            "business_value_adjustment": (
                float(self.business_value_adjustment) if self.business_value_adjustment is not None else None
            ),
            "is_active": bool(self.is_active),
            "modified_by_user_id": self.modified_by_user_id,
            "approved_by_user_id": self.approved_by_user_id,
            "approval_date": self.approval_date.isoformat() if self.approval_date else None,
            "repair_order_id": self.repair_order_id,
            "original_pn": self.original_pn.to_schema if self.original_pn else None,
            "modified_pn": self.modified_pn.to_schema if self.modified_pn else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

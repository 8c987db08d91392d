import uuid
from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import UUID
from .database import Base


class PartNumber(Base):
    """Part-number catalog entry (pn_master_table)."""
    __tablename__ = "pn_master_table"

    pn_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    pn = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)

    @property
    def to_schema(self):
        return {
            "pn_id": str(self.pn_id),
            "pn": self.pn,
            "description": self.description,
        }

# backend/farmrec/models/farmer.py

from sqlalchemy import Column, String, Text, Float, Date, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import sqlalchemy as sa

from farmrec.core.database import Base


class Farmer(Base):
    __tablename__ = "farmers"

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=sa.text("gen_random_uuid()"))
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    middle_initial = Column(String(5), nullable=True)

    # grouping is by literal string, no lookup tables
    location_group = Column(Text, nullable=False, default="")
    barangay = Column(Text, nullable=False)
    town = Column(Text, nullable=False)
    contact_number = Column(Text, nullable=False, default="")

    land_area = Column(Float, nullable=True)             # hectares
    planted_date = Column(Date, nullable=True)
    harvest_date = Column(Date, nullable=True)

    user_id = Column(UUID(as_uuid=False), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)

    __table_args__ = (
        CheckConstraint("land_area IS NULL OR land_area >= 0", name="ck_farmers_land_area"),
    )

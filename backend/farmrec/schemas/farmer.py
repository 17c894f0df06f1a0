# backend/farmrec/schemas/farmer.py

from typing import Optional, Union
from datetime import date, datetime
from pydantic import BaseModel


# ============================================================
# FORM INPUT (validated field by field before it is stored)
# ============================================================

class FarmerForm(BaseModel):
    first_name: str = ""
    last_name: str = ""
    middle_initial: Optional[str] = None
    location_group: str = ""
    barangay: str = ""
    town: str = ""
    contact_number: str = ""
    land_area: Optional[Union[float, str]] = None
    planted_date: Optional[str] = None
    harvest_date: Optional[str] = None


# ============================================================
# STORED RECORD
# ============================================================

class FarmerBase(BaseModel):
    first_name: str
    last_name: str
    middle_initial: Optional[str] = None
    location_group: str = ""
    barangay: str
    town: str
    contact_number: str = ""
    land_area: Optional[float] = None
    planted_date: Optional[date] = None
    harvest_date: Optional[date] = None


class FarmerCreate(FarmerBase):
    pass


class Farmer(FarmerBase):
    id: str
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============================================================
# CARD (list item with harvest badge)
# ============================================================

class FarmerCard(BaseModel):
    id: Optional[str] = None
    full_name: str
    barangay: Optional[str] = None
    town: Optional[str] = None
    contact_number: Optional[str] = None
    land_area: Optional[float] = None
    harvest_date: Optional[date] = None
    status: str
    label: Optional[str] = None
    days: Optional[int] = None

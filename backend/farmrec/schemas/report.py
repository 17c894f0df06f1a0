# backend/farmrec/schemas/report.py

from typing import Optional, Dict, List
import datetime as dt
from pydantic import BaseModel

from farmrec.schemas.farmer import Farmer


class ValidationResultSchema(BaseModel):
    is_valid: bool
    errors: List[str] = []


class LandAreaSummary(BaseModel):
    total: float
    average: float


class StatusCounts(BaseModel):
    counts: Dict[str, int]
    total: int
    without_date: int


class DashboardSummary(BaseModel):
    total_farmers: int
    total_land_area: float
    average_land_area: float
    upcoming_harvests: int
    overdue_harvests: int


class ActivityItem(BaseModel):
    id: str
    farmer_id: Optional[str] = None
    type: str
    title: str
    description: str
    days: int
    harvest_date: Optional[dt.date] = None


class HarvestNotification(BaseModel):
    id: Optional[str] = None
    type: str
    farmer: str
    message: str
    date: Optional[dt.date] = None
    priority: str
    days: int


class CalendarEntry(BaseModel):
    farmer_id: Optional[str] = None
    name: str
    harvest_date: dt.date
    weekday: str
    days: int


class LocationBreakdown(BaseModel):
    by_town: Dict[str, int]
    by_barangay: Dict[str, int]
    by_location_group: Dict[str, int]


class FarmReport(DashboardSummary):
    by_town: Dict[str, int]
    by_barangay: Dict[str, int]
    status_counts: StatusCounts
    upcoming: List[Farmer] = []
    overdue: List[Farmer] = []
    harvestable: List[Farmer] = []

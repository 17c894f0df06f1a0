# backend/farmrec/api/reports.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.auth import require_permission
from farmrec.core.database import get_db
from farmrec.crud import farmers as crud_farmers
from farmrec.schemas.report import FarmReport, LandAreaSummary, LocationBreakdown
from farmrec.schemas.user import CurrentUser
from farmrec.services import harvest_report_service as reports
from farmrec.services.harvest_status_service import today

router = APIRouter(prefix="/reports", tags=["Reports"])

viewer = require_permission("view_reports")


@router.get("/summary", response_model=FarmReport)
async def report_summary(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.farm_report(farmers, today())


@router.get("/locations", response_model=LocationBreakdown)
async def report_locations(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.location_breakdown(farmers)


@router.get("/land-area", response_model=LandAreaSummary)
async def report_land_area(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.land_area_summary(farmers)

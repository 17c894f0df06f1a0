# backend/farmrec/api/dashboard.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.auth import require_permission
from farmrec.core.config import settings
from farmrec.core.database import get_db
from farmrec.crud import farmers as crud_farmers
from farmrec.schemas.report import (
    ActivityItem,
    CalendarEntry,
    DashboardSummary,
    HarvestNotification,
    StatusCounts,
)
from farmrec.schemas.user import CurrentUser
from farmrec.services import harvest_report_service as reports
from farmrec.services.harvest_status_service import HarvestWindow, today

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

viewer = require_permission("view_reports")


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.dashboard_summary(farmers, today())


@router.get("/status", response_model=StatusCounts)
async def status_counts(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.count_by_status(farmers, today())


@router.get("/recent-activity", response_model=List[ActivityItem])
async def recent_activity(
    limit: Optional[int] = Query(None, ge=0, le=100),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(viewer),
):
    farmers = await crud_farmers.list_farmers(db)
    if limit is None:
        limit = settings.RECENT_ACTIVITY_LIMIT
    return reports.recent_activity(farmers, today(), limit=limit)


@router.get("/notifications", response_model=List[HarvestNotification])
async def notifications(db: AsyncSession = Depends(get_db), user: CurrentUser = Depends(viewer)):
    farmers = await crud_farmers.list_farmers(db)
    return reports.harvest_notifications(farmers, today())


@router.get("/calendar", response_model=List[CalendarEntry])
async def harvest_calendar(
    days: int = Query(7, ge=0, le=366),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(viewer),
):
    farmers = await crud_farmers.list_farmers(db)
    return reports.harvest_calendar(farmers, today(), HarvestWindow(0, days))

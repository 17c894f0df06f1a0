# backend/farmrec/api/farmers.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.auth import require_permission
from farmrec.core.database import get_db
from farmrec.core.utils_logging import log_user_action
from farmrec.crud import farmers as crud_farmers
from farmrec.schemas.farmer import Farmer, FarmerCard, FarmerForm
from farmrec.schemas.report import ValidationResultSchema
from farmrec.schemas.user import CurrentUser
from farmrec.services.harvest_report_service import farmer_card, filter_farmers
from farmrec.services.harvest_status_service import today
from farmrec.services.validation_service import clean_farmer_data, validate_farmer_data

router = APIRouter(prefix="/farmers", tags=["Farmers"])


def _validated(payload: FarmerForm):
    result = validate_farmer_data(payload)
    if not result.is_valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors})
    return clean_farmer_data(payload)


# -------------------------
# LIST / SEARCH
# -------------------------

@router.get("", response_model=List[Farmer])
async def list_farmers(
    q: str = "",
    filter: str = Query("all", description="all | upcoming | overdue"),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    farmers = await crud_farmers.list_farmers(db)
    try:
        return filter_farmers(farmers, today(), query=q, filter_type=filter)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


# -------------------------
# VALIDATE ONLY
# -------------------------

@router.post("/validate", response_model=ValidationResultSchema)
async def validate_farmer(
    payload: FarmerForm,
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    result = validate_farmer_data(payload)
    return {"is_valid": result.is_valid, "errors": result.errors}


# -------------------------
# CRUD
# -------------------------

@router.post("", response_model=Farmer, status_code=201)
async def create_farmer(
    payload: FarmerForm,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    values = _validated(payload)
    farmer = await crud_farmers.create_farmer(db, values, user_id=user.id)
    log_user_action(user.id, "farmer_created", str(farmer.id))
    return farmer


@router.get("/{farmer_id}", response_model=Farmer)
async def get_farmer(
    farmer_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    farmer = await crud_farmers.get_farmer(db, farmer_id)
    if not farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    return farmer


@router.get("/{farmer_id}/card", response_model=FarmerCard)
async def get_farmer_card(
    farmer_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    farmer = await crud_farmers.get_farmer(db, farmer_id)
    if not farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    return farmer_card(farmer, today())


@router.put("/{farmer_id}", response_model=Farmer)
async def update_farmer(
    farmer_id: str,
    payload: FarmerForm,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    values = _validated(payload)
    farmer = await crud_farmers.update_farmer(db, farmer_id, values)
    if not farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    log_user_action(user.id, "farmer_updated", farmer_id)
    return farmer


@router.delete("/{farmer_id}")
async def delete_farmer(
    farmer_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(require_permission("manage_farmers")),
):
    if not await crud_farmers.delete_farmer(db, farmer_id):
        raise HTTPException(status_code=404, detail="Farmer not found")
    log_user_action(user.id, "farmer_deleted", farmer_id)
    return {"status": "deleted", "id": farmer_id}

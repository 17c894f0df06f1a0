# backend/farmrec/crud/farmers.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List

from farmrec.models.farmer import Farmer
from farmrec.schemas.farmer import FarmerCreate


async def list_farmers(db: AsyncSession) -> List[Farmer]:
    """Full snapshot, newest first."""
    rows = await db.scalars(select(Farmer).order_by(Farmer.created_at.desc()))
    return rows.all()


async def get_farmer(db: AsyncSession, farmer_id: str) -> Optional[Farmer]:
    return await db.get(Farmer, farmer_id)


async def create_farmer(db: AsyncSession, payload: FarmerCreate, user_id: Optional[str] = None) -> Farmer:
    farmer = Farmer(**payload.model_dump(), user_id=user_id)
    db.add(farmer)
    await db.commit()
    await db.refresh(farmer)
    return farmer


async def update_farmer(db: AsyncSession, farmer_id: str, payload: FarmerCreate) -> Optional[Farmer]:
    farmer = await db.get(Farmer, farmer_id)
    if not farmer:
        return None

    for field, value in payload.model_dump().items():
        setattr(farmer, field, value)

    await db.commit()
    await db.refresh(farmer)
    return farmer


async def delete_farmer(db: AsyncSession, farmer_id: str) -> bool:
    farmer = await db.get(Farmer, farmer_id)
    if not farmer:
        return False

    await db.delete(farmer)
    await db.commit()
    return True

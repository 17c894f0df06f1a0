# backend/farmrec/crud/users.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List

from farmrec.core.errors import DuplicateUsernameError
from farmrec.models.user import AppUser


async def list_users(db: AsyncSession) -> List[AppUser]:
    rows = await db.scalars(select(AppUser).order_by(AppUser.created_at.desc()))
    return rows.all()


async def get_user(db: AsyncSession, user_id: str) -> Optional[AppUser]:
    return await db.get(AppUser, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[AppUser]:
    return await db.scalar(select(AppUser).where(AppUser.username == username))


async def ensure_username_free(db: AsyncSession, username: str, user_id: Optional[str] = None):
    existing = await get_user_by_username(db, username)
    if existing and str(existing.id) != str(user_id):
        raise DuplicateUsernameError(username)


async def create_user(
    db: AsyncSession,
    user_id: str,
    username: str,
    role: str,
    auth_user_id: Optional[str] = None,
) -> AppUser:
    await ensure_username_free(db, username)

    user = AppUser(id=user_id, username=username, role=role, auth_user_id=auth_user_id)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user_id: str, username: str, role: str) -> Optional[AppUser]:
    user = await db.get(AppUser, user_id)
    if not user:
        return None

    await ensure_username_free(db, username, user_id)

    user.username = username
    user.role = role
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: str) -> bool:
    user = await db.get(AppUser, user_id)
    if not user:
        return False

    await db.delete(user)
    await db.commit()
    return True

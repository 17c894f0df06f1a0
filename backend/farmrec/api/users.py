# backend/farmrec/api/users.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.auth import require_permission
from farmrec.core.database import get_db
from farmrec.core.errors import AuthProviderError, DuplicateUsernameError
from farmrec.crud import users as crud_users
from farmrec.schemas.user import AccountBreakdown, CurrentUser, User, UserForm
from farmrec.services import account_service
from farmrec.services.validation_service import validate_user_data

router = APIRouter(prefix="/users", tags=["Users"])

admin_only = require_permission("manage_users")


def _check(payload: UserForm, is_editing: bool):
    result = validate_user_data(payload, is_editing=is_editing)
    if not result.is_valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors})


@router.get("", response_model=List[User])
async def list_users(db: AsyncSession = Depends(get_db), admin: CurrentUser = Depends(admin_only)):
    return await crud_users.list_users(db)


@router.get("/summary", response_model=AccountBreakdown)
async def users_summary(db: AsyncSession = Depends(get_db), admin: CurrentUser = Depends(admin_only)):
    users = await crud_users.list_users(db)
    return account_service.account_breakdown(users, admin.role)


@router.post("", response_model=User, status_code=201)
async def create_user(
    payload: UserForm,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(admin_only),
):
    _check(payload, is_editing=False)
    try:
        return await account_service.create_account(db, payload.username, payload.password, payload.role)
    except DuplicateUsernameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except AuthProviderError as exc:
        raise HTTPException(status_code=502, detail=exc.payload)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    payload: UserForm,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(admin_only),
):
    _check(payload, is_editing=True)
    try:
        user = await account_service.update_account(
            db, user_id, payload.username, payload.role, password=payload.password
        )
    except DuplicateUsernameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except AuthProviderError as exc:
        raise HTTPException(status_code=502, detail=exc.payload)

    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(admin_only),
):
    if not account_service.can_delete_account(admin.id, user_id):
        raise HTTPException(status_code=400, detail="You cannot delete your own account")

    try:
        deleted = await account_service.delete_account(db, user_id)
    except AuthProviderError as exc:
        raise HTTPException(status_code=502, detail=exc.payload)

    if not deleted:
        raise HTTPException(status_code=404, detail="User not found")
    return {"status": "deleted", "id": user_id}

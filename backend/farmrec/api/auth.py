# backend/farmrec/api/auth.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.auth import get_current_user
from farmrec.core.database import get_db
from farmrec.core.errors import AuthProviderError, DuplicateUsernameError, InvalidCredentialsError
from farmrec.core.roles import USER
from farmrec.schemas.user import CurrentUser, LoginRequest, LoginResponse, SignupForm, User
from farmrec.services import account_service
from farmrec.services.validation_service import validate_signup_data

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    try:
        return await account_service.login(db, payload.username, payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc))
    except AuthProviderError as exc:
        raise HTTPException(status_code=502, detail=exc.payload)


@router.post("/signup", response_model=User, status_code=201)
async def signup(payload: SignupForm, db: AsyncSession = Depends(get_db)):
    result = validate_signup_data(payload)
    if not result.is_valid:
        raise HTTPException(status_code=422, detail={"errors": result.errors})

    try:
        return await account_service.create_account(db, payload.username, payload.password, USER)
    except DuplicateUsernameError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except AuthProviderError as exc:
        raise HTTPException(status_code=502, detail=exc.payload)


@router.get("/me", response_model=CurrentUser)
async def me(user: CurrentUser = Depends(get_current_user)):
    return user

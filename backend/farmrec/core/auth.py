# backend/farmrec/core/auth.py

import requests
import jwt
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core.config import settings
from farmrec.core.database import get_db
from farmrec.core.errors import AuthProviderError
from farmrec.core.logger import logger
from farmrec.core.roles import has_permission
from farmrec.crud import users as crud_users
from farmrec.schemas.user import CurrentUser

security = HTTPBearer()

REQUEST_TIMEOUT = 10


# ------------------------------------------------
# IDENTITY MAPPING
# ------------------------------------------------
def identity_email(user_id: str) -> str:
    """Supabase Auth identities are keyed by the users-table id."""
    return f"{user_id}@{settings.AUTH_EMAIL_DOMAIN}"


def user_id_from_claims(payload: dict):
    email = payload.get("email") or ""
    suffix = f"@{settings.AUTH_EMAIL_DOMAIN}"
    if not email.endswith(suffix):
        return None
    return email[: -len(suffix)] or None


# ------------------------------------------------
# SUPABASE TOKEN VERIFICATION
# ------------------------------------------------
def verify_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": True, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    return payload


# ------------------------------------------------
# SUPABASE AUTH CALLS
# ------------------------------------------------
def _headers(key: str):
    return {
        "apikey": key,
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
    }


def _check(resp):
    if resp.status_code not in (200, 201, 204):
        try:
            payload = resp.json()
        except ValueError:
            payload = resp.text
        raise AuthProviderError(resp.status_code, payload)
    if resp.status_code == 204 or not resp.content:
        return {}
    return resp.json()


def supabase_login(email: str, password: str):
    resp = requests.post(
        f"{settings.SUPABASE_URL}/auth/v1/token?grant_type=password",
        json={"email": email, "password": password},
        headers=_headers(settings.SUPABASE_ANON_KEY),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(resp)


def supabase_admin_create_user(email: str, password: str):
    """Create a confirmed identity through the service-role admin API."""
    resp = requests.post(
        f"{settings.SUPABASE_URL}/auth/v1/admin/users",
        json={"email": email, "password": password, "email_confirm": True},
        headers=_headers(settings.SUPABASE_SERVICE_ROLE_KEY),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(resp)


def supabase_admin_update_password(auth_user_id: str, password: str):
    resp = requests.put(
        f"{settings.SUPABASE_URL}/auth/v1/admin/users/{auth_user_id}",
        json={"password": password},
        headers=_headers(settings.SUPABASE_SERVICE_ROLE_KEY),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(resp)


def supabase_admin_delete_user(auth_user_id: str):
    resp = requests.delete(
        f"{settings.SUPABASE_URL}/auth/v1/admin/users/{auth_user_id}",
        headers=_headers(settings.SUPABASE_SERVICE_ROLE_KEY),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(resp)


# ------------------------------------------------
# CURRENT USER / PERMISSIONS
# ------------------------------------------------
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Resolve the bearer token to the users-table row:
    - id
    - username
    - role
    """
    payload = verify_token(credentials.credentials)

    user_id = user_id_from_claims(payload)
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = await crud_users.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User profile not found")

    return CurrentUser(id=str(user.id), username=user.username, role=user.role)


def require_permission(required_permission: str):
    """
    Dependency to enforce role permissions.
    The caller's role is read from the resolved user, never from globals.
    """

    async def wrapper(user: CurrentUser = Depends(get_current_user)):
        if not has_permission(user.role, required_permission):
            logger.info(
                "Permission denied",
                extra={"user_id": user.id, "role": user.role, "detail": required_permission},
            )
            raise HTTPException(
                403,
                f"Permission denied: missing '{required_permission}'",
            )
        return user

    return wrapper

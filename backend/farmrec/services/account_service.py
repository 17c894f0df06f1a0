# backend/farmrec/services/account_service.py
"""
User accounts and sign-in.

Usernames map onto Supabase Auth identities as <users.id>@<AUTH_EMAIL_DOMAIN>.
Supabase verifies the password; the users table never holds a credential.
"""

from typing import Dict, Any, Iterable
import uuid

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from farmrec.core import auth
from farmrec.core.errors import AuthProviderError, InvalidCredentialsError
from farmrec.core.logger import logger
from farmrec.core.roles import ADMIN, USER, ensure_permission
from farmrec.crud import users as crud_users
from farmrec.models.user import AppUser


def account_breakdown(users: Iterable, caller_role: str) -> Dict[str, Any]:
    """Admin screen split of accounts by role, input order preserved."""
    ensure_permission(caller_role, "manage_users")

    users = list(users)
    return {
        "total": len(users),
        "admins": [u for u in users if _role(u) == ADMIN],
        "users": [u for u in users if _role(u) == USER],
    }


def _role(user) -> str:
    return user.get("role") if isinstance(user, dict) else getattr(user, "role", None)


def can_delete_account(caller_id: str, target_id: str) -> bool:
    return str(caller_id) != str(target_id)


def _auth_user_id(payload: Dict[str, Any]):
    # admin API returns the user object; token/signup responses nest it
    user = payload.get("user", payload) if isinstance(payload, dict) else {}
    return user.get("id")


async def login(db: AsyncSession, username: str, password: str) -> Dict[str, Any]:
    user = await crud_users.get_user_by_username(db, username.strip())
    if not user:
        logger.info("Login rejected: unknown username")
        raise InvalidCredentialsError()

    try:
        session = await run_in_threadpool(
            auth.supabase_login, auth.identity_email(str(user.id)), password
        )
    except AuthProviderError as exc:
        if exc.status_code in (400, 401):
            logger.info("Login rejected", extra={"user_id": str(user.id)})
            raise InvalidCredentialsError() from exc
        raise

    logger.info("User logged in", extra={"user_id": str(user.id), "role": user.role})
    return {
        "access_token": session.get("access_token"),
        "refresh_token": session.get("refresh_token"),
        "token_type": session.get("token_type", "bearer"),
        "expires_in": session.get("expires_in"),
        "user": user,
    }


async def create_account(db: AsyncSession, username: str, password: str, role: str) -> AppUser:
    username = username.strip()
    # fail on a taken username before an auth identity is created
    await crud_users.ensure_username_free(db, username)

    user_id = str(uuid.uuid4())
    identity = await run_in_threadpool(
        auth.supabase_admin_create_user, auth.identity_email(user_id), password
    )

    user = await crud_users.create_user(
        db,
        user_id=user_id,
        username=username,
        role=role,
        auth_user_id=_auth_user_id(identity),
    )
    logger.info("Account created", extra={"user_id": user_id, "role": role})
    return user


async def update_account(db: AsyncSession, user_id: str, username: str, role: str, password: str = None):
    user = await crud_users.get_user(db, user_id)
    if not user:
        return None

    username = username.strip()
    await crud_users.ensure_username_free(db, username, user_id)

    # the row only changes once the provider has accepted the new password
    if password:
        if not user.auth_user_id:
            raise AuthProviderError(404, {"msg": "No auth identity linked to this account"})
        await run_in_threadpool(auth.supabase_admin_update_password, str(user.auth_user_id), password)

    user = await crud_users.update_user(db, user_id, username, role)
    logger.info("Account updated", extra={"user_id": user_id, "role": role})
    return user


async def delete_account(db: AsyncSession, user_id: str) -> bool:
    user = await crud_users.get_user(db, user_id)
    if not user:
        return False

    if user.auth_user_id:
        try:
            await run_in_threadpool(auth.supabase_admin_delete_user, str(user.auth_user_id))
        except AuthProviderError as exc:
            if exc.status_code != 404:
                raise
            logger.warning("Auth identity already gone", extra={"user_id": user_id})

    deleted = await crud_users.delete_user(db, user_id)
    logger.info("Account deleted", extra={"user_id": user_id})
    return deleted

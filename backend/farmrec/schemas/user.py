# backend/farmrec/schemas/user.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class CurrentUser(BaseModel):
    id: str
    username: str
    role: str


# -----------------------
# FORMS
# -----------------------

class UserForm(BaseModel):
    username: str = ""
    password: Optional[str] = None
    role: str = "user"


class SignupForm(BaseModel):
    username: str = ""
    password: str = ""
    confirm_password: str = ""


class LoginRequest(BaseModel):
    username: str
    password: str


# -----------------------
# RESPONSES
# -----------------------

class User(BaseModel):
    id: str
    username: str
    role: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: User


class AccountBreakdown(BaseModel):
    total: int
    admins: list[User] = []
    users: list[User] = []

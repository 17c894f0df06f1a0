# backend/farmrec/models/user.py

from sqlalchemy import Column, String, Text, TIMESTAMP, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import sqlalchemy as sa

from farmrec.core.database import Base


class AppUser(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=sa.text("gen_random_uuid()"))
    username = Column(Text, unique=True, nullable=False)
    role = Column(String, nullable=False, default="user")   # admin, user

    # Supabase Auth owns the credential; only its identity id is kept here
    auth_user_id = Column(UUID(as_uuid=False), unique=True, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),
    )

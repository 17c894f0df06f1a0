# backend/farmrec/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_JWT_SECRET: str
    SECRET_KEY: str = "super-secret-key-change-in-prod"
    ALGORITHM: str = "HS256"

    # Supabase Postgres (asyncpg)
    DATABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str

    # Auth identities are keyed by user id under this domain
    AUTH_EMAIL_DOMAIN: str = "farmer-app.local"

    RECENT_ACTIVITY_LIMIT: int = 5
    LOG_DIR: str = "logs"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()

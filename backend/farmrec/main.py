# backend/farmrec/main.py

# import the logger module first so handlers attach
from farmrec.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmrec.core.config import settings
from farmrec.core.database import engine, Base
from farmrec.core.request_middleware import RequestLoggingMiddleware
from farmrec.core.error_middleware import ExceptionLoggingMiddleware

import farmrec.models  # noqa: F401  (register tables on Base.metadata)
from farmrec.api import auth, farmers, users, dashboard, reports

# ---------------------------------------------------
# Create FastAPI instance FIRST
# ---------------------------------------------------
app = FastAPI(title="FarmRec API", version="1.0")


# ---------------------------------------------------
# CORS
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------
# Logging middlewares
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)


# ---------------------------------------------------
# Include Routers
# ---------------------------------------------------
app.include_router(auth.router)
app.include_router(farmers.router)
app.include_router(users.router)
app.include_router(dashboard.router)
app.include_router(reports.router)


@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Backend started with structured JSON logging")


@app.get("/health")
async def health_check():
    return {"status": "ok"}

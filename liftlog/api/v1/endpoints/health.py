"""Health check endpoint for load balancers and monitoring."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health():
    """Simple liveness check."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + DB connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected"}
    except SQLAlchemyError as e:
        logger.error("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finance_dashboard.db.session import get_db
from finance_dashboard.models.category import Category

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness: the process is up."""
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers and reference categories are seeded."""
    try:
        categories = (await db.execute(select(func.count()).select_from(Category))).scalar_one()
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed", extra={"error_code": "DB_001"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "disconnected", "error": type(e).__name__},
        )

    if categories == 0:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "connected", "categories": 0},
        )

    return {"status": "ready", "database": "connected", "categories": categories}

"""ASGI entry point: `uvicorn finance_dashboard.main:app`."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from finance_dashboard import __version__
from finance_dashboard.api.middleware.error_handler import (
    handle_domain_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from finance_dashboard.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from finance_dashboard.api.v1 import router as v1_router
from finance_dashboard.api.v1.health import router as health_router
from finance_dashboard.config import settings
from finance_dashboard.core.exceptions import FinanceDashboardError
from finance_dashboard.db.session import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    logger.info(f"Starting Finance Dashboard API ({settings.app_env})")
    yield
    await dispose_engine()
    logger.info("Finance Dashboard API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Finance Dashboard API",
        description="Personal finance tracking with rule-based categorization",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Most specific first; Exception is the catch-all.
    app.add_exception_handler(FinanceDashboardError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()

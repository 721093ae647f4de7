"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from moolaegis.core.database import init_db
from moolaegis.core.logging_config import get_logger, setup_logging
from moolaegis.core.monitoring import initialize_logfire

from .api.v1 import auth, chat, feedback, forecast, health, i18n, ocr, reports
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Configures logging and creates any missing tables on startup.
    """
    setup_logging()
    try:
        logger.info(f"Starting up {constant.PROJECT_NAME} Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME} Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Moolaegis Server API

    Backend for the Moolaegis financial forecasting tool. It projects
    three-statement forecasts, renders and stores PDF reports, manages user
    accounts and feedback, and hosts the financial assistant chat and receipt OCR.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(forecast.router, prefix=f"{constant.API_V1_STR}/forecast", tags=["forecast"])
app.include_router(reports.router, prefix=f"{constant.API_V1_STR}/reports", tags=["reports"])
app.include_router(feedback.router, prefix=f"{constant.API_V1_STR}/feedback", tags=["feedback"])
app.include_router(chat.router, prefix=f"{constant.API_V1_STR}/chat", tags=["chat"])
app.include_router(ocr.router, prefix=f"{constant.API_V1_STR}/ocr", tags=["ocr"])
app.include_router(i18n.router, prefix=f"{constant.API_V1_STR}/i18n", tags=["i18n"])

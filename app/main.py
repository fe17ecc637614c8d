"""
Main FastAPI application entry point.
"""
import logging
import os
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app.core.errors import register_exception_handlers
from app.core.logging_config import setup_logging
from app.middleware.request_logging import RequestLoggingMiddleware
from app.services.sample_data_seeder import ensure_sample_data_seeded
from app.storage import DatabaseStorage, configure_storage

# Import all models so they register with Base.metadata before create_all()
from app.models import (  # noqa: F401
    BandwidthMetric,
    Device,
    IdsRule,
    PasswordEntry,
    PasswordVault,
    SecurityEvent,
    SystemMetric,
)

setup_logging()
logger = logging.getLogger(__name__)


def _run_migrations() -> None:
    """Apply Alembic migrations when an explicit DATABASE_URL is configured."""
    if not os.getenv("DATABASE_URL"):
        logger.info("[MIGRATION] DATABASE_URL not set, skipping migrations (local dev mode)")
        return
    try:
        from alembic import command
        from alembic.config import Config

        logger.info("[MIGRATION] DATABASE_URL detected, running Alembic migrations...")
        command.upgrade(Config("alembic.ini"), "head")
        logger.info("[MIGRATION] Alembic migrations completed (or already up-to-date)")
    except Exception as e:
        # The tables may already exist or the database may still be starting;
        # create_all below and the health endpoint report what is left.
        trace_id = str(uuid.uuid4())
        logger.warning(f"[MIGRATION] [{trace_id}] Alembic migration failed: {e}")
        logger.debug(f"[MIGRATION] [{trace_id}] Migration error details:", exc_info=True)


def _prepare_database() -> None:
    _run_migrations()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified successfully")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)


def _seed(app: FastAPI) -> None:
    memory = app.state.memory_storage
    if memory is not None:
        ensure_sample_data_seeded(memory)
        return
    db = SessionLocal()
    try:
        ensure_sample_data_seeded(DatabaseStorage(db))
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting up {settings.APP_NAME} API (storage={settings.STORAGE_BACKEND})...")

    if not settings.uses_memory_storage:
        _prepare_database()

    if settings.SEED_SAMPLE_DATA:
        _seed(app)

    yield
    logger.info(f"Shutting down {settings.APP_NAME} API...")


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Network monitoring dashboard: devices, traffic and system metrics, security events, IDS rules and password vaults",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

configure_storage(app, settings)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
def health_check():
    """Liveness probe; does not touch the store."""
    return {"status": "ok"}

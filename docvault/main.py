import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docvault.core.config import settings
from docvault.core.db import init_db, close_db
from docvault.core.errors import register_error_handlers
from docvault.core.logging_config import setup_logging
from docvault.api.http import health_router, users_router, documents_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_level=settings.log_level, log_dir=settings.log_dir)
    logger.info("Starting %s", settings.app_name)

    # Local runs create the schema directly; deployments use Alembic
    if settings.create_tables:
        await init_db()
        logger.info("Database tables ensured")

    yield

    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title="DocVault",
    description="Document vault: user accounts plus uploaded files stored in the database",
    version="1.0.0",
    lifespan=lifespan
)

# Every origin is accepted on every route
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(documents_router)


@app.get("/")
async def root():
    return {
        "message": "DocVault API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

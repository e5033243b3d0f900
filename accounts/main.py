"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accounts.api import users
from accounts.api.errors import register_exception_handlers
from accounts.api.middleware import upload_size_middleware
from accounts.config import get_settings
from accounts.database import init_db
from accounts.logging_config import configure_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    init_db()
    Path(settings.avatar_dir).mkdir(parents=True, exist_ok=True)
    logger.info(f"Account service started ({settings.environment})")
    yield


app = FastAPI(
    title="Account API",
    description="User registration, sessions and profile management",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

# Avatar size cap, checked before multipart parsing
app.middleware("http")(upload_size_middleware)

# Register routers
app.include_router(users.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}

"""FastAPI application: main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import AppError, global_exception_handler

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User  # noqa: F401
from app.domain.models.profile import Admin, EventManager, Student  # noqa: F401
from app.domain.models.event import Event  # noqa: F401

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.events import router as events_router
from app.interfaces.api.users import router as users_router
from app.interfaces.api.public import router as public_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting College Event Manager...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only, use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    if settings.SEED_DEFAULT_USERS:
        from app.application.services.bootstrap_service import seed_default_users

        db = SessionLocal()
        try:
            created = seed_default_users(db)
            logger.info("Default users verified", created=created)
        finally:
            db.close()

    yield

    logger.info("College Event Manager stopped")


app = FastAPI(
    title="College Event Manager",
    description="API Backend: college events, registrations and role-based access",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (CORS, Correlation ID, Logging)
setup_middleware(app)

# Global Exception Handling
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Include routers
app.include_router(auth_router)
app.include_router(events_router)
app.include_router(users_router)
app.include_router(public_router)


@app.get("/")
def root():
    return {
        "name": "College Event Manager",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}

"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hr_portal.config import get_settings
from hr_portal.infrastructure.database import engine, Base, SessionLocal
from hr_portal.core.logging import configure_logging
from hr_portal.core.middleware import setup_middleware
from hr_portal.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from hr_portal.domain.models.user import User
from hr_portal.domain.models.client import Client
from hr_portal.domain.models.team import Team
from hr_portal.domain.models.employee import Employee
from hr_portal.domain.models.note import Note

# Import routers
from hr_portal.interfaces.api.auth import router as auth_router
from hr_portal.interfaces.api.users import router as users_router
from hr_portal.interfaces.api.clients import router as clients_router
from hr_portal.interfaces.api.teams import router as teams_router
from hr_portal.interfaces.api.employees import router as employees_router

from hr_portal.application.services.auth_service import ensure_primary_admin
from hr_portal.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting HR portal API...", env=settings.ENVIRONMENT)

    # Create DB tables (use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        if ensure_primary_admin(SQLAlchemyUserRepository(db, User)) is None:
            logger.warning(
                "Primary admin account does not exist and PRIMARY_ADMIN_PASSWORD is not set",
                email=settings.PRIMARY_ADMIN_EMAIL,
            )
    finally:
        db.close()

    yield

    logger.info("HR portal API stopped")


app = FastAPI(
    title="HR Portal API",
    description="Backend for managing clients, teams, employees and notes",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (CORS, Correlation ID, Logging)
setup_middleware(app)

# Global Exception Handling
register_exception_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(clients_router)
app.include_router(teams_router)
app.include_router(employees_router)


@app.get("/")
def root():
    return {
        "name": "HR Portal API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dentalbook.cache.cache_service import redis_cache
from dentalbook.core.logger import setup_logging
from dentalbook.middleware.cors import configure_cors
from dentalbook.middleware.logging import RequestLoggerMiddleware
from dentalbook.middleware.auth import JWTMiddleware
from dentalbook.middleware import error_handler

# Routers
from dentalbook.routers import appointments as appointments_router
from dentalbook.routers import clinic as clinic_router
from dentalbook.routers import users as users_router
from dentalbook.routers import admin as admin_router
from dentalbook.routers import health as health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await redis_cache.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    setup_logging()
    description = (
        "Dentalbook Backend API.\n\n"
        "Appointment booking, clinic hours and admin console endpoints for the dental clinic site."
    )

    openapi_tags = [
        {"name": "appointments", "description": "Book, cancel, list and search appointments."},
        {"name": "clinic", "description": "Clinic open/closed state and weekly opening hours."},
        {"name": "users", "description": "Caller profile and role."},
        {"name": "admin", "description": "Role assignment for the admin console."},
        {"name": "health", "description": "Health checks and service status endpoints."},
    ]

    app = FastAPI(
        title="Dentalbook Backend API",
        version="0.1.0",
        description=description,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    # Middleware
    configure_cors(app)
    app.add_middleware(RequestLoggerMiddleware)
    app.add_middleware(JWTMiddleware)

    # Exception handlers
    app.add_exception_handler(StarletteHTTPException, error_handler.http_exception_handler)
    app.add_exception_handler(RequestValidationError, error_handler.validation_exception_handler)
    app.add_exception_handler(OperationalError, error_handler.database_unavailable_handler)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(appointments_router.router)
    app.include_router(clinic_router.router)
    app.include_router(users_router.router)
    app.include_router(admin_router.router)

    return app


app = create_app()

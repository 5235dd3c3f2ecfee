"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from staff_attendance.api.v1.router import api_router
from staff_attendance.core.config import settings
from staff_attendance.core.exceptions import setup_exception_handlers
from staff_attendance.core.logging import get_logger, setup_logging
from staff_attendance.core.rate_limit import limiter
from staff_attendance.db.init_db import create_tables, seed_initial_data
from staff_attendance.db.session import init_db, close_db
from staff_attendance.deps.di_container import Container

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, the database and the DI container.
    """
    # Startup
    setup_logging()

    await init_db()
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
    await seed_initial_data()

    container = Container()
    container.config.from_dict({
        "database_url": settings.DATABASE_URL,
        "version": settings.VERSION,
    })
    app.state.container = container

    import staff_attendance.deps.di_container as di_module
    di_module._container = container

    logger.info("Application started", extra={"version": settings.VERSION})

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Staff attendance tracking API",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie session
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
    )

    # Rate limiting; the 429 handler is registered with the other exception handlers
    app.state.limiter = limiter

    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Root-level health endpoint for load balancers
    from staff_attendance.api.v1.endpoints.health import get_health

    @app.get("/health", response_model=None, include_in_schema=False)
    async def root_health(request: Request):
        """Root-level health check endpoint."""
        return await get_health(request)

    setup_exception_handlers(app)

    return app


app = create_app()

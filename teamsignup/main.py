"""Team Signup API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TeamSignupError -> {"error", "code"} JSON
    - CORS configured from settings (not hardcoded); credentials allowed so
      the session cookie travels with browser requests
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from teamsignup.api.error_handlers import register_error_handlers
from teamsignup.api.routes import admin, health, identity, members, projects
from teamsignup.config import get_settings
from teamsignup.infrastructure.database import init_db
from teamsignup.infrastructure.observability import setup_logging
from teamsignup.services.membership_store import SqlMembershipStore
from teamsignup.services.project_admin import seed_default_projects

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if manager.is_sqlite:
        await manager.create_schema()
    if settings.seed_default_projects:
        async with manager.session() as db:
            await seed_default_projects(SqlMembershipStore(db))
    if not settings.admin_password:
        logger.warning("ADMIN_PASSWORD is not set; admin login is disabled")
    logger.info("Team Signup API started")
    yield
    logger.info("Team Signup API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Team Signup API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(admin.router)
app.include_router(identity.router)
app.include_router(projects.router)
app.include_router(members.router)

register_error_handlers(app)

# Static files - serves the frontend build; mounted AFTER API routes so
# /api/* takes precedence
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")

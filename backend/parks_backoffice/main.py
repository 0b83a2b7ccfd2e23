"""Parks Back Office API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ParksError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Router order matters: /api/trees/areas and /api/trees/link are registered
      before /api/trees/{tree_id}
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from parks_backoffice.api.error_handlers import register_error_handlers
from parks_backoffice.api.routes import (
    asset_categories, assets, events, health, instructors, parks, roles,
    sponsorships, tree_areas, tree_links, tree_species, trees, warehouse,
)
from parks_backoffice.config import get_settings
from parks_backoffice.infrastructure import database
from parks_backoffice.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Parks Back Office API started")
    yield
    logger.info("Parks Back Office API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Parks Back Office API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(parks.router)
app.include_router(tree_areas.router)
app.include_router(tree_links.router)
app.include_router(tree_species.router)
app.include_router(trees.router)
app.include_router(asset_categories.router)
app.include_router(assets.router)
app.include_router(events.router)
app.include_router(instructors.router)
app.include_router(sponsorships.router)
app.include_router(warehouse.router)
app.include_router(roles.router)

register_error_handlers(app)

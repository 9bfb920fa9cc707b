# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the leaderboard server.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.exceptions import (
    LeaderboardException,
    leaderboard_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.middleware import SecurityHeadersMiddleware, build_security_headers
from app.rate_limit import RateLimitMiddleware, build_rate_limiters
from app.routers import config, health, scores
from app.static import SPAStaticFiles

logger = logging.getLogger(__name__)


def _flag(present: bool) -> str:
    return "set" if present else "MISSING"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs where the server is listening and which store settings are
    present. Values themselves are never logged.
    """
    settings: Settings = app.state.settings

    logger.info(f"Leaderboard server -> http://localhost:{settings.PORT} ({settings.ENVIRONMENT})")
    logger.info(f"  SUPABASE_URL   : {_flag(settings.has_supabase_url)}")
    logger.info(f"  ANON KEY       : {_flag(settings.has_anon_key)}")
    logger.info(f"  SERVICE KEY    : {_flag(settings.has_service_key)}")
    logger.info(f"  ALLOWED_ORIGIN : {settings.ALLOWED_ORIGIN}")
    logger.info(f"  STORE BACKEND  : {settings.LEADERBOARD_BACKEND}")

    yield

    logger.info("Shutting down leaderboard server")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration to use; defaults to the environment

    Returns:
        A fully wired FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Leaderboard API",
        description="Public leaderboard for the browser game: top scores, "
                    "score submission, stats and the browser's store config.",
        version="1.0.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Leaderboard", "description": "Read and submit scores"},
            {"name": "Config", "description": "Browser-safe store configuration"},
            {"name": "Health", "description": "Configuration presence check"},
        ],
    )

    app.state.settings = settings
    app.state.store = None
    app.state.rate_limiters = build_rate_limiters(settings)
    app.state.security_headers = build_security_headers(settings.SUPABASE_URL)

    # =========================================================================
    # Middleware (last added runs first)
    # =========================================================================

    # Rate limits run before routing, so unparseable bodies still count
    app.add_middleware(RateLimitMiddleware, limiters=app.state.rate_limiters)

    # CORS middleware - allows cross-origin requests from the game's origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.add_middleware(SecurityHeadersMiddleware, headers=app.state.security_headers)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(LeaderboardException, leaderboard_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    api = APIRouter(prefix="/api")
    api.include_router(config.router, tags=["Config"])
    api.include_router(scores.router, tags=["Leaderboard"])
    app.include_router(api)

    app.include_router(health.router, tags=["Health"])

    # Static files + SPA fallback last, so it only sees unmatched paths
    app.mount(
        "/",
        SPAStaticFiles(directory=settings.STATIC_DIR, check_dir=False),
        name="static",
    )

    return app


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


configure_logging(get_settings())

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

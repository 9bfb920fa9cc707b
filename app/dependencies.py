# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Settings and the store hang off app.state (set up by create_app), so each
# application instance - including the ones built in tests - carries its
# own configuration. Tests swap the store with app.dependency_overrides.
# =============================================================================

import logging
import threading
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from app.exceptions import ServiceUnavailableError
from core.services.leaderboard_service import LeaderboardService
from lib.memory_store import InMemoryLeaderboardStore
from lib.store import LeaderboardStore, StoreError
from lib.supabase_client import SupabaseLeaderboardStore

logger = logging.getLogger(__name__)

_store_lock = threading.Lock()


def get_app_settings(request: Request) -> Settings:
    """Get the settings this application was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


def build_store(settings: Settings) -> LeaderboardStore:
    """
    Create the configured leaderboard store.

    Raises:
        ServiceUnavailableError: If the Supabase credentials are missing
            or the client cannot be created
    """
    if settings.LEADERBOARD_BACKEND == "memory":
        logger.info("Using in-memory leaderboard store")
        return InMemoryLeaderboardStore()

    if settings.service_credentials() is None:
        raise ServiceUnavailableError()

    try:
        return SupabaseLeaderboardStore.from_settings(settings)
    except StoreError as e:
        logger.error(f"Leaderboard store unavailable: {e}")
        raise ServiceUnavailableError() from e


def get_store(request: Request) -> LeaderboardStore:
    """
    Get the application's leaderboard store, creating it on first use.

    Created lazily so a server missing its service key still boots and
    serves /health, /api/config and static files.
    """
    state = request.app.state
    store = getattr(state, "store", None)
    if store is None:
        with _store_lock:
            store = getattr(state, "store", None)
            if store is None:
                store = build_store(state.settings)
                state.store = store
    return store


def get_leaderboard_service(
    store: Annotated[LeaderboardStore, Depends(get_store)],
) -> LeaderboardService:
    """Get a leaderboard service bound to the application's store."""
    return LeaderboardService(store)


# Type alias for dependency injection
LeaderboardServiceDep = Annotated[LeaderboardService, Depends(get_leaderboard_service)]

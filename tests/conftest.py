# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds a fresh app per test, wired to an in-memory store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a module-level app from the environment on import

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("LEADERBOARD_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_store
from app.main import create_app
from lib.memory_store import InMemoryLeaderboardStore

INDEX_HTML = "<!doctype html><html><body><div id=\"game\"></div></body></html>"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def static_dir(tmp_path):
    """A minimal game build: index, PWA manifest and one script."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(INDEX_HTML)
    (public / "manifest.json").write_text('{"name": "Sports Drop"}')
    (public / "game.js").write_text("console.log('drop');")
    return public


@pytest.fixture
def make_settings(static_dir):
    """Build Settings from explicit values only (no .env file)."""
    def factory(**overrides) -> Settings:
        values = {
            "SUPABASE_URL": "https://test-project.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "LEADERBOARD_BACKEND": "memory",
            "STATIC_DIR": str(static_dir),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return factory


@pytest.fixture
def store():
    """Empty in-memory leaderboard."""
    return InMemoryLeaderboardStore()


@pytest.fixture
def make_client(make_settings, store):
    """Build a TestClient around a fresh app; the store is shared with the test."""
    def factory(override_store: bool = True, **overrides) -> TestClient:
        app = create_app(make_settings(**overrides))
        if override_store:
            app.dependency_overrides[get_store] = lambda: store
        return TestClient(app)
    return factory


@pytest.fixture
def client(make_client):
    """TestClient with default settings and the shared in-memory store."""
    return make_client()


@pytest.fixture
def sample_scores():
    """Name/score pairs with distinct names, so retention never kicks in."""
    return [(f"Player{i:02d}", i * 100) for i in range(1, 26)]

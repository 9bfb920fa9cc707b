# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the HTTP side of the leaderboard server:
# - main.py: create_app(), middleware, exception handlers, entry point
# - config.py: Environment variable loading and settings
# - dependencies.py: Settings/store/service injection
# - rate_limit.py: Per-client fixed-window request ceilings
# - middleware.py: Security headers
# - static.py: Game assets and SPA fallback
# - routers/: API endpoint definitions
#
# Handlers stay thin and delegate to core/services.
# =============================================================================

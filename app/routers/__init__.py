# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - config.py: Browser-safe store configuration
# - scores.py: Leaderboard read/write and stats endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import config
from . import scores

__all__ = [
    "health",
    "config",
    "scores",
]

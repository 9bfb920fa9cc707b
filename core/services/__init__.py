# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .leaderboard_service import LeaderboardService

__all__ = [
    "LeaderboardService",
]

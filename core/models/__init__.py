# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - score.py: Score submission, leaderboard rows and stats
#
# These models define the "contract" between API and clients.
# =============================================================================

from .score import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    SCORE_MAX,
    SCORE_MIN,
    HighScore,
    LeaderboardStats,
    ScoreEntry,
    ScoreSubmission,
    sanitize_name,
)

__all__ = [
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "SCORE_MAX",
    "SCORE_MIN",
    "HighScore",
    "LeaderboardStats",
    "ScoreEntry",
    "ScoreSubmission",
    "sanitize_name",
]

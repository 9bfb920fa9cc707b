# =============================================================================
# core/models/score.py - Leaderboard Schemas
# =============================================================================
# These models define the API contract for leaderboard operations:
# - ScoreSubmission: Input for POST /api/scores (validated, then sanitized)
# - ScoreEntry: One persisted leaderboard row
# - HighScore / LeaderboardStats: Aggregate view for GET /api/stats
#
# Names are validated on the trimmed string and only then stripped of
# angle brackets, so "<b>Bob</b>" passes the length check as 10 characters
# and is stored as "bBob/b".
# =============================================================================

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 20
SCORE_MIN = 0
SCORE_MAX = 999_999

_ANGLE_BRACKETS = re.compile(r"[<>]")


def sanitize_name(name: str) -> str:
    """Strip '<' and '>' from a player name."""
    return _ANGLE_BRACKETS.sub("", name)


class ScoreSubmission(BaseModel):
    """
    Schema for submitting a score.

    Field order matters: pydantic reports errors in declaration order,
    and the API reports only the first one, so a bad name is always
    reported before a bad score.

    Example:
        {
            "name": "Alice",
            "score": 4200
        }
    """

    name: str = Field(
        ...,
        description="Player name, 1-20 characters after trimming"
    )

    score: int = Field(
        ...,
        description="Final score, an integer from 0 to 999999"
    )

    model_config = {
        "json_schema_extra": {
            "example": {"name": "Alice", "score": 4200}
        }
    }

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("name must be a string")
        trimmed = value.strip()
        if not NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH:
            raise ValueError(
                f"name must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters"
            )
        return trimmed

    @field_validator("score", mode="before")
    @classmethod
    def validate_score(cls, value: Any) -> int:
        # bool is an int subclass; JSON true is not a score
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be an integer")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("score must be an integer")
            value = int(value)
        if not SCORE_MIN <= value <= SCORE_MAX:
            raise ValueError(f"score must be between {SCORE_MIN} and {SCORE_MAX}")
        return value

    @property
    def clean_name(self) -> str:
        """The trimmed name with angle brackets stripped, as persisted."""
        return sanitize_name(self.name)


class ScoreEntry(BaseModel):
    """
    Schema for one leaderboard row.

    Example:
        {
            "id": 42,
            "name": "Alice",
            "score": 4200,
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: int = Field(..., description="Server-assigned, increasing row id")
    name: str = Field(..., description="Sanitized player name")
    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    created_at: datetime = Field(..., description="Insertion time (server clock)")


class HighScore(BaseModel):
    """The single best entry on the board."""
    name: str
    score: int


class LeaderboardStats(BaseModel):
    """
    Aggregate leaderboard view.

    Serialized with camelCase keys for the game client:
        {"totalGames": 0, "allTimeHigh": null}
    """

    model_config = ConfigDict(populate_by_name=True)

    total_games: int = Field(default=0, ge=0, alias="totalGames")
    all_time_high: HighScore | None = Field(default=None, alias="allTimeHigh")

# =============================================================================
# lib/store.py - Leaderboard Store Interface
# =============================================================================
# The seam between the service layer and whatever holds the leaderboard
# rows. Two implementations live next to this module:
# - supabase_client.py: the hosted Postgres table (retention via trigger)
# - memory_store.py: in-process rows (retention as a post-insert step)
#
# Rows travel as plain dicts with keys id, name, score, created_at.
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol

# Fixed page size for the public leaderboard
TOP_SCORES_LIMIT = 20


class StoreError(Exception):
    """
    Error during a leaderboard store operation.

    Carries full diagnostic detail for server-side logs. Never serialize
    this into an HTTP response.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.details:
            result += f" {self.details}"
        return result


class LeaderboardStore(Protocol):
    """Operations the gateway needs from a leaderboard store."""

    def top_scores(self, limit: int = TOP_SCORES_LIMIT) -> list[dict[str, Any]]:
        """Rows ordered by score desc, created_at asc, id asc."""
        ...

    def insert_score(self, name: str, score: int) -> dict[str, Any]:
        """Insert a row, apply best-score retention, return the new row."""
        ...

    def count_scores(self) -> int:
        ...

    def best_score(self) -> dict[str, Any] | None:
        """The top row as {name, score}, or None when the board is empty."""
        ...

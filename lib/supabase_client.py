# =============================================================================
# lib/supabase_client.py - Supabase Leaderboard Store
# =============================================================================
# This module provides a typed wrapper for the leaderboard table in Supabase.
# It runs with the service_role key, so it bypasses Row Level Security; the
# best-score retention rule is enforced by the table's AFTER INSERT trigger
# (see supabase/schema.sql), not here.
#
# Usage:
#   from lib.supabase_client import SupabaseLeaderboardStore
#   store = SupabaseLeaderboardStore.from_settings(settings)
#   rows = store.top_scores()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client
from supabase.client import ClientOptions

from app.config import Settings
from lib.store import TOP_SCORES_LIMIT, StoreError

# Set up logging for this module
logger = logging.getLogger(__name__)

ENTRY_COLUMNS = "id, name, score, created_at"


class SupabaseLeaderboardStore:
    """
    Leaderboard operations against a Supabase (PostgREST) table.

    Each instance owns one client. Build it once per application with
    from_settings() and share it across requests; the underlying client
    is safe to reuse.

    Example:
        store = SupabaseLeaderboardStore.from_settings(settings)
        entry = store.insert_score("Alice", 4200)
        print(entry["id"], entry["created_at"])
    """

    def __init__(self, client: Client, table: str = "leaderboard"):
        self._client = client
        self._table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseLeaderboardStore:
        """
        Create a store using the elevated (service_role) credentials.

        Raises:
            StoreError: If credentials are missing or client creation fails
        """
        credentials = settings.service_credentials()
        if credentials is None:
            raise StoreError(
                message="SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must both be set",
                code="CLIENT_NOT_CONFIGURED",
            )

        try:
            client = create_client(
                credentials.url,
                credentials.service_key.get_secret_value(),
                options=ClientOptions(
                    postgrest_client_timeout=settings.STORE_TIMEOUT_SECONDS,
                ),
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                details={"url": credentials.url},
            ) from e

        logger.info("Supabase client initialized successfully")
        return cls(client, table=settings.LEADERBOARD_TABLE)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def top_scores(self, limit: int = TOP_SCORES_LIMIT) -> list[dict[str, Any]]:
        """
        Fetch the best rows on the board.

        Ordered by score (highest first); equal scores are ranked by who got
        there first (created_at, then id).

        Raises:
            StoreError: If the query fails
        """
        try:
            response = (
                self._client.table(self._table)
                .select(ENTRY_COLUMNS)
                .order("score", desc=True)
                .order("created_at")
                .order("id")
                .limit(limit)
                .execute()
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to fetch top scores: {e}",
                code="FETCH_SCORES_FAILED",
                details={"table": self._table, "limit": limit},
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} leaderboard rows")
        return rows

    def count_scores(self) -> int:
        """
        Count all rows without transferring them.

        Raises:
            StoreError: If the query fails
        """
        try:
            response = (
                self._client.table(self._table)
                .select("id", count="exact", head=True)
                .execute()
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to count scores: {e}",
                code="COUNT_SCORES_FAILED",
                details={"table": self._table},
            ) from e

        return response.count or 0

    def best_score(self) -> dict[str, Any] | None:
        """
        Fetch the single highest row as {name, score}.

        Returns None for an empty board instead of using .single(),
        which would turn "no rows" into an error.

        Raises:
            StoreError: If the query fails
        """
        try:
            response = (
                self._client.table(self._table)
                .select("name, score")
                .order("score", desc=True)
                .order("created_at")
                .order("id")
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to fetch best score: {e}",
                code="FETCH_BEST_FAILED",
                details={"table": self._table},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert_score(self, name: str, score: int) -> dict[str, Any]:
        """
        Insert a new leaderboard row.

        The keep_best_score trigger deletes older lower scores for the same
        name inside the same transaction.

        Returns:
            Inserted row with generated id and created_at

        Raises:
            StoreError: If the insert fails or returns nothing
        """
        try:
            response = (
                self._client.table(self._table)
                .insert({"name": name, "score": score})
                .execute()
            )
        except Exception as e:
            raise StoreError(
                message=f"Failed to insert score: {e}",
                code="INSERT_SCORE_FAILED",
                details={"table": self._table, "name": name, "score": score},
            ) from e

        if not response.data:
            raise StoreError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": self._table, "name": name, "score": score},
            )

        row = response.data[0]
        logger.info(f"Inserted score {row.get('score')} for {row.get('name')!r} (id={row.get('id')})")
        return row

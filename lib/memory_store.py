# =============================================================================
# lib/memory_store.py - In-Process Leaderboard Store
# =============================================================================
# A leaderboard held in a Python list, for local development without a
# Supabase project and for tests.
#
# There is no database trigger here, so the best-score retention rule runs
# as an explicit post-insert step while the same lock is held: no reader
# or writer ever sees the new row without the cleanup having happened.
# =============================================================================

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any

from core.models.score import NAME_MAX_LENGTH, NAME_MIN_LENGTH, SCORE_MAX, SCORE_MIN
from lib.store import TOP_SCORES_LIMIT, StoreError

logger = logging.getLogger(__name__)


def _rank_key(row: dict[str, Any]) -> tuple:
    return (-row["score"], row["created_at"], row["id"])


class InMemoryLeaderboardStore:
    """
    Thread-safe, process-local leaderboard.

    Mirrors the hosted table's behaviour: ids increase monotonically,
    created_at comes from the server clock, the table's CHECK constraints
    reject out-of-range rows, and a new row deletes every older row for the
    same name with a strictly lower score.

    Example:
        store = InMemoryLeaderboardStore()
        store.insert_score("Alice", 50)
        store.insert_score("Alice", 80)
        assert store.count_scores() == 1
    """

    def __init__(self):
        self._rows: list[dict[str, Any]] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def top_scores(self, limit: int = TOP_SCORES_LIMIT) -> list[dict[str, Any]]:
        with self._lock:
            ranked = sorted(self._rows, key=_rank_key)
            return [dict(row) for row in ranked[:limit]]

    def count_scores(self) -> int:
        with self._lock:
            return len(self._rows)

    def best_score(self) -> dict[str, Any] | None:
        with self._lock:
            if not self._rows:
                return None
            best = min(self._rows, key=_rank_key)
            return {"name": best["name"], "score": best["score"]}

    def insert_score(self, name: str, score: int) -> dict[str, Any]:
        with self._lock:
            self._check_constraints(name, score)
            row = {
                "id": self._next_id,
                "name": name,
                "score": score,
                "created_at": datetime.now(timezone.utc),
            }
            self._next_id += 1
            self._rows.append(row)
            removed = self._keep_best_score(row)

        if removed:
            logger.debug(f"Dropped {removed} lower score(s) for {name!r}")
        return dict(row)

    def _check_constraints(self, name: str, score: int) -> None:
        """Reject rows the hosted table's CHECK constraints would reject."""
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise StoreError(
                message=f"name length {len(name)} violates check constraint",
                code="CHECK_VIOLATION",
                details={"name": name},
            )
        if not SCORE_MIN <= score <= SCORE_MAX:
            raise StoreError(
                message=f"score {score} violates check constraint",
                code="CHECK_VIOLATION",
                details={"score": score},
            )

    def _keep_best_score(self, new_row: dict[str, Any]) -> int:
        """Delete rows for the same name scoring strictly below new_row. Caller holds the lock."""
        before = len(self._rows)
        self._rows = [
            row for row in self._rows
            if not (
                row["name"] == new_row["name"]
                and row["score"] < new_row["score"]
                and row["id"] != new_row["id"]
            )
        ]
        return before - len(self._rows)

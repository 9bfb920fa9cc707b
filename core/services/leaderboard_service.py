# =============================================================================
# core/services/leaderboard_service.py - Leaderboard Business Logic
# =============================================================================
# Handles leaderboard reads and writes.
# Separates HTTP concerns from database/business logic: store failures are
# logged here with full detail and re-raised as generic API errors.
# =============================================================================

import logging

from app.exceptions import InternalError, UnavailableError
from core.models.score import HighScore, LeaderboardStats, ScoreEntry, ScoreSubmission
from lib.store import TOP_SCORES_LIMIT, LeaderboardStore, StoreError

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Service for leaderboard operations.

    Provides a clean interface between API routes and the store. The store
    is injected, so tests can hand in an in-memory one or a mock.
    """

    def __init__(self, store: LeaderboardStore):
        self.store = store

    def list_top_scores(self) -> list[ScoreEntry]:
        """
        Get the top of the leaderboard.

        Returns:
            Up to 20 entries, highest score first

        Raises:
            UnavailableError: If the store cannot be read
        """
        try:
            rows = self.store.top_scores(limit=TOP_SCORES_LIMIT)
        except StoreError as e:
            logger.error(f"GET /api/scores: {e}")
            raise UnavailableError("Could not fetch scores", code="SCORES_UNAVAILABLE") from e

        return [ScoreEntry.model_validate(row) for row in rows]

    def submit_score(self, submission: ScoreSubmission) -> ScoreEntry:
        """
        Persist a validated submission.

        The name is sanitized here, after validation has already checked
        its trimmed length.

        Args:
            submission: Validated name/score pair

        Returns:
            The persisted entry with server-assigned id and created_at

        Raises:
            InternalError: If the store rejects or fails the insert
        """
        try:
            row = self.store.insert_score(submission.clean_name, submission.score)
        except StoreError as e:
            logger.error(f"POST /api/scores: {e}")
            raise InternalError("Could not save score", code="SCORE_SAVE_FAILED") from e

        return ScoreEntry.model_validate(row)

    def get_stats(self) -> LeaderboardStats:
        """
        Get total games played and the all-time high.

        Raises:
            UnavailableError: If either query fails (no partial stats)
        """
        try:
            total = self.store.count_scores()
            best = self.store.best_score()
        except StoreError as e:
            logger.error(f"GET /api/stats: {e}")
            raise UnavailableError("Stats unavailable", code="STATS_UNAVAILABLE") from e

        return LeaderboardStats(
            total_games=total,
            all_time_high=HighScore.model_validate(best) if best else None,
        )

# =============================================================================
# tests/test_memory_store.py - In-Memory Store Tests
# =============================================================================
# The in-memory store must behave like the Supabase table plus its
# keep_best_score trigger: increasing ids, server timestamps, ranked reads
# and strictly-lower-score cleanup per name.
# =============================================================================

from concurrent.futures import ThreadPoolExecutor

import pytest

from lib.memory_store import InMemoryLeaderboardStore
from lib.store import StoreError


def _rows_for(store, name):
    return [(row["name"], row["score"]) for row in store.top_scores(limit=1000) if row["name"] == name]


class TestInsert:
    """Tests for insert_score."""

    def test_assigns_increasing_ids_and_timestamp(self, store):
        first = store.insert_score("Alice", 10)
        second = store.insert_score("Bob", 20)

        assert second["id"] > first["id"]
        assert first["created_at"] is not None
        assert first["created_at"].tzinfo is not None

    def test_returns_copy(self, store):
        row = store.insert_score("Alice", 10)
        row["score"] = 999

        assert store.top_scores()[0]["score"] == 10

    @pytest.mark.parametrize("name, score", [("", 1), ("x" * 21, 1), ("Alice", -1), ("Alice", 1_000_000)])
    def test_check_constraints_reject_row(self, store, name, score):
        with pytest.raises(StoreError) as exc_info:
            store.insert_score(name, score)

        assert exc_info.value.code == "CHECK_VIOLATION"
        assert store.count_scores() == 0


class TestRetention:
    """Tests for best-score retention."""

    def test_higher_score_removes_lower(self, store):
        store.insert_score("Alice", 50)
        store.insert_score("Alice", 80)

        assert _rows_for(store, "Alice") == [("Alice", 80)]

    def test_lower_score_keeps_both(self, store):
        store.insert_score("Alice", 80)
        store.insert_score("Alice", 50)

        assert _rows_for(store, "Alice") == [("Alice", 80), ("Alice", 50)]

    def test_equal_score_keeps_both(self, store):
        store.insert_score("Alice", 80)
        store.insert_score("Alice", 80)

        assert _rows_for(store, "Alice") == [("Alice", 80), ("Alice", 80)]

    def test_removes_every_lower_row(self, store):
        store.insert_score("Alice", 80)
        store.insert_score("Alice", 50)
        store.insert_score("Alice", 90)

        assert _rows_for(store, "Alice") == [("Alice", 90)]

    def test_other_names_untouched(self, store):
        store.insert_score("Bob", 10)
        store.insert_score("Alice", 50)
        store.insert_score("Alice", 80)

        assert _rows_for(store, "Bob") == [("Bob", 10)]

    def test_names_are_case_sensitive(self, store):
        store.insert_score("alice", 10)
        store.insert_score("Alice", 80)

        assert store.count_scores() == 2

    def test_concurrent_increasing_inserts_keep_only_best(self):
        store = InMemoryLeaderboardStore()

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda s: store.insert_score("Alice", s), range(100)))

        assert _rows_for(store, "Alice")[0] == ("Alice", 99)

        store.insert_score("Alice", 100)
        assert _rows_for(store, "Alice") == [("Alice", 100)]


class TestReads:
    """Tests for ranked reads and aggregates."""

    def test_top_scores_limit_and_order(self, store, sample_scores):
        for name, score in sample_scores:
            store.insert_score(name, score)

        rows = store.top_scores()

        assert len(rows) == 20
        assert [row["score"] for row in rows] == list(range(2500, 500, -100))

    def test_ties_ranked_by_insertion(self, store):
        store.insert_score("First", 500)
        store.insert_score("Second", 500)
        store.insert_score("Third", 700)

        assert [row["name"] for row in store.top_scores()] == ["Third", "First", "Second"]

    def test_count_and_best_on_empty(self, store):
        assert store.count_scores() == 0
        assert store.best_score() is None

    def test_best_score(self, store):
        store.insert_score("Alice", 300)
        store.insert_score("Bob", 900)

        assert store.best_score() == {"name": "Bob", "score": 900}

# =============================================================================
# lib/ - Standalone Store Modules
# =============================================================================
# This package contains the leaderboard storage layer:
# - store.py: Store interface, StoreError and the fixed page size
# - supabase_client.py: Supabase-backed store (service_role key)
# - memory_store.py: In-process store for development and tests
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.store import TOP_SCORES_LIMIT, LeaderboardStore, StoreError
from lib.memory_store import InMemoryLeaderboardStore
from lib.supabase_client import SupabaseLeaderboardStore

__all__ = [
    "TOP_SCORES_LIMIT",
    "LeaderboardStore",
    "StoreError",
    "InMemoryLeaderboardStore",
    "SupabaseLeaderboardStore",
]

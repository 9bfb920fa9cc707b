# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the leaderboard server:
# - test_models.py: Submission validation and model serialization
# - test_config.py: Settings loading and credential split
# - test_memory_store.py: In-memory store ordering and retention
# - test_supabase_client.py: Supabase store queries (mocked client)
# - test_leaderboard_service.py: Error translation in the service layer
# - test_rate_limit.py: Fixed-window limiter
# - test_api.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================

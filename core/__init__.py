# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the leaderboard business logic:
# - models/: Pydantic schemas for validation and responses
# - services/: Leaderboard reads/writes on top of an injected store
#
# Route handlers stay thin and delegate here.
# =============================================================================

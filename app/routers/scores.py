# =============================================================================
# app/routers/scores.py - Leaderboard Endpoints
# =============================================================================
# Read the top scores, submit a score, and fetch aggregate stats.
#
# Handlers are plain `def` functions: the store client makes blocking
# network calls, so FastAPI runs them in its threadpool.
# =============================================================================

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from app.dependencies import LeaderboardServiceDep
from core.models.score import LeaderboardStats, ScoreEntry, ScoreSubmission

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ScoreListResponse(BaseModel):
    """Top of the leaderboard."""
    scores: list[ScoreEntry]


class SubmitScoreResponse(BaseModel):
    """Response when a score is saved."""
    success: bool = Field(default=True)
    entry: ScoreEntry

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "entry": {
                    "id": 42,
                    "name": "Alice",
                    "score": 4200,
                    "created_at": "2024-01-15T10:30:00Z",
                },
            }
        }
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/scores", response_model=ScoreListResponse)
def list_scores(service: LeaderboardServiceDep):
    """
    List the top 20 scores.

    Highest score first; equal scores keep the order they were set in.
    """
    return ScoreListResponse(scores=service.list_top_scores())


@router.post(
    "/scores",
    response_model=SubmitScoreResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_score(submission: ScoreSubmission, service: LeaderboardServiceDep):
    """
    Submit a score.

    The name must be 1-20 characters once trimmed; '<' and '>' are removed
    before saving. The score must be an integer from 0 to 999999.

    Older, lower scores under the same name are dropped by the store.
    """
    entry = service.submit_score(submission)
    return SubmitScoreResponse(entry=entry)


@router.get("/stats", response_model=LeaderboardStats)
def get_stats(service: LeaderboardServiceDep):
    """
    Get total games and the all-time high score.

    allTimeHigh is null while the board is empty.
    """
    return service.get_stats()

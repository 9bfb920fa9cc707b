# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Reports which store settings are present, for operators and load
# balancers. Presence only: values are never echoed, and nothing here is
# used to authorize anything.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from app.dependencies import SettingsDep

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class EnvChecks(BaseModel):
    """Which of the three store settings are configured."""
    model_config = ConfigDict(populate_by_name=True)

    supabase: bool
    anon_key: bool = Field(alias="anonKey")
    svc_key: bool = Field(alias="svcKey")


class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    ts: str
    env: EnvChecks


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Always answers 200; a misconfigured server shows up as false flags.
    """
    return HealthResponse(
        status="ok",
        ts=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        env=EnvChecks(
            supabase=settings.has_supabase_url,
            anon_key=settings.has_anon_key,
            svc_key=settings.has_service_key,
        ),
    )

# =============================================================================
# app/routers/config.py - Browser Store Config
# =============================================================================
# Hands the browser the store URL and the anon key so it can read the
# leaderboard table directly. The service_role key never goes out.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from app.dependencies import SettingsDep
from app.exceptions import ServiceUnavailableError

router = APIRouter()


class ConfigResponse(BaseModel):
    """Public store configuration."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "supabaseUrl": "https://xyzcompany.supabase.co",
                "supabaseKey": "eyJhbGciOiJIUzI1NiIs...",
            }
        },
    )

    supabase_url: str = Field(..., alias="supabaseUrl")
    supabase_key: str = Field(..., alias="supabaseKey")


@router.get("/config", response_model=ConfigResponse)
async def get_config(settings: SettingsDep):
    """
    Get the browser-safe store configuration.

    Answers 503 unless both the URL and the anon key are configured.
    """
    public = settings.public_store_config()
    if public is None:
        raise ServiceUnavailableError()

    return ConfigResponse(supabase_url=public.url, supabase_key=public.anon_key)

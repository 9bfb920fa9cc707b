# =============================================================================
# app/static.py - Game Assets and SPA Fallback
# =============================================================================
# Serves the game's static files and answers every unknown GET with the
# single-page app's index.html, so client-side routes survive a reload.
#
# Mounted at "/" after all API routers, so API routes always win.
# =============================================================================

import os

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_FILE = "index.html"

# Assets are cached for a day; these must be re-validated on every load
NO_CACHE_FILES = {"manifest.json", "sw.js", INDEX_FILE}
ASSET_CACHE_CONTROL = "public, max-age=86400"


class SPAStaticFiles(StaticFiles):
    """StaticFiles that falls back to index.html instead of answering 404."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response(INDEX_FILE, scope)

        if response.status_code == 404:
            return await super().get_response(INDEX_FILE, scope)
        return response

    def file_response(self, full_path, stat_result, scope, status_code=200) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        if os.path.basename(full_path) in NO_CACHE_FILES:
            response.headers["Cache-Control"] = "no-cache"
        else:
            response.headers["Cache-Control"] = ASSET_CACHE_CONTROL
        return response

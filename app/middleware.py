# =============================================================================
# app/middleware.py - Security Headers
# =============================================================================
# Adds the browser hardening headers to every response: a Content Security
# Policy sized for the game page (CDN scripts, Google Fonts, AdSense, Ko-fi
# and the Supabase project), plus the usual nosniff/frame/referrer set.
#
# Cross-Origin-Embedder-Policy is left off: the ad and Ko-fi iframes do
# not send CORP headers and would be blocked.
# =============================================================================

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp


def build_csp(supabase_url: str | None) -> str:
    """Render the Content-Security-Policy header value."""
    directives = {
        "default-src": ["'self'"],
        "script-src": [
            "'self'", "'unsafe-inline'",
            "https://cdnjs.cloudflare.com",
            "https://fonts.googleapis.com",
            "https://pagead2.googlesyndication.com",
            "https://www.googletagservices.com",
            "https://adservice.google.com",
            "https://ko-fi.com",
        ],
        "style-src": ["'self'", "'unsafe-inline'", "https://fonts.googleapis.com"],
        "font-src": ["'self'", "https://fonts.gstatic.com"],
        "img-src": ["'self'", "data:", "https:", "blob:"],
        "connect-src": [
            "'self'",
            *([supabase_url] if supabase_url else []),
            "https://pagead2.googlesyndication.com",
            "https://ko-fi.com",
        ],
        "frame-src": ["https://googleads.g.doubleclick.net", "https://ko-fi.com"],
        "base-uri": ["'self'"],
        "form-action": ["'self'"],
        "frame-ancestors": ["'self'"],
        "object-src": ["'none'"],
        "script-src-attr": ["'none'"],
    }
    return "; ".join(f"{name} {' '.join(sources)}" for name, sources in directives.items())


def build_security_headers(supabase_url: str | None) -> dict[str, str]:
    """Header name -> value for every response the app sends."""
    return {
        "Content-Security-Policy": build_csp(supabase_url),
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Origin-Agent-Cluster": "?1",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
        "X-Content-Type-Options": "nosniff",
        "X-DNS-Prefetch-Control": "off",
        "X-Download-Options": "noopen",
        "X-Frame-Options": "SAMEORIGIN",
        "X-Permitted-Cross-Domain-Policies": "none",
        "X-XSS-Protection": "0",
    }


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set security headers on every response, unless a route already set one."""

    def __init__(self, app: ASGIApp, headers: dict[str, str]):
        super().__init__(app)
        self.headers = headers

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response

"""FastAPI entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.v1.router import router as api_router
from pagescan import __version__
from pagescan.config.settings import settings

logging.getLogger("pagescan").setLevel(settings.log_level)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach a fixed set of security headers to every response.

    Scan responses are plain JSON, so they get a deny-all CSP. The Swagger
    and ReDoc pages load their assets from jsDelivr.
    """

    DOCS_PATHS = frozenset({"/api/docs", "/api/redoc", "/api/openapi.json"})
    DOCS_CSP = "; ".join((
        "default-src 'self'",
        "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net",
        "img-src 'self' data: https://cdn.jsdelivr.net https://fastapi.tiangolo.com",
        "frame-ancestors 'none'",
    ))
    JSON_CSP = "default-src 'none'; frame-ancestors 'none'"

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Referrer-Policy": "no-referrer",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        csp = self.DOCS_CSP if request.url.path in self.DOCS_PATHS else self.JSON_CSP
        response.headers["Content-Security-Policy"] = csp
        response.headers.update(self.HEADERS)
        return response


app = FastAPI(
    title="pagescan API",
    description="""
API for scanning headless CMS pages for on-page SEO issues.

## Features

- **SEO Score**: 0-100 score across metadata, content, accessibility and links
- **Issue Detection**: missing description or H1, weak alt text, placeholder and broken links
- **Readability Metrics**: Flesch Reading Ease over the page body text
- **Semantic Items**: every component field classified by content purpose

The API never fetches content itself: send the page tree (and any
datasource items) in the request body.
""",
    version=__version__,
    debug=settings.debug,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# CORS middleware (for API cross-origin requests)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.add_middleware(SecurityHeadersMiddleware)

# Mount API router
app.include_router(api_router, prefix="/api/v1")

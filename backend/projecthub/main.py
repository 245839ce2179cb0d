"""FastAPI application entry point."""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from projecthub.api.deps import get_current_user_id
from projecthub.api.errors import register_exception_handlers
from projecthub.api.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from projecthub.api.routes import api_keys, issues, metrics, projects
from projecthub.core.config import get_settings
from projecthub.schemas.common import CallerResponse

settings = get_settings()
docs_enabled = settings.api_docs_enabled
if docs_enabled is None:
    docs_enabled = settings.environment != "production"

app = FastAPI(
    title="ProjectHub API",
    description="Projects, API keys and issues for authenticated users",
    version="1.0.0",
    docs_url="/api/docs" if docs_enabled else None,
    redoc_url="/api/redoc" if docs_enabled else None,
    openapi_url="/api/openapi.json" if docs_enabled else None,
)

register_exception_handlers(app)

# Middleware configuration (order matters - applied in reverse order)
# 1. Request logging (outermost - logs all requests)
app.add_middleware(RequestLoggingMiddleware)

# 2. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 3. Rate limiting on writes (applied before routing)
app.add_middleware(RateLimitMiddleware)

# 4. CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(api_keys.router, prefix="/api/apikey", tags=["api keys"])
app.include_router(issues.router, prefix="/api/issues", tags=["issues"])
app.include_router(metrics.router, prefix="/api", tags=["metrics"])


@app.get("/api/me", response_model=CallerResponse, tags=["auth"])
async def get_current_caller(user_id: str = Depends(get_current_user_id)) -> CallerResponse:
    """Return the caller identifier taken from the bearer token."""
    return CallerResponse(user_id=user_id)

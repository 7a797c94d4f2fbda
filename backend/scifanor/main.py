import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from scifanor.config import get_settings
from scifanor.errors import CatalogError, TransientIOError
from scifanor.routers import auth_router, collaborators_router, media_router, plants_router, profiles_router
from scifanor.routers.auth import limiter
from scifanor.storage import get_storage

settings = get_settings()
logger = logging.getLogger("scifanor.api")
logging.basicConfig(level=settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan for startup/shutdown events."""
    if settings.s3_ensure_bucket:
        get_storage().ensure_bucket_exists(settings.s3_bucket, settings.s3_region)
        logger.info("Bucket %s is ready", settings.s3_bucket)
    yield


app = FastAPI(
    title="SciFanor API",
    description="School plant catalog: taxonomy records, photos, collaborators and activity history",
    version="1.0.0",
    lifespan=lifespan
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


def _json(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Map domain errors onto HTTP status codes."""
    if isinstance(exc, TransientIOError):
        logger.error("Backend failure on %s %s: %s", request.method, request.url.path, exc)
    content = {"detail": exc.message, "error": type(exc).__name__}
    if exc.detail:
        content["context"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Set basic security headers for all API responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"
    return response


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    req_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = req_id

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = str(req_id)
        return response
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        payload = {
            "request_id": str(req_id),
            "path": request.url.path,
            "method": request.method,
            "status": status_code,
            "duration_ms": duration_ms,
        }
        logger.info(_json(payload))


Instrumentator().instrument(app).expose(app, include_in_schema=False, should_gzip=True)

# Include routers
app.include_router(auth_router)
app.include_router(plants_router)
app.include_router(collaborators_router)
app.include_router(media_router)
app.include_router(profiles_router)


@app.get("/health")
def health_check():
    """Liveness probe."""
    return {"status": "healthy"}


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "SciFanor API",
        "version": "1.0.0",
        "docs": "/docs",
        "auth": {
            "signup": "/auth/signup",
            "login": "/auth/login"
        },
        "catalog": {
            "plants": "/plants",
            "detail": "/plants/{id}",
            "history": "/plants/{id}/history",
            "profiles": "/profiles"
        }
    }

"""
ScriptReel API
FastAPI application that turns topics into narration scripts and scripts into
talking-avatar videos.

This is the main entry point that wires together all routes and services.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    get_cors_origins,
    get_heygen_api_key,
    get_store_data_dir,
)
from .routes import scripts_router, videos_router
from .core import (
    ScriptReelError,
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    is_auth_enabled,
    parse_bool_env,
    run_startup_runtime_checks,
    assert_directory_writable,
)

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = parse_bool_env(os.getenv("JSON_LOGS"), default=False)

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")
logger.info("Starting ScriptReel API", extra={
    "log_level": log_level,
    "json_logs": use_json_logs,
    "auth_enabled": is_auth_enabled(),
})


async def _run_startup() -> None:
    strict_runtime = parse_bool_env(
        os.getenv("STARTUP_STRICT_RUNTIME_CHECKS"),
        default=os.getenv("ENV", "").lower() == "production",
    )
    runtime_report = run_startup_runtime_checks(store_dir=get_store_data_dir(), strict_dirs=strict_runtime)
    app.state.runtime_report = runtime_report
    logger.info("Startup runtime checks complete", extra={"runtime_report": runtime_report})


async def _run_shutdown() -> None:
    """Stop in-flight video runs."""
    from .services.video_lifecycle import get_lifecycle_controller

    await get_lifecycle_controller().shutdown()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    await _run_startup()
    try:
        yield
    finally:
        await _run_shutdown()


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add correlation ID and attach security headers."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
        "client": request.client.host if request.client else "unknown",
    })

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })
        return response
    finally:
        clear_context()


@app.exception_handler(ScriptReelError)
async def handle_app_error(_request: Request, exc: ScriptReelError):
    log = logger.error if exc.http_status >= 500 else logger.info
    log("Request failed", extra={"error": exc.message, "kind": exc.kind, "status_code": exc.http_status})
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(scripts_router)
app.include_router(videos_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "ScriptReel API - Generate narration scripts and avatar videos",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container orchestration.

    Validates:
    - Video provider credential (HEYGEN_API_KEY)
    - Script generation provider availability (Gemini key or reachable Ollama)
    - Document store directory writability

    Returns 200 if healthy, 503 if any check fails.
    """
    from .services.llm import get_default_provider_type, get_llm_provider

    checks = {"status": "healthy", "checks": {}}
    all_healthy = True

    video_key = bool(get_heygen_api_key())
    checks["checks"]["heygen_api_key"] = {"configured": video_key}
    if not video_key:
        all_healthy = False
        logger.warning("Health check: HEYGEN_API_KEY not configured")

    provider_type = get_default_provider_type()
    try:
        get_llm_provider(provider_type)
        checks["checks"]["script_provider"] = {"provider": provider_type.value, "available": True}
    except ValueError as exc:
        all_healthy = False
        checks["checks"]["script_provider"] = {
            "provider": provider_type.value,
            "available": False,
            "error": str(exc),
        }
        logger.warning(f"Health check: script provider unavailable ({provider_type.value})")

    store_dir = get_store_data_dir()
    try:
        assert_directory_writable(store_dir)
        checks["checks"]["store"] = {"path": str(store_dir), "writable": True}
    except ScriptReelError as exc:
        all_healthy = False
        checks["checks"]["store"] = {"path": str(store_dir), "writable": False, "error": exc.message}
        logger.error(f"Health check: store not writable: {exc.message}")

    runtime_report = getattr(app.state, "runtime_report", None)
    if runtime_report is not None:
        checks["checks"]["runtime_startup"] = runtime_report

    if not all_healthy:
        checks["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=checks)

    return checks


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

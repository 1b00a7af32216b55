"""
Course viewer backend entry point.

Architecture:
- One Python process, one asyncio event loop
- FastAPI serves the catalog, progress, auth and file view APIs
- An APScheduler job rebuilds the course tree from Google Drive periodically

We use FastAPI's lifespan to manage startup/shutdown of the scheduler.

Run with: python main.py [--port PORT] [--no-scheduler]
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import check_required_env_vars, get_allowed_origins, get_sentry_dsn
from core.drive.client import DriveFileNotFoundError
from core.errors import ConfigError, NotFoundError, StorageError, UpstreamError
from core.scheduler import init_scheduler, shutdown_scheduler
from web_api.dependencies import get_course_store
from web_api.routes.auth import router as auth_router
from web_api.routes.content import router as content_router
from web_api.routes.courses import router as courses_router
from web_api.routes.files import router as files_router
from web_api.routes.progress import router as progress_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

if get_sentry_dsn():
    sentry_sdk.init(dsn=get_sentry_dsn(), traces_sample_rate=0.0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Starts the course refresh scheduler unless disabled.
    """
    ok, warnings = check_required_env_vars()
    for warning in warnings:
        print(warning)
    if not ok:
        print("Warning: required configuration missing, Drive features will fail")

    if os.getenv("DISABLE_SCHEDULER", "").lower() not in ("true", "1", "yes"):
        init_scheduler(get_course_store())

    yield

    shutdown_scheduler()


app = FastAPI(
    title="Drive Course Viewer API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error taxonomy -> HTTP. Core code raises; only this boundary translates.


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info(f"Not found on {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(DriveFileNotFoundError)
async def drive_file_not_found_handler(request: Request, exc: DriveFileNotFoundError):
    return JSONResponse(status_code=404, content={"error": "File not found"})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"error": "Google Drive request failed"})


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=503, content={"error": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=500, content={"error": "Internal storage error"})


# Include routers
app.include_router(auth_router)
app.include_router(courses_router)
app.include_router(progress_router)
app.include_router(files_router)
app.include_router(content_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Drive Course Viewer Server")
    parser.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Disable the periodic course rebuild",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", "8000")),
        help="Port to run the server on (default: 8000)",
    )
    args = parser.parse_args()

    # Set env var so it persists across uvicorn reloads
    if args.no_scheduler:
        os.environ["DISABLE_SCHEDULER"] = "true"

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )

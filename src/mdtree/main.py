"""FastAPI application entry point."""

import logging
import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from mdtree import __version__
from mdtree.api.convert import router as convert_router
from mdtree.api.dependencies import get_settings
from mdtree.api.notes import router as notes_router
from mdtree.api.uploads import UploadError
from mdtree.api.validate import router as validate_router

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Log resolved configuration at startup for debugging."""
    s = get_settings()
    logger.info(
        "mdtree starting: data_path=%s, db=%s, max_upload_bytes=%d",
        s.data_path,
        s.db_name,
        s.max_upload_bytes,
    )
    yield


app = FastAPI(
    title="mdtree",
    description="Markdown to structured JSON converter",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=500)

app.include_router(convert_router)
app.include_router(notes_router)
app.include_router(validate_router)


@app.exception_handler(UploadError)
async def upload_error_handler(_request: Request, exc: UploadError) -> JSONResponse:
    """Rejected uploads never reach the converter."""
    logger.warning("Upload rejected: %s", exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors: 400 rather than 422."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.get("/")
async def root() -> dict[str, str]:
    """Return project information."""
    return {
        "name": "mdtree",
        "version": __version__,
        "description": "Markdown to structured JSON converter",
    }


@app.get("/health")
@app.get("/api/health")
async def health() -> dict[str, Any]:
    """Health check endpoint with data directory and disk status."""
    s = get_settings()

    checks: dict[str, Any] = {"status": "ok"}

    data_path = Path(s.data_path)
    checks["data_path"] = "ok" if data_path.exists() else "missing"

    disk_path = data_path if data_path.exists() else Path(".")
    _, _, free = shutil.disk_usage(str(disk_path))
    free_gb = round(free / (1024**3), 2)
    checks["free_disk_gb"] = free_gb
    if free_gb < 1.0:
        checks["status"] = "warning"
        checks["disk"] = "low"

    return checks

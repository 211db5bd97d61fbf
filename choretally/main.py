"""choretally - household chore tally over an encrypted document store."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from choretally import __version__
from choretally.core.config import constants, settings
from choretally.core.document_store import create_document_store, set_document_store
from choretally.core.errors import ChoreTallyError, to_error_response
from choretally.core.logging import configure_logfire, instrument_fastapi
from choretally.interface.api_router import router as api_router


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Validate the encryption key and build the document store.

    Exits the process with a clear message if the key is missing.
    """
    logger.info("startup_validation_begin")

    try:
        store = create_document_store()
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    set_document_store(store)
    logger.info(
        "startup_validation_complete",
        extra={"data_file": str(store.path), "reset_on_corrupt_store": settings.reset_on_corrupt_store},
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so validation logs are captured
    configure_logfire()
    validate_startup_configuration()
    yield


app = FastAPI(
    title="choretally",
    description="Household chore tally",
    version=__version__,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(ChoreTallyError)
async def handle_chore_tally_error(request: Request, exc: ChoreTallyError) -> JSONResponse:
    """Map core errors to JSON error responses."""
    response = to_error_response(exc)
    if response.http_status >= constants.HTTP_SERVER_ERROR:
        logger.error(
            "api_request_failed",
            extra={"path": request.url.path, "error_code": response.code, "error": exc.message},
        )
    return JSONResponse(
        status_code=response.http_status,
        content={"error": response.message, "code": response.code},
    )


# Register routers
app.include_router(api_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)


# Static assets last so /api and /health take precedence
if settings.static_dir is not None and settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def run() -> None:
    """Start the HTTP server."""
    uvicorn.run(app, host=settings.host, port=settings.port)

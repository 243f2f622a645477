"""
RoutePilot FastAPI Service

REST API over the routing rule engine.

Endpoints:
    GET  /health                    - Liveness probe with catalog info
    GET  /catalog                   - Full field catalog
    GET  /catalog/prompt            - Full catalog as text for prompts
    GET  /catalog/{category}/paths  - Paths allowed for a category
    POST /rules/validate            - Check field references
    POST /rules/explain             - Render a rule as a sentence
    POST /rules/simulate            - Run a rule over sample orders
    POST /rules/preview             - Validate + explain + simulate
    POST /rules/evaluate            - Run a rule against live data

Run:
    uvicorn routepilot.api.main:app
"""

import json
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routepilot import __version__
from routepilot.api.routes import catalog, rules
from routepilot.api.schemas.responses import HealthResponse
from routepilot.catalog import get_field_catalog
from routepilot.config import ROUTEPILOT_DOCS_ENABLED, ROUTEPILOT_LOG_LEVEL
from routepilot.exceptions import (
    InvalidConditionError,
    RoutePilotError,
    UnknownCategoryError,
)

# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "request_id"):
            log_entry["request_id"] = record.request_id
        if hasattr(record, "error_code"):
            log_entry["error_code"] = record.error_code
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = ROUTEPILOT_LOG_LEVEL) -> logging.Logger:
    """Attach the JSON handler to the package logger once."""
    logger = logging.getLogger("routepilot")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    return logger


logger = configure_logging()


# =============================================================================
# FastAPI App
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the field catalog on startup. A broken catalog stops the service."""
    field_catalog = get_field_catalog()
    logger.info(
        "RoutePilot v%s started with %d catalog groups",
        __version__, len(field_catalog.groups),
        extra={"request_id": "startup"},
    )
    yield
    logger.info("RoutePilot shutting down")


app = FastAPI(
    title="RoutePilot",
    description="Rule engine for natural-language delivery routing rules",
    version=__version__,
    docs_url="/docs" if ROUTEPILOT_DOCS_ENABLED else None,
    redoc_url="/redoc" if ROUTEPILOT_DOCS_ENABLED else None,
    openapi_url="/openapi.json" if ROUTEPILOT_DOCS_ENABLED else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(catalog.router)
app.include_router(rules.router)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# Error Handling
# =============================================================================

def _status_for(error: RoutePilotError) -> int:
    if isinstance(error, UnknownCategoryError):
        return 404
    if isinstance(error, InvalidConditionError):
        return 422
    return 500


@app.exception_handler(RoutePilotError)
async def routepilot_error_handler(request: Request, exc: RoutePilotError):
    """Map engine errors to structured JSON responses."""
    request_id = getattr(request.state, "request_id", "unknown")
    status_code = _status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed: %s",
        exc.message,
        extra={"request_id": request_id, "error_code": exc.code},
    )
    return JSONResponse(
        status_code=status_code,
        content={**exc.to_dict(), "request_id": request_id},
    )


# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness probe - process alive and catalog loaded."""
    field_catalog = get_field_catalog()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        catalog_groups=len(field_catalog.groups),
        catalog_source=field_catalog.source,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

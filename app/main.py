from __future__ import annotations

import logging
import math
import os
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import SUPPORTED_INDUSTRIES, load_env_files
from metrics_graph.relationships import METRICS_RELATIONSHIPS


class HealthResponse(BaseModel):
    status: str
    metric_count: int


def _json_safe(value: Any) -> Any:
    """Replace infinities and NaN, which JSON cannot carry, with their names."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    422 response listing every validation error.

    A rejected ``1e400`` reaches the handler as ``inf``; it is echoed back
    as the string ``"inf"``.
    """

    return JSONResponse(
        status_code=422,
        content={"detail": _json_safe(jsonable_encoder(exc.errors()))},
    )


def _validate_env() -> None:
    """
    Validate environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator
    can fix all problems in one restart cycle.

    Rules:
    - DEFAULT_INDUSTRY, when set, must be a supported industry.
    - FOCUS_DIMMED_OPACITY, when set, must be a number in [0, 1].
    - GRAPH_MAX_PATH_DEPTH and SPARKLINE_WEEKS, when set, must be integers.
    """

    load_env_files()

    errors: list[str] = []

    # --- DEFAULT_INDUSTRY ---------------------------------------------
    industry = os.getenv("DEFAULT_INDUSTRY", "").strip().lower()
    if industry and industry not in SUPPORTED_INDUSTRIES:
        errors.append(
            f"DEFAULT_INDUSTRY='{industry}' is not valid. "
            f"Allowed values: {sorted(SUPPORTED_INDUSTRIES)}."
        )

    # --- Focus mode -----------------------------------------------------
    dimmed_raw = os.getenv("FOCUS_DIMMED_OPACITY", "").strip()
    if dimmed_raw:
        try:
            dimmed = float(dimmed_raw)
        except ValueError:
            errors.append(f"FOCUS_DIMMED_OPACITY='{dimmed_raw}' is not a number.")
        else:
            if not 0.0 <= dimmed <= 1.0:
                errors.append(f"FOCUS_DIMMED_OPACITY={dimmed} must be between 0 and 1.")

    # --- Integer settings ---------------------------------------------
    for name in ("GRAPH_MAX_PATH_DEPTH", "SPARKLINE_WEEKS", "SPARKLINE_SEED"):
        raw = os.getenv(name, "").strip()
        if not raw:
            continue
        try:
            int(raw)
        except ValueError:
            errors.append(f"{name}='{raw}' is not an integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed. Invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="SaaS Metrics API",
        version="1.0.0",
    )

    application.add_exception_handler(RequestValidationError, _validation_error_handler)

    from app.api.routers import graph_router, metrics_router

    application.include_router(metrics_router)
    application.include_router(graph_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", metric_count=len(METRICS_RELATIONSHIPS))

    logging.getLogger(__name__).info(
        "API ready with %d graph metrics", len(METRICS_RELATIONSHIPS)
    )
    return application


app = create_app()

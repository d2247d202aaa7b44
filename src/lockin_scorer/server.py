"""
ASGI Server for the Lock-in Scorer

Provides the HTTP API consumed by the lock-in dashboard:
- POST /calculate       score a dimension rating set
- GET  /trajectory      one historical reference trajectory
- GET  /trajectories    index of available species and technologies
- GET  /presets         reference assessment presets
- GET  /health          health check

Usage:
    lockin-scorer serve                  # Start with configured settings
    lockin-scorer serve --port 8080      # Custom port
"""
from typing import Optional

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from .app_logging import DEFAULT_LOG_FORMAT, get_logger
from .config import get_config
from .engine import AssessmentEngine
from .exceptions import DimensionValidationError, TrajectoryLookupError
from .presets import list_presets

logger = get_logger('server')

# Uvicorn logging configuration to match our logging format
UVICORN_LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": DEFAULT_LOG_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "access": {
            "format": DEFAULT_LOG_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
        "access": {
            "formatter": "access",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "uvicorn": {"handlers": ["default"], "level": "INFO"},
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
    },
}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def calculate(request: Request) -> JSONResponse:
    """Score the dimension ratings in the request body."""
    engine: AssessmentEngine = request.app.state.engine

    try:
        inputs = await request.json()
    except ValueError as e:
        # Also covers integer literals past the int conversion digit limit
        logger.info(f"Rejected unparseable /calculate body: {e}")
        return error_response("Request body must be valid JSON", 400)

    if not isinstance(inputs, dict):
        return error_response("Request body must be a JSON object of dimension ratings", 400)

    try:
        result = engine.assess(inputs, strategy=request.query_params.get('strategy'))
    except DimensionValidationError as e:
        return error_response(e.message, 400)
    except Exception:
        logger.exception("Error in /calculate")
        return error_response("Internal server error", 500)

    return JSONResponse(result.to_response())


async def trajectory(request: Request) -> JSONResponse:
    """Return one historical trajectory."""
    engine: AssessmentEngine = request.app.state.engine
    defaults = get_config().trajectories
    tech = request.query_params.get('tech') or defaults.default_technology
    species = request.query_params.get('species') or defaults.default_species

    try:
        data = engine.store.get_trajectory(tech, species)
    except TrajectoryLookupError as e:
        return error_response(e.message, 404)

    return JSONResponse(data.to_payload())


async def trajectories(request: Request) -> JSONResponse:
    engine: AssessmentEngine = request.app.state.engine
    return JSONResponse(engine.store.index())


async def presets(_: Request) -> JSONResponse:
    return JSONResponse([preset.model_dump(mode="json") for preset in list_presets()])


async def health_check(_: Request) -> JSONResponse:
    logger.debug("Health check requested")
    return JSONResponse({"status": "ok"})


def create_app(engine: Optional[AssessmentEngine] = None) -> Starlette:
    """
    Build the Starlette application.

    Args:
        engine: Assessment engine to serve; built from configuration if omitted.
            The engine and its trajectory store are shared read-only by all requests.
    """
    app = Starlette(
        routes=[
            Route('/calculate', calculate, methods=['POST']),
            Route('/trajectory', trajectory, methods=['GET']),
            Route('/trajectories', trajectories, methods=['GET']),
            Route('/presets', presets, methods=['GET']),
            Route('/health', health_check, methods=['GET']),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        ],
    )
    app.state.engine = engine or AssessmentEngine()
    return app


def serve(host: Optional[str] = None, port: Optional[int] = None, log_level: Optional[str] = None) -> None:
    """Run the API with uvicorn, falling back to configured settings."""
    cfg = get_config().server
    host = host or cfg.host
    port = port or cfg.port
    log_level = (log_level or cfg.log_level).lower()

    app = create_app()
    logger.info(f"Starting server on {host}:{port}")

    uvicorn.run(app, host=host, port=port, log_level=log_level, log_config=UVICORN_LOG_CONFIG)

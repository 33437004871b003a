from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sampler.api.routers import events, notifications, statistics, system, trivia
from sampler.domain.errors import SamplerError
from sampler.infra.database import engine_from_env
from sampler.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(engine=None) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Sampler Functions API", version="0.1.0")
    app.state.db_engine = engine if engine is not None else engine_from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    app.include_router(system.router)
    app.include_router(events.router)
    app.include_router(notifications.router)
    app.include_router(statistics.router)
    app.include_router(trivia.router)
    # catch-alls last so they never shadow a real endpoint
    app.include_router(notifications.reminder_fallback_router)
    app.include_router(system.fallback_router)
    return app


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SamplerError)
    def handle_sampler_error(request: Request, exc: SamplerError):
        if exc.status_code >= 500:
            logger.error("Function error on %s: %s", request.url.path, exc.message)
        else:
            logger.info("Rejected %s: %s", request.url.path, exc.message)
        return _error(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    def handle_request_validation(request: Request, exc: RequestValidationError):
        return _error("Invalid request body", 400)

    @app.exception_handler(StarletteHTTPException)
    def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Function error on %s", request.url.path)
        return _error(str(exc) or "Internal server error", 500)


app = create_app()

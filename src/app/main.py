"""
FastAPI application entry point.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from app.blueprint.factory import get_blueprint_generator
from app.blueprint.router import router as blueprints_router
from app.campaigns.activation_router import router as activation_router
from app.campaigns.overview_router import router as overview_router
from app.campaigns.router import router as campaigns_router
from app.config import get_settings
from app.shared.database import get_database_manager
from app.shared.exceptions import (
    AppError,
    CampaignNotEditableError,
    CampaignNotFoundError,
    InvalidStatusTransitionError,
    ValidationError,
)
from app.shared.logging import bind_correlation_id, get_logger, setup_logging

CORRELATION_HEADER = "X-Correlation-ID"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    settings = get_settings()

    logger.info("Application starting", extra={"env": settings.app_env})

    # No migrations ship with the service; the schema comes from the ORM models.
    await get_database_manager().create_all()

    yield

    logger.info("Shutting down application")
    await get_blueprint_generator().aclose()
    await get_database_manager().close()
    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Interview Campaign Builder API",
        description="Campaign drafts, interview blueprints and launch for AI phone screening",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Map domain exceptions that escape a router to HTTP responses
    @app.exception_handler(CampaignNotFoundError)
    async def _not_found(_: Request, exc: CampaignNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )

    @app.exception_handler(InvalidStatusTransitionError)
    @app.exception_handler(CampaignNotEditableError)
    async def _conflict(_: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )

    @app.exception_handler(ValidationError)
    async def _validation(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )

    @app.exception_handler(AppError)
    async def _app_error(_: Request, exc: AppError) -> JSONResponse:
        logger.error("Unhandled application error", extra={"code": exc.code, "error": exc.message})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )

    # Request validation (FastAPI/Pydantic) -> consistent 422 payload
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "errors": errors,
                }
            },
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid4())
        with bind_correlation_id(correlation_id):
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    app.include_router(activation_router)
    app.include_router(campaigns_router)
    app.include_router(blueprints_router)
    app.include_router(overview_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()

"""FastAPI Application Entry Point"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1.router import api_router
from app.config import settings
from app.core.exceptions import DomainError
from app.core.logging import get_logger, setup_logging
from app.core.rate_limit import limiter
from app.core.middleware import (
    RequestIDMiddleware,
    RequestTimingMiddleware,
    SecurityHeadersMiddleware
)
from app.database import close_db, init_db
from app.schemas.responses import ErrorResponse

setup_logging()
logger = get_logger(__name__)


def _correlation_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application", extra={"environment": settings.ENVIRONMENT})

    # Development convenience only; deployed databases are migrated with Alembic
    if settings.is_development:
        await init_db()
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down application")
    await close_db()


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Ledger, occupancy and registry rule violations -> ErrorResponse envelope"""
    logger.warning(
        exc.message,
        extra={"path": request.url.path, "error_code": exc.code, "correlation_id": _correlation_id(request)},
    )
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse.from_error(exc).model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "errors": errors, "correlation_id": _correlation_id(request)},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": errors})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {exc}",
        extra={"path": request.url.path, "correlation_id": _correlation_id(request)},
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Hospital billing ledger, bed occupancy and admissions API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_exception_handler(DomainError, domain_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=[settings.ALLOWED_HEADERS],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    # Last added runs first: the request id exists before timing logs it
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestTimingMiddleware)
    application.add_middleware(RequestIDMiddleware)

    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @application.get("/health", tags=["Health"])
    async def health_check():
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    @application.get("/", tags=["Root"])
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health"
        }

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

"""BizNova proximity service — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from biznova.adapters.persistence.database import engine
from biznova.config import settings
from biznova.domain.errors import (
    EntityNotFoundError,
    InvalidCoordinateError,
    InvalidRadiusError,
)
from biznova.infrastructure.api.routes_health import router as health_router
from biznova.infrastructure.api.routes_location import router as location_router
from biznova.infrastructure.api.routes_nearby import router as nearby_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def _error(status_code: int, message: str, error: str | None = None, headers=None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the {success: false, message} envelope."""

    @app.exception_handler(InvalidCoordinateError)
    async def invalid_coordinates(request: Request, exc: InvalidCoordinateError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid coordinates", str(exc))

    @app.exception_handler(InvalidRadiusError)
    async def invalid_radius(request: Request, exc: InvalidRadiusError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid radius", str(exc))

    @app.exception_handler(EntityNotFoundError)
    async def entity_not_found(request: Request, exc: EntityNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, "User not found", str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request parameters", fields or None)

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app() -> FastAPI:
    app = FastAPI(
        title="BizNova — nearby shop discovery",
        description="Location updates and radius search over registered retailers and customers",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api")
    app.include_router(nearby_router, prefix="/api")
    app.include_router(location_router, prefix="/api")

    return app


app = create_app()

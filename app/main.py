from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.endpoints.health import REQUEST_COUNTER
from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.errors import AppError, StorageUnavailableError
from app.core.logging import configure_logging
from app.db.session import SessionLocal, engine
from app.schemas.common import ERROR_RESPONSES, ErrorResponse, ServiceInfo
from app.services.round_service import RoundService

logger = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors or any(err.get("type") == "missing" for err in errors):
        return "Missing required fields"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid field {field}: {first.get('msg', 'invalid value')}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.rounds_seed_file:
        async with SessionLocal() as db:
            await RoundService(db).ensure_seed_rounds(settings.rounds_seed_file)
    logger.info("startup", env=settings.app_env, version=settings.app_version)
    yield
    await engine.dispose()
    logger.info("shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug, lifespan=lifespan)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            REQUEST_COUNTER.labels(path=getattr(route, "path", "unmatched")).inc()
            logger.info(
                "request",
                method=request.method,
                path=request.url.path,
                status=status_code,
            )

    @app.exception_handler(AppError)
    async def app_error_handler(_: Request, exc: AppError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(exc.status_code, "Endpoint not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def storage_error_handler(_: Request, exc: Exception):
        logger.error("storage_unavailable", error=str(exc))
        failure = StorageUnavailableError()
        return error_response(failure.status_code, failure.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("unhandled_exception", error=str(exc))
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!")

    @app.get("/", response_model=ServiceInfo, tags=["system"])
    async def root():
        return ServiceInfo(message=f"{settings.app_name} is running!", version=settings.app_version)

    app.include_router(api_router, prefix=settings.api_prefix, responses=ERROR_RESPONSES)
    return app

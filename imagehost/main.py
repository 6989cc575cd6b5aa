from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from imagehost.api.v1.router import api_router
from imagehost.core.config import get_settings
from imagehost.core.errors import (
    ConfigError,
    ImageHostingError,
    UnsupportedEnvironmentError,
    UploadError,
    ValidationError,
)
from imagehost.core.logging import configure_logging
from imagehost.schemas.images import ErrorDetail

logger = structlog.get_logger()

ERROR_STATUS: dict[type[ImageHostingError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConfigError: 422,
    UploadError: status.HTTP_502_BAD_GATEWAY,
    UnsupportedEnvironmentError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()
    logger.info("startup", env=settings.app_env)
    yield
    logger.info("shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[item.strip() for item in settings.cors_allow_origins.split(",") if item.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

    @app.exception_handler(ImageHostingError)
    async def image_hosting_exception_handler(_: Request, exc: ImageHostingError):
        status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        detail = ErrorDetail(code=exc.code.value, message=exc.message)
        return JSONResponse(status_code=status_code, content={"detail": detail.model_dump()})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    app.include_router(api_router, prefix=settings.api_prefix)
    return app

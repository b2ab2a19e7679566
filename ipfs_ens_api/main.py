"""FastAPI application entry point."""

import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ipfs_ens_api import __version__
from ipfs_ens_api.api.middleware import RequestLoggingMiddleware
from ipfs_ens_api.api.v1.router import router as v1_router
from ipfs_ens_api.config import settings
from ipfs_ens_api.core.exceptions import IpfsEnsError
from ipfs_ens_api.models.responses import ApiError, ApiResponse
from ipfs_ens_api.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def error_code(exc: Exception) -> str:
    """``DeploymentNotFoundError`` -> ``DEPLOYMENT_NOT_FOUND_ERROR``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).upper()


def error_response(status_code: int, error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse[None](err=error).model_dump(mode="json"),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
    )

    yield

    logger.info("application.shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="IPFS-ENS Deployment API",
        description="Builds GitHub repositories, publishes them to IPFS and points ENS names at them",
        version=__version__,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(IpfsEnsError)
    async def ipfs_ens_error_handler(
        request: Request, exc: IpfsEnsError
    ) -> JSONResponse:
        """Handle application-specific errors."""
        logger.info(
            "request.rejected",
            code=error_code(exc),
            message=exc.message,
            path=request.url.path,
        )
        return error_response(
            exc.status_code,
            ApiError(code=error_code(exc), message=exc.message, details=exc.details),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        if settings.is_development:
            error = ApiError(
                code="INTERNAL_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
            )
        else:
            error = ApiError(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
            )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error)

    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ipfs_ens_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )

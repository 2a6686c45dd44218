"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from svg_output import __version__
from svg_output.api.routes import health, svg
from svg_output.core.config import Settings, get_settings
from svg_output.core.dependencies import build_services
from svg_output.core.exceptions import SvgOutputError
from svg_output.core.logging_config import LoggingConfig
from svg_output.core.middleware import LoggingContextMiddleware
from svg_output.models.configuration import ConfigurationSnapshot
from svg_output.services.cache_store import CacheStore

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = app.state.settings
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all unhandled errors"""
    if isinstance(exc, FastAPIHTTPException):
        raise exc

    if isinstance(exc, SvgOutputError):
        error = exc.to_dict()
    else:
        error = {"message": str(exc), "error_type": type(exc).__name__, "metadata": {}}
    error_msg = error["message"]
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "error": error_msg,
            "error_type": error["error_type"],
            "error_metadata": error["metadata"],
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": error_msg,
            "type": type(exc).__name__
        }
    )


def create_app(
    settings: Optional[Settings] = None,
    snapshot: Optional[ConfigurationSnapshot] = None,
    cache_store: Optional[CacheStore] = None,
    renderer=None,
) -> FastAPI:
    """
    Build the application

    The style/language snapshot is loaded here, before the first request,
    so request handling never touches the configuration source.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Themed SVG output with conditional GET and render caching",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.svg_services = build_services(
        settings,
        snapshot=snapshot,
        cache_store=cache_store,
        renderer=renderer,
    )

    app.add_middleware(LoggingContextMiddleware)
    if settings.enable_gzip:
        app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(svg.router)
    app.include_router(health.router)
    return app


app = create_app()

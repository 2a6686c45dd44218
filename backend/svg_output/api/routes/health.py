"""
Health check endpoints
"""
from fastapi import APIRouter, Depends, Request

from svg_output import __version__
from svg_output.core.dependencies import SvgServices, get_svg_services
from svg_output.utils.datetime_utils import utc_now

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request, services: SvgServices = Depends(get_svg_services)):
    """
    Basic health check endpoint

    Returns:
        dict: Health status with cache backend and configuration table sizes
    """
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.app_env,
        "cache": services.cache_store.get_stats(),
        "configuration": {
            "styles": len(services.snapshot.styles),
            "languages": len(services.snapshot.languages),
        },
    }

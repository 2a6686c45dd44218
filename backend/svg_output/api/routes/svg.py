"""
SVG output endpoint
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response

from svg_output.core.dependencies import SvgServices, get_svg_services
from svg_output.core.logging_config import LoggingConfig
from svg_output.models.render import GateDecision

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(tags=["svg"])


@router.api_route("/svg", methods=["GET", "HEAD"])
def get_svg(
    request: Request,
    if_modified_since: Optional[str] = Header(default=None),
    services: SvgServices = Depends(get_svg_services),
) -> Response:
    """
    Render a themed SVG

    Query parameters: style, language, svg (template name), d (unix timestamp
    of the last change, used for If-Modified-Since).
    """
    req = services.input_resolver.resolve(request.query_params)
    LoggingConfig.set_context(svg=req.resource_name, style_id=req.style_id, language_id=req.language_id)

    if services.gate.should_render(req, if_modified_since) == GateDecision.NOT_MODIFIED:
        logger.debug("SVG not modified", extra={"client_modified_at": req.client_modified_at})
        return services.writer.not_modified()

    result = services.pipeline.render(req)
    return services.writer.write(result, include_body=request.method != "HEAD")

"""
If-Modified-Since handling
"""
from typing import Optional

from svg_output.models.render import GateDecision, RenderRequest
from svg_output.utils.datetime_utils import parse_http_date


class ConditionalGate:
    """Decides whether a request needs a full render or a 304"""

    def should_render(self, req: RenderRequest, if_modified_since: Optional[str]) -> GateDecision:
        """
        The client copy is fresh when the request carries a modification
        timestamp no newer than the parsed If-Modified-Since date.
        An unparseable header counts as absent.
        """
        header_timestamp = parse_http_date(if_modified_since)
        if header_timestamp is None:
            return GateDecision.RENDER
        if req.client_modified_at and req.client_modified_at <= header_timestamp:
            return GateDecision.NOT_MODIFIED
        return GateDecision.RENDER

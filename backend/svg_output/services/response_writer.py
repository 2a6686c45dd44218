"""
Builds HTTP responses for the SVG endpoint
"""
import time
from typing import Dict, Union

from fastapi import Response
from fastapi.responses import StreamingResponse

from svg_output.models.render import EmptyResult, RenderResult
from svg_output.utils.datetime_utils import http_date

SVG_CONTENT_TYPE = "image/svg+xml; charset=utf-8"


class ResponseWriter:
    """Translates pipeline outcomes into responses"""

    def __init__(self, expires_days: int = 365, enable_content_length: bool = True):
        self.expires_days = expires_days
        self.enable_content_length = enable_content_length

    def not_modified(self) -> Response:
        """Bare 304: no body and no content headers"""
        return Response(status_code=304)

    def svg_headers(self, last_modified: int) -> Dict[str, str]:
        return {
            "content-type": SVG_CONTENT_TYPE,
            "expires": http_date(time.time() + self.expires_days * 86400),
            "last-modified": http_date(last_modified),
            "cache-control": "public",
        }

    def write(self, result: Union[RenderResult, EmptyResult], include_body: bool = True) -> Response:
        """
        200 response carrying the SVG

        An EMPTY result keeps the normal headers but has no body. Without
        content-length reporting the body is streamed so no length is sent.
        HEAD requests pass include_body=False and get headers only.
        """
        if isinstance(result, RenderResult):
            content = result.content
            last_modified = result.style_last_modified
        else:
            content = b""
            last_modified = 0

        headers = self.svg_headers(last_modified)
        if self.enable_content_length:
            headers["content-length"] = str(len(content))
        if not include_body:
            content = b""
        if self.enable_content_length:
            return Response(content=content, status_code=200, headers=headers)
        return StreamingResponse(iter([content] if content else []), status_code=200, headers=headers)

"""
Style and language resolution with fallback to configured defaults
"""
import json
from typing import Any, Dict, Mapping, Optional, TypeVar

from svg_output.core.logging_config import LoggingConfig
from svg_output.models.configuration import LanguageRecord, StyleRecord
from svg_output.models.render import RenderContext, RenderRequest, TextDirection

logger = LoggingConfig.get_logger(__name__)

T = TypeVar("T")


def _select(requested_id: int, table: Mapping[int, T], default_id: Optional[int]) -> Optional[T]:
    """Requested entry, else the configured default, else the lowest id, else None"""
    if requested_id and requested_id in table:
        return table[requested_id]
    if default_id is not None and default_id in table:
        return table[default_id]
    if table:
        return table[min(table)]
    return None


def deserialize_properties(blob: Optional[str]) -> Dict[str, Any]:
    """Decode a style properties blob; anything but a JSON object gives {}"""
    if not blob:
        return {}
    try:
        properties = json.loads(blob)
    except (TypeError, ValueError) as e:
        logger.warning("Style properties could not be decoded", extra={"error": str(e)})
        return {}
    if not isinstance(properties, dict):
        logger.warning(
            "Style properties are not an object",
            extra={"properties_type": type(properties).__name__}
        )
        return {}
    return properties


class ContextResolver:
    """Maps a RenderRequest onto the style and language tables"""

    def __init__(
        self,
        default_style_id: Optional[int] = None,
        default_language_id: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ):
        self.default_style_id = default_style_id
        self.default_language_id = default_language_id
        self.options = options or {}

    def resolve(
        self,
        req: RenderRequest,
        style_table: Mapping[int, StyleRecord],
        language_table: Mapping[int, LanguageRecord],
    ) -> RenderContext:
        style = _select(req.style_id, style_table, self.default_style_id)
        if style is not None:
            style_id = style.style_id
            style_last_modified = style.last_modified_date
            properties = deserialize_properties(style.properties)
        else:
            style_id = 0
            style_last_modified = 0
            properties = {}

        language = _select(req.language_id, language_table, self.default_language_id)
        if language is not None:
            language_id = language.language_id
            text_direction = language.text_direction
        else:
            language_id = 0
            text_direction = TextDirection.LTR

        if req.style_id and style_id != req.style_id:
            logger.debug("Requested style not found, using default",
                         extra={"requested_style_id": req.style_id, "resolved_style_id": style_id})
        if req.language_id and language_id != req.language_id:
            logger.debug("Requested language not found, using default",
                         extra={"requested_language_id": req.language_id, "resolved_language_id": language_id})

        return RenderContext(
            resolved_style_id=style_id,
            resolved_language_id=language_id,
            text_direction=text_direction,
            style_properties=properties,
            style_last_modified=style_last_modified,
            options=self.options,
        )

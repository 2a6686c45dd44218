"""
Turns raw request parameters into a RenderRequest
"""
import re
from typing import Any, Mapping

from svg_output.models.render import RenderRequest

# Leading integer, as in "12", " 7px", "-3abc"; ASCII digits only
_LEADING_INT = re.compile(r"^\s*([+-]?)([0-9]+)")

# Out-of-range values saturate to the 64-bit bounds
INT_MAX = 2 ** 63 - 1
INT_MIN = -(2 ** 63)
_MAX_DIGITS = len(str(INT_MAX))


def parse_int(value: Any) -> int:
    """
    Lenient integer parse: leading numeric prefix or 0, never raises

    Example:
        >>> parse_int("12abc"), parse_int("abc"), parse_int(None)
        (12, 0, 0)
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return INT_MIN if sign == "-" else INT_MAX
    number = -int(digits) if sign == "-" else int(digits)
    return max(INT_MIN, min(number, INT_MAX))


def _non_negative(value: Any) -> int:
    return max(parse_int(value), 0)


class InputResolver:
    """Parses the style, language, svg and d request parameters"""

    STYLE_PARAM = "style"
    LANGUAGE_PARAM = "language"
    SVG_PARAM = "svg"
    MODIFIED_PARAM = "d"

    def resolve(self, raw_params: Mapping[str, Any]) -> RenderRequest:
        """
        Build a RenderRequest from untrusted input

        Malformed numbers degrade to 0 and a missing svg parameter yields an
        empty resource name, so this never fails.
        """
        client_modified_at = 0
        raw_modified = raw_params.get(self.MODIFIED_PARAM)
        if raw_modified:
            client_modified_at = _non_negative(raw_modified)

        resource_name = raw_params.get(self.SVG_PARAM)

        return RenderRequest(
            style_id=_non_negative(raw_params.get(self.STYLE_PARAM)),
            language_id=_non_negative(raw_params.get(self.LANGUAGE_PARAM)),
            resource_name="" if resource_name is None else str(resource_name),
            client_modified_at=client_modified_at,
        )

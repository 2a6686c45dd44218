"""
Exception types raised by the SVG output service
"""
from typing import Any, Dict, Optional


class SvgOutputError(Exception):
    """Base class for service errors"""

    def __init__(self, message: str, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "message": self.message,
            "error_type": type(self).__name__,
            "metadata": self.metadata,
        }


class SvgRenderError(SvgOutputError):
    """The template engine could not produce the requested SVG"""


class ConfigurationError(SvgOutputError):
    """The style/language snapshot could not be loaded"""


class CacheStoreError(SvgOutputError):
    """A cache backend failed to read or write an entry"""

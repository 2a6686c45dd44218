"""
Value types flowing through the SVG request pipeline.

``RenderRequest`` is built once from untrusted input and frozen.
``RenderContext`` is derived from it on demand and never cached; only the
rendered bytes and their Last-Modified timestamp are stored, as a
``CacheEntry``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class TextDirection(str, Enum):
    """Direction text is laid out in"""
    LTR = "LTR"
    RTL = "RTL"


class GateDecision(str, Enum):
    """Outcome of the If-Modified-Since check"""
    RENDER = "render"
    NOT_MODIFIED = "not_modified"


class RenderRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    style_id: int = Field(default=0, ge=0, description="Requested style, 0 = default")
    language_id: int = Field(default=0, ge=0, description="Requested language, 0 = default")
    resource_name: str = Field(default="", description="SVG template name without extension")
    client_modified_at: int = Field(default=0, ge=0, description="Unix timestamp from the 'd' parameter")

    @property
    def is_empty(self) -> bool:
        return not self.resource_name.strip()


class RenderContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    resolved_style_id: int = 0
    resolved_language_id: int = 0
    text_direction: TextDirection = TextDirection.LTR
    style_properties: Dict[str, Any] = Field(default_factory=dict)
    style_last_modified: int = 0
    options: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_rtl(self) -> bool:
        return self.text_direction == TextDirection.RTL


class CacheEntry(BaseModel):
    """Rendered bytes plus the style timestamp needed for Last-Modified"""
    model_config = ConfigDict(frozen=True)

    content: bytes
    last_modified: int = 0


class RenderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes
    style_last_modified: int = 0
    cache_key: str
    from_cache: bool = False


class EmptyResult:
    """Sentinel for 'nothing to render' (blank resource name)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyResult()

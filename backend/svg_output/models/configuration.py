"""
Style and language tables, loaded once from a JSON snapshot
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from svg_output.core.exceptions import ConfigurationError
from svg_output.core.logging_config import LoggingConfig
from svg_output.models.render import TextDirection

logger = LoggingConfig.get_logger(__name__)


class StyleRecord(BaseModel):
    style_id: int = Field(..., ge=1)
    title: str = ""
    properties: str = Field(default="", description="Serialized JSON object of style properties")
    # 253402300799 == 9999-12-31T23:59:59Z, the last instant an HTTP-date can express
    last_modified_date: int = Field(default=0, ge=0, le=253402300799)

    @field_validator("properties", mode="before")
    @classmethod
    def serialize_properties(cls, v):
        """Accept an inline object and keep it in serialized form"""
        if isinstance(v, dict):
            return json.dumps(v)
        return v


class LanguageRecord(BaseModel):
    language_id: int = Field(..., ge=1)
    title: str = ""
    text_direction: TextDirection = TextDirection.LTR

    @field_validator("text_direction", mode="before")
    @classmethod
    def normalize_direction(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ConfigurationSnapshot(BaseModel):
    """Read-only view of the style and language tables"""

    styles: Dict[int, StyleRecord] = Field(default_factory=dict)
    languages: Dict[int, LanguageRecord] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_records(
        cls,
        styles: List[Union[StyleRecord, Dict[str, Any]]] = (),
        languages: List[Union[LanguageRecord, Dict[str, Any]]] = (),
        options: Dict[str, Any] = None,
    ) -> "ConfigurationSnapshot":
        """Build a snapshot from lists of records, keyed by id"""
        style_records = [s if isinstance(s, StyleRecord) else StyleRecord(**s) for s in styles]
        language_records = [
            lang if isinstance(lang, LanguageRecord) else LanguageRecord(**lang) for lang in languages
        ]
        return cls(
            styles={s.style_id: s for s in style_records},
            languages={lang.language_id: lang for lang in language_records},
            options=options or {},
        )


def load_snapshot(path: Union[str, Path]) -> ConfigurationSnapshot:
    """
    Load the style/language snapshot from a JSON file

    A missing file yields an empty snapshot so requests fall back to system
    defaults. A file that exists but cannot be parsed is a startup error.

    Args:
        path: JSON file with "styles", "languages" and "options" keys

    Returns:
        ConfigurationSnapshot
    """
    path = Path(path)
    if not path.exists():
        logger.warning(
            "Configuration snapshot not found, using defaults",
            extra={"snapshot_path": str(path)}
        )
        return ConfigurationSnapshot()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read configuration snapshot: {e}",
            metadata={"snapshot_path": str(path)}
        ) from e

    if not isinstance(raw, dict):
        raise ConfigurationError(
            "Configuration snapshot must be a JSON object",
            metadata={"snapshot_path": str(path)}
        )

    try:
        snapshot = ConfigurationSnapshot.from_records(
            styles=raw.get("styles", []),
            languages=raw.get("languages", []),
            options=raw.get("options", {}),
        )
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid configuration snapshot: {e}",
            metadata={"snapshot_path": str(path)}
        ) from e

    logger.info(
        "Configuration snapshot loaded",
        extra={
            "snapshot_path": str(path),
            "styles": len(snapshot.styles),
            "languages": len(snapshot.languages),
        }
    )
    return snapshot

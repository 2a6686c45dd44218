"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Keep test runs quiet and free of log files
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from svg_output.core.config import Settings
from svg_output.models.configuration import ConfigurationSnapshot
from svg_output.services.cache_store import MemoryCacheStore

TEMPLATES_DIR = backend_dir / "templates" / "svg"


@pytest.fixture
def snapshot() -> ConfigurationSnapshot:
    """Two styles and two languages; style 1 / language 1 are the lowest ids"""
    return ConfigurationSnapshot.from_records(
        styles=[
            {
                "style_id": 1,
                "last_modified_date": 1700000000,
                "properties": '{"primaryColor": "#2577b1", "icon": {"size": 24}}',
            },
            {
                "style_id": 2,
                "last_modified_date": 1710000000,
                "properties": '{"primaryColor": "#e0e0e0"}',
            },
        ],
        languages=[
            {"language_id": 1, "text_direction": "LTR"},
            {"language_id": 2, "text_direction": "RTL"},
        ],
        options={"boardTitle": "Test Board"},
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        templates_dir=str(TEMPLATES_DIR),
        config_snapshot_path=str(tmp_path / "missing.json"),
        cache_backend="memory",
        cache_dir=str(tmp_path / "cache"),
        enable_content_length=True,
        enable_gzip=False,
    )


@pytest.fixture
def cache_store() -> MemoryCacheStore:
    return MemoryCacheStore(max_items=16)


@pytest.fixture
def renderer() -> Mock:
    """Renderer double producing deterministic output per template and context"""
    fake = Mock()
    fake.render.side_effect = lambda name, context: (
        f'<svg data-name="{name}" data-style="{context.resolved_style_id}" '
        f'data-dir="{context.text_direction.value}"/>'
    ).encode("utf-8")
    return fake


@pytest.fixture
def app(settings, snapshot, cache_store, renderer):
    from svg_output.main import create_app
    return create_app(settings=settings, snapshot=snapshot, cache_store=cache_store, renderer=renderer)


@pytest.fixture
def client(app):
    """Create test client; server errors surface as 500 responses"""
    from fastapi.testclient import TestClient
    return TestClient(app, raise_server_exceptions=False)

"""
Wiring of the SVG pipeline components

Components are built once per application and exposed to routes through
FastAPI dependencies instead of module-level globals.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from svg_output.core.config import Settings
from svg_output.core.logging_config import LoggingConfig
from svg_output.core.templates import SvgRenderer
from svg_output.models.configuration import ConfigurationSnapshot, load_snapshot
from svg_output.services.cache_store import CacheStore, create_cache_store
from svg_output.services.conditional_gate import ConditionalGate
from svg_output.services.context_resolver import ContextResolver
from svg_output.services.input_resolver import InputResolver
from svg_output.services.render_pipeline import RenderPipeline
from svg_output.services.response_writer import ResponseWriter

logger = LoggingConfig.get_logger(__name__)


@dataclass
class SvgServices:
    input_resolver: InputResolver
    gate: ConditionalGate
    pipeline: RenderPipeline
    writer: ResponseWriter

    @property
    def snapshot(self) -> ConfigurationSnapshot:
        return self.pipeline.snapshot

    @property
    def cache_store(self) -> CacheStore:
        return self.pipeline.cache_store


def build_services(
    settings: Settings,
    snapshot: Optional[ConfigurationSnapshot] = None,
    cache_store: Optional[CacheStore] = None,
    renderer=None,
) -> SvgServices:
    """
    Assemble the pipeline from settings

    Any collaborator passed explicitly replaces the one settings would build.
    """
    if snapshot is None:
        snapshot = load_snapshot(settings.config_snapshot_path)
    if cache_store is None:
        cache_store = create_cache_store(settings)
    if renderer is None:
        renderer = SvgRenderer(settings.templates_dir)

    context_resolver = ContextResolver(
        default_style_id=settings.default_style_id,
        default_language_id=settings.default_language_id,
        options=snapshot.options,
    )
    pipeline = RenderPipeline(
        renderer=renderer,
        snapshot=snapshot,
        context_resolver=context_resolver,
        cache_store=cache_store,
    )
    logger.info(
        "SVG pipeline ready",
        extra={
            "cache_backend": cache_store.name,
            "templates_dir": str(settings.templates_dir),
        }
    )
    return SvgServices(
        input_resolver=InputResolver(),
        gate=ConditionalGate(),
        pipeline=pipeline,
        writer=ResponseWriter(
            expires_days=settings.expires_days,
            enable_content_length=settings.enable_content_length,
        ),
    )


def get_svg_services(request: Request) -> SvgServices:
    """FastAPI dependency returning the application's pipeline"""
    return request.app.state.svg_services

"""
Request-to-cached-artifact pipeline

Context resolution happens before the cache key is computed, so the key
reflects the resolved style, language and text direction: two requests that
fall back to the same default share one cache entry, and the cached entry
carries the style timestamp for Last-Modified on later hits.
"""
import hashlib
from typing import Union

from svg_output.core.exceptions import CacheStoreError
from svg_output.core.logging_config import LoggingConfig
from svg_output.models.configuration import ConfigurationSnapshot
from svg_output.models.render import (EMPTY, CacheEntry, EmptyResult,
                                      RenderContext, RenderRequest,
                                      RenderResult, TextDirection)
from svg_output.services.cache_store import CacheStore, NullCacheStore
from svg_output.services.context_resolver import ContextResolver

logger = LoggingConfig.get_logger(__name__)

CACHE_KEY_PREFIX = "svg_"
TEMPLATE_SUFFIX = ".svg"


def compute_cache_key(
    style_id: int,
    language_id: int,
    resource_name: str,
    client_modified_at: int,
    text_direction: TextDirection,
) -> str:
    """
    SHA-1 over the labelled fields, e.g.
    "style=2language=1svg=icon-arrowd=1700000000dir=LTR"
    """
    canonical = (
        f"style={style_id}"
        f"language={language_id}"
        f"svg={resource_name}"
        f"d={client_modified_at}"
        f"dir={TextDirection(text_direction).value}"
    )
    return CACHE_KEY_PREFIX + hashlib.sha1(canonical.encode("utf-8")).hexdigest()


class RenderPipeline:
    """Resolves context, consults the cache and renders on a miss"""

    def __init__(
        self,
        renderer,
        snapshot: ConfigurationSnapshot,
        context_resolver: ContextResolver,
        cache_store: CacheStore = None,
    ):
        self.renderer = renderer
        self.snapshot = snapshot
        self.context_resolver = context_resolver
        self.cache_store = cache_store or NullCacheStore()

    def resolve_context(self, req: RenderRequest) -> RenderContext:
        return self.context_resolver.resolve(req, self.snapshot.styles, self.snapshot.languages)

    def cache_key_for(self, req: RenderRequest, context: RenderContext) -> str:
        return compute_cache_key(
            context.resolved_style_id,
            context.resolved_language_id,
            req.resource_name,
            req.client_modified_at,
            context.text_direction,
        )

    def render(self, req: RenderRequest) -> Union[RenderResult, EmptyResult]:
        """
        Render the requested SVG, serving from cache when possible

        Returns:
            RenderResult, or EMPTY when the resource name is blank

        Raises:
            SvgRenderError: propagated from the renderer; nothing is cached
        """
        if req.is_empty:
            return EMPTY
        svg_name = req.resource_name.strip()

        context = self.resolve_context(req)
        cache_key = self.cache_key_for(req, context)

        cached = self._load_cached(cache_key)
        if cached is not None:
            logger.debug("SVG cache hit", extra={"cache_key": cache_key, "svg": svg_name})
            return RenderResult(
                content=cached.content,
                style_last_modified=cached.last_modified,
                cache_key=cache_key,
                from_cache=True,
            )

        logger.debug("SVG cache miss", extra={"cache_key": cache_key, "svg": svg_name})
        content = self.renderer.render(svg_name + TEMPLATE_SUFFIX, context)

        self._save_cached(cache_key, CacheEntry(content=content, last_modified=context.style_last_modified))

        return RenderResult(
            content=content,
            style_last_modified=context.style_last_modified,
            cache_key=cache_key,
            from_cache=False,
        )

    def _load_cached(self, cache_key: str):
        try:
            if not self.cache_store.exists(cache_key):
                return None
            return self.cache_store.load(cache_key)
        except CacheStoreError as e:
            logger.warning(
                "SVG cache unavailable, rendering without it",
                extra={"cache_key": cache_key, "error": e.message}
            )
            return None

    def _save_cached(self, cache_key: str, entry: CacheEntry) -> None:
        try:
            self.cache_store.save(cache_key, entry)
        except CacheStoreError as e:
            logger.warning(
                "Failed to store rendered SVG in cache",
                extra={"cache_key": cache_key, "error": e.message}
            )

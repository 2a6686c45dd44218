"""
Tests for RenderPipeline
"""
from unittest.mock import Mock

import pytest

from svg_output.core.exceptions import CacheStoreError, SvgRenderError
from svg_output.models.render import EMPTY, RenderRequest, RenderResult, TextDirection
from svg_output.services.cache_store import MemoryCacheStore, NullCacheStore
from svg_output.services.context_resolver import ContextResolver
from svg_output.services.render_pipeline import RenderPipeline, compute_cache_key


@pytest.fixture
def pipeline(renderer, snapshot, cache_store):
    return RenderPipeline(
        renderer=renderer,
        snapshot=snapshot,
        context_resolver=ContextResolver(),
        cache_store=cache_store,
    )


def test_cache_key_is_deterministic():
    first = compute_cache_key(1, 2, "icon-arrow", 1700000000, TextDirection.LTR)
    second = compute_cache_key(1, 2, "icon-arrow", 1700000000, TextDirection.LTR)

    assert first == second
    assert first.startswith("svg_")
    assert len(first) == len("svg_") + 40


@pytest.mark.parametrize(
    "fields",
    [
        (2, 2, "icon-arrow", 1700000000, TextDirection.LTR),
        (1, 3, "icon-arrow", 1700000000, TextDirection.LTR),
        (1, 2, "icon-arrow2", 1700000000, TextDirection.LTR),
        (1, 2, "icon-arrow", 1700000001, TextDirection.LTR),
        (1, 2, "icon-arrow", 1700000000, TextDirection.RTL),
        (12, 2, "icon-arrow", 1700000000, TextDirection.LTR),
    ],
)
def test_cache_key_changes_with_every_field(fields):
    base = compute_cache_key(1, 2, "icon-arrow", 1700000000, TextDirection.LTR)

    assert compute_cache_key(*fields) != base


def test_labelled_fields_avoid_concatenation_collisions():
    assert compute_cache_key(1, 12, "x", 0, "LTR") != compute_cache_key(11, 2, "x", 0, "LTR")


def test_blank_resource_returns_empty(pipeline, renderer, cache_store):
    for name in ("", "   "):
        assert pipeline.render(RenderRequest(resource_name=name)) is EMPTY

    renderer.render.assert_not_called()
    assert cache_store.get_stats()["cache_size"] == 0


def test_miss_renders_and_stores(pipeline, renderer, cache_store):
    result = pipeline.render(RenderRequest(resource_name="icon-arrow"))

    assert isinstance(result, RenderResult)
    assert result.from_cache is False
    assert result.style_last_modified == 1700000000
    renderer.render.assert_called_once()
    template_name, context = renderer.render.call_args.args
    assert template_name == "icon-arrow.svg"
    assert context.resolved_style_id == 1
    assert cache_store.exists(result.cache_key)
    assert cache_store.load(result.cache_key).last_modified == 1700000000


def test_hit_skips_renderer_and_keeps_last_modified(pipeline, renderer):
    req = RenderRequest(style_id=2, resource_name="icon-arrow")
    first = pipeline.render(req)
    second = pipeline.render(req)

    assert renderer.render.call_count == 1
    assert second.from_cache is True
    assert second.content == first.content
    assert second.cache_key == first.cache_key
    assert second.style_last_modified == 1710000000


def test_unknown_style_shares_default_cache_entry(pipeline, renderer):
    default = pipeline.render(RenderRequest(resource_name="icon-arrow"))
    fallback = pipeline.render(RenderRequest(style_id=999999, resource_name="icon-arrow"))

    assert fallback.cache_key == default.cache_key
    assert fallback.from_cache is True
    assert renderer.render.call_count == 1


def test_rendering_is_idempotent_without_cache(renderer, snapshot):
    pipeline = RenderPipeline(renderer, snapshot, ContextResolver(), NullCacheStore())
    req = RenderRequest(language_id=2, resource_name="logo")

    first = pipeline.render(req)
    second = pipeline.render(req)

    assert first.content == second.content
    assert renderer.render.call_count == 2


def test_text_direction_is_part_of_key(pipeline):
    ltr = pipeline.render(RenderRequest(language_id=1, resource_name="logo"))
    rtl = pipeline.render(RenderRequest(language_id=2, resource_name="logo"))

    assert ltr.cache_key != rtl.cache_key
    assert b'data-dir="RTL"' in rtl.content


def test_renderer_failure_propagates_and_caches_nothing(snapshot, cache_store):
    failing = Mock()
    failing.render.side_effect = SvgRenderError("template missing")
    pipeline = RenderPipeline(failing, snapshot, ContextResolver(), cache_store)

    with pytest.raises(SvgRenderError):
        pipeline.render(RenderRequest(resource_name="nope"))

    assert cache_store.get_stats()["cache_size"] == 0


def test_unavailable_cache_degrades_to_render(renderer, snapshot):
    broken = Mock(spec=MemoryCacheStore)
    broken.exists.side_effect = CacheStoreError("cache down")
    broken.save.side_effect = CacheStoreError("cache down")
    pipeline = RenderPipeline(renderer, snapshot, ContextResolver(), broken)

    result = pipeline.render(RenderRequest(resource_name="icon-arrow"))

    assert result.from_cache is False
    assert result.content.startswith(b"<svg")
    broken.save.assert_called_once()


def test_missing_cache_store_defaults_to_null(renderer, snapshot):
    pipeline = RenderPipeline(renderer, snapshot, ContextResolver())

    assert isinstance(pipeline.cache_store, NullCacheStore)

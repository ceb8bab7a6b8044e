# tests/unit/application/test_narrative_synthesis.py
from __future__ import annotations

import json
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

import pytest

from earnings_insight.application.services.narrative_synthesis import (
    NarrativeSynthesis,
    SynthesisState,
)
from earnings_insight.domain.exceptions.narrative import (
    NarrativeMalformed,
    NarrativeModelUnavailable,
)
from earnings_insight.infrastructure.caching.memory_cache import InMemoryTtlCache


def _parse(text: str) -> dict[str, Any]:
    payload = json.loads(text)
    if "answer" not in payload:
        raise NarrativeMalformed("missing answer")
    return payload


def _synthesis(cache: InMemoryTtlCache, model: Any) -> NarrativeSynthesis[dict[str, Any]]:
    def encode(value: dict[str, Any]) -> Mapping[str, Any]:
        return value

    return NarrativeSynthesis(
        key="summary:ACME",
        scope="aggregate",
        cache=cache,
        model=model,
        ttl_s=60,
        encode=encode,
        decode=dict,
    )


@pytest.mark.asyncio
async def test_success_is_fulfilled_and_cached(fx: SimpleNamespace) -> None:
    cache = InMemoryTtlCache()
    model = fx.FakeModel('{"answer": 42}')
    synthesis = _synthesis(cache, model)

    assert await synthesis.run("prompt", _parse) == {"answer": 42}
    assert synthesis.state is SynthesisState.FULFILLED
    assert model.prompts == ["prompt"]
    assert await cache.get_json("summary:ACME") == {"answer": 42}


@pytest.mark.asyncio
async def test_cache_hit_stays_idle_without_model_call(fx: SimpleNamespace) -> None:
    cache = InMemoryTtlCache()
    await cache.set_json("summary:ACME", {"answer": 1}, ttl=60)
    model = fx.FakeModel()
    synthesis = _synthesis(cache, model)

    assert await synthesis.run("prompt", _parse) == {"answer": 1}
    assert synthesis.state is SynthesisState.IDLE
    assert model.prompts == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [NarrativeModelUnavailable("Gemini error (429): quota"), '{"other": 1}'],
    ids=["transport", "malformed"],
)
async def test_failures_end_failed_and_are_not_cached(
    fx: SimpleNamespace, reply: object
) -> None:
    cache = InMemoryTtlCache()
    synthesis = _synthesis(cache, fx.FakeModel(reply))

    with pytest.raises((NarrativeModelUnavailable, NarrativeMalformed)):
        await synthesis.run("prompt", _parse)
    assert synthesis.state is SynthesisState.FAILED
    assert "summary:ACME" not in cache


@pytest.mark.asyncio
async def test_non_domain_parse_error_is_reported_as_malformed(fx: SimpleNamespace) -> None:
    synthesis = _synthesis(InMemoryTtlCache(), fx.FakeModel("not json"))
    with pytest.raises(NarrativeMalformed) as err:
        await synthesis.run("prompt", _parse)
    assert err.value.details["source"] == "model"
    assert synthesis.state is SynthesisState.FAILED


from unittest.mock import MagicMock

import pytest

from agents.institution_cache import InstitutionCache
from agents.strategy import first_non_empty


def _returning(value, calls):
    async def run():
        calls.append(value)
        return value
    return run


@pytest.mark.asyncio
async def test_first_non_empty_short_circuits():
    calls = []

    outcome = await first_non_empty([
        ("empty", _returning([], calls)),
        ("hit", _returning([1, 2], calls)),
        ("never", _returning([3], calls)),
    ])

    assert outcome.results == [1, 2]
    assert outcome.strategy == "hit"
    assert calls == [[], [1, 2]]


@pytest.mark.asyncio
async def test_first_non_empty_records_failures_and_continues():
    async def boom():
        raise RuntimeError("network down")

    outcome = await first_non_empty([("boom", boom), ("fallback", _returning(["x"], []))])

    assert outcome.results == ["x"]
    assert outcome.failures == ["boom: network down"]


@pytest.mark.asyncio
async def test_first_non_empty_all_empty():
    outcome = await first_non_empty([("a", _returning([], []))])
    assert outcome.results == []
    assert outcome.strategy is None


def test_institution_cache_hit_skips_lookup():
    cache = InstitutionCache()
    lookup = MagicMock(return_value="I123")

    assert cache.get_or_lookup("Stanford University", lookup) == "I123"
    assert cache.get_or_lookup("Stanford University", lookup) == "I123"

    lookup.assert_called_once_with("Stanford University")
    assert "Stanford University" in cache


def test_institution_cache_keys_on_exact_string():
    cache = InstitutionCache()
    lookup = MagicMock(side_effect=["I1", "I2"])

    cache.get_or_lookup("MIT", lookup)
    cache.get_or_lookup("mit", lookup)

    assert lookup.call_count == 2
    assert len(cache) == 2


def test_institution_cache_does_not_store_misses():
    cache = InstitutionCache()
    lookup = MagicMock(side_effect=[None, "I9"])

    assert cache.get_or_lookup("Nowhere", lookup) is None
    assert cache.get_or_lookup("Nowhere", lookup) == "I9"

    cache.clear()
    assert len(cache) == 0

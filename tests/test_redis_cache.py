"""
Tests for the Redis-backed irradiance cache.

Validates key naming, TTL on write, JSON round trip of NormalizedSolarData,
and that every Redis failure is swallowed (best-effort caching).

CHANGELOG:
- 2026-10-13: Initial creation (STORY-005)

TODO:
- None
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_solar_data
from solar_potential.cache.redis_client import RedisCacheStore


def _mock_redis_client(
    cached_value: str | bytes | None = None,
    get_side_effect: Exception | None = None,
    set_side_effect: Exception | None = None,
    keys: list[bytes] | None = None,
) -> AsyncMock:
    """Create a mock Redis client with configurable behaviour.

    Args:
        cached_value: Value to return from get(), or None for cache miss.
        get_side_effect: Exception to raise on get(), simulating Redis failure.
        set_side_effect: Exception to raise on set(), simulating Redis failure.
        keys: Keys yielded by scan_iter().

    Returns:
        AsyncMock: Configured mock Redis client.
    """
    mock = AsyncMock()
    if get_side_effect is not None:
        mock.get = AsyncMock(side_effect=get_side_effect)
    else:
        mock.get = AsyncMock(return_value=cached_value)
    if set_side_effect is not None:
        mock.set = AsyncMock(side_effect=set_side_effect)
    else:
        mock.set = AsyncMock()

    async def _scan_iter(match: str | None = None):
        for key in keys or []:
            yield key

    mock.scan_iter = MagicMock(side_effect=_scan_iter)
    mock.delete = AsyncMock()
    mock.aclose = AsyncMock()
    return mock


# ---------------------------------------------------------------------------
# get
# ---------------------------------------------------------------------------


class TestRedisCacheGet:
    """Reads decode JSON and fall back to None on any problem."""

    @pytest.mark.asyncio
    async def test_miss_returns_none(self) -> None:
        client = _mock_redis_client(cached_value=None)
        store = RedisCacheStore(client)

        assert await store.get(28.6139, 77.209) is None
        client.get.assert_awaited_once_with("solar_28.61_77.21")

    @pytest.mark.asyncio
    async def test_hit_returns_model(self) -> None:
        data = make_solar_data()
        client = _mock_redis_client(
            cached_value=data.model_dump_json(by_alias=True).encode()
        )
        store = RedisCacheStore(client)

        result = await store.get(28.6, 77.2)

        assert result == data
        assert (await store.stats()).hits == 1

    @pytest.mark.asyncio
    async def test_read_failure_returns_none(self) -> None:
        client = _mock_redis_client(get_side_effect=ConnectionError("down"))
        store = RedisCacheStore(client)

        assert await store.get(28.6, 77.2) is None

    @pytest.mark.asyncio
    async def test_corrupt_entry_returns_none(self) -> None:
        client = _mock_redis_client(cached_value=b'{"not": "solar data"}')
        store = RedisCacheStore(client)

        assert await store.get(28.6, 77.2) is None
        assert (await store.stats()).misses == 1


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


class TestRedisCacheSet:
    """Writes use SET with EX=ttl and never raise."""

    @pytest.mark.asyncio
    async def test_set_uses_ttl(self) -> None:
        client = _mock_redis_client()
        store = RedisCacheStore(client, ttl_s=86400)
        data = make_solar_data()

        assert await store.set(28.6, 77.2, data) is True

        client.set.assert_awaited_once()
        args, kwargs = client.set.call_args
        assert args[0] == "solar_28.60_77.20"
        assert '"averageDailyIrradiance":5.47' in args[1]
        assert kwargs["ex"] == 86400

    @pytest.mark.asyncio
    async def test_write_failure_returns_false(self) -> None:
        client = _mock_redis_client(set_side_effect=ConnectionError("down"))
        store = RedisCacheStore(client)

        assert await store.set(28.6, 77.2, make_solar_data()) is False


# ---------------------------------------------------------------------------
# clear / stats / close
# ---------------------------------------------------------------------------


class TestRedisCacheAdmin:
    """Administrative operations."""

    @pytest.mark.asyncio
    async def test_clear_deletes_prefixed_keys(self) -> None:
        client = _mock_redis_client(keys=[b"solar_1.00_1.00", b"solar_2.00_2.00"])
        store = RedisCacheStore(client)

        await store.clear()

        client.scan_iter.assert_called_once_with(match="solar_*")
        client.delete.assert_awaited_once_with(b"solar_1.00_1.00", b"solar_2.00_2.00")

    @pytest.mark.asyncio
    async def test_clear_with_no_keys_skips_delete(self) -> None:
        client = _mock_redis_client(keys=[])
        store = RedisCacheStore(client)

        await store.clear()

        client.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stats_counts_keys(self) -> None:
        client = _mock_redis_client(keys=[b"solar_1.00_1.00"])
        store = RedisCacheStore(client)

        stats = await store.stats()

        assert stats.keys == 1

    @pytest.mark.asyncio
    async def test_stats_key_count_failure(self) -> None:
        client = _mock_redis_client()
        client.scan_iter = MagicMock(side_effect=ConnectionError("down"))
        store = RedisCacheStore(client)

        stats = await store.stats()

        assert stats.keys == -1

    @pytest.mark.asyncio
    async def test_close_closes_client(self) -> None:
        client = _mock_redis_client()
        store = RedisCacheStore(client)

        await store.close()

        client.aclose.assert_awaited_once()

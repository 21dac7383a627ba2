"""Tests for latest-only page caches and the dashboard poller."""

import asyncio

import pytest

from propconnect_admin.services.view_state import LatestOnly, StatsPoller


class TestLatestOnly:
    @pytest.mark.asyncio
    async def test_stale_result_does_not_overwrite_newer(self):
        cache: LatestOnly[str] = LatestOnly("test")
        slow_started = asyncio.Event()
        release_slow = asyncio.Event()

        async def slow_fetch():
            slow_started.set()
            await release_slow.wait()
            return "stale"

        async def fast_fetch():
            return "fresh"

        slow = asyncio.create_task(cache.load(slow_fetch))
        await slow_started.wait()
        assert await cache.load(fast_fetch) == "fresh"

        release_slow.set()
        assert await slow == "stale"
        assert cache.value == "fresh"

    @pytest.mark.asyncio
    async def test_reset_invalidates_in_flight_load(self):
        cache: LatestOnly[str] = LatestOnly("test")
        release = asyncio.Event()

        async def fetch():
            await release.wait()
            return "old operator data"

        pending = asyncio.create_task(cache.load(fetch))
        await asyncio.sleep(0)
        cache.reset()
        release.set()
        await pending

        assert cache.value is None

    @pytest.mark.asyncio
    async def test_get_uses_cache_unless_refresh(self):
        cache: LatestOnly[int] = LatestOnly("test")
        calls = []

        async def fetch():
            calls.append(1)
            return len(calls)

        assert await cache.get(fetch) == 1
        assert await cache.get(fetch) == 1
        assert await cache.get(fetch, refresh=True) == 2


class TestStatsPoller:
    @pytest.mark.asyncio
    async def test_ticks_until_stopped(self):
        ticks = []

        async def tick():
            ticks.append(1)

        poller = StatsPoller(0.01, tick)
        poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()

        count = len(ticks)
        assert count >= 1
        assert not poller.running
        await asyncio.sleep(0.03)
        assert len(ticks) == count

    @pytest.mark.asyncio
    async def test_failing_tick_keeps_polling(self):
        ticks = []

        async def tick():
            ticks.append(1)
            raise RuntimeError("backend down")

        poller = StatsPoller(0.01, tick)
        poller.start()
        await asyncio.sleep(0.06)
        await poller.stop()

        assert len(ticks) >= 2

    @pytest.mark.asyncio
    async def test_zero_interval_disables(self):
        async def tick():
            raise AssertionError("should not run")

        poller = StatsPoller(0, tick)
        poller.start()
        assert not poller.running
        await poller.stop()

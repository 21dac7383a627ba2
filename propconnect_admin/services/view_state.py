"""Fetch ordering and background refresh of page data."""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class LatestOnly(Generic[T]):
    """
    Cache of one page's data where only the newest fetch may commit.

    Each `load()` takes a new generation number before awaiting its fetch. When the fetch
    completes, its result is stored only if no other load (or reset) started meanwhile; a
    stale result is still returned to its own caller but never overwrites newer data.
    """

    def __init__(self, name: str):
        self.name = name
        self._generation = 0
        self._value: T | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def value(self) -> T | None:
        return self._value

    async def load(self, fetch: Callable[[], Awaitable[T]]) -> T:
        self._generation += 1
        generation = self._generation
        result = await fetch()
        if generation == self._generation:
            self._value = result
        else:
            logger.debug(
                f"Discarding stale {self.name} result (generation {generation}, current {self._generation})."
            )
        return result

    async def get(self, fetch: Callable[[], Awaitable[T]], refresh: bool = False) -> T:
        """Return the cached value, fetching it first when missing or when `refresh` is set."""
        if refresh or self._value is None:
            return await self.load(fetch)
        return self._value

    def reset(self) -> None:
        """Forget the cached value and invalidate every in-flight load."""
        self._generation += 1
        self._value = None


class StatsPoller:
    """
    Periodically run `tick` on the event loop until stopped.

    A failing tick is logged and the loop carries on with the next interval.
    An interval of 0 or less disables the poller.
    """

    def __init__(self, interval: float, tick: Callable[[], Awaitable[None]]):
        self.interval = interval
        self._tick = tick
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.interval <= 0:
            logger.info("Dashboard refresh disabled.")
            return
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="dashboard-stats-poller")
        logger.info(f"Dashboard refresh every {self.interval:g}s.")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Dashboard refresh failed: {e}")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

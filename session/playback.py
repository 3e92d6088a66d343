"""
Map Playback - animate the choropleth through the years.

A single asyncio task ticks at a fixed interval, advances the context's map
year and awaits the same year-change handler a manual change goes through.
The handler is awaited inside the loop, so a slow render delays the next
tick instead of overlapping with it.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from config import config
from .context import ExplorerContext

logger = logging.getLogger(__name__)

TickHandler = Callable[[int], Union[None, Awaitable[None]]]


class Playback:
    """Start/stop controller for the map animation."""

    def __init__(self, ctx: ExplorerContext, on_tick: Optional[TickHandler] = None, interval: Optional[float] = None):
        self._ctx = ctx
        self._on_tick = on_tick
        self._interval = config.play_interval if interval is None else interval
        self._task: Optional[asyncio.Task] = None
        self.ticks = 0

    @property
    def is_playing(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Start ticking. Returns False if already playing."""
        if self.is_playing:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    async def stop(self) -> bool:
        """Cancel the animation and wait for it to finish. False if idle."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return False
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            year = self._ctx.next_map_year()
            self.ticks += 1
            if self._on_tick is None:
                continue
            try:
                result = self._on_tick(year)
                if inspect.isawaitable(result):
                    await result
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Playback render failed for {year}: {e}")

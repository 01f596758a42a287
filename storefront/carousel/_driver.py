"""
CarouselDriver — runs BannerCarousel.tick() on the event loop.

    driver = CarouselDriver(carousel, clock)
    driver.start()
    ...
    await driver.aclose()
"""

from __future__ import annotations

import asyncio
import logging

from storefront._types import Clock, Unsubscribe
from storefront.carousel._banner import BannerCarousel

logger = logging.getLogger(__name__)


class CarouselDriver:
    """
    Sleeps until the carousel's next deadline, then ticks it.

    Manual navigation moves the deadline, so every carousel change wakes
    the loop to recompute its sleep.
    """

    def __init__(self, carousel: BannerCarousel, clock: Clock) -> None:
        self._carousel = carousel
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._wake = asyncio.Event()
        self._unsubscribe: Unsubscribe | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._unsubscribe = self._carousel.subscribe(self._wake.set)
        self._task = asyncio.create_task(self._run())
        logger.debug("Carousel driver started")

    async def _run(self) -> None:
        while not self._carousel.closed:
            deadline = self._carousel.next_deadline()
            self._wake.clear()
            if deadline is None:
                await self._wake.wait()
                continue
            delay = max(0.0, deadline - self._clock.now()) / 1000.0
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=delay)
            except TimeoutError:
                self._carousel.tick()

    async def aclose(self) -> None:
        """Close the carousel and cancel the loop."""
        self._carousel.close()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.debug("Carousel driver stopped")


__all__ = ("CarouselDriver",)

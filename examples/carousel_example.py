"""
Carousel — banner auto-advance on the event loop.

Timings are shortened so the loop is visible in a second.

Run: python -m examples.carousel_example
"""

import asyncio

from storefront import MonotonicClock
from storefront.carousel import BannerCarousel, CarouselDriver
from examples._infra import banner, run

SLIDES = ("New arrivals", "Stock clearance", "Free shipping")


async def main() -> None:
    banner("Carousel: Auto-advance with Wrap")

    clock = MonotonicClock()
    carousel = BannerCarousel(len(SLIDES), clock, transition_ms=50, autoplay_ms=200)
    carousel.subscribe(
        lambda: print(
            f"   index={carousel.index:>2} showing={SLIDES[carousel.display_index]!r}"
            f"{' (moving)' if carousel.transitioning else ''}"
        )
    )

    driver = CarouselDriver(carousel, clock)
    driver.start()

    await asyncio.sleep(0.9)
    print("\n   manual prev():")
    carousel.prev()
    await asyncio.sleep(0.3)

    await driver.aclose()
    print("\nDone!")


if __name__ == "__main__":
    run(main)

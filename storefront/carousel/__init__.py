"""
Carousel — banner auto-advance and the related products scroller.

    from storefront import carousel

    banner = carousel.BannerCarousel(slide_count=3, clock=clock)
    driver = carousel.CarouselDriver(banner, clock)
    driver.start()
"""

from __future__ import annotations

from storefront.carousel._banner import (
    BannerCarousel,
    DEFAULT_TRANSITION_MS,
    DEFAULT_AUTOPLAY_MS,
)
from storefront.carousel._scroller import RelatedScroller
from storefront.carousel._driver import CarouselDriver

__all__ = (
    "BannerCarousel",
    "DEFAULT_TRANSITION_MS",
    "DEFAULT_AUTOPLAY_MS",
    "RelatedScroller",
    "CarouselDriver",
)

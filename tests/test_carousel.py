"""
Tests for BannerCarousel, CarouselDriver and RelatedScroller.
"""
from __future__ import annotations

import asyncio

import pytest

from storefront import MonotonicClock
from storefront.carousel import BannerCarousel, CarouselDriver, RelatedScroller


def settle(carousel: BannerCarousel, clock, ms: float = 500) -> None:
    clock.advance(ms)
    carousel.tick()


class TestBanner:
    def test_next_to_real_slide_is_not_fenced(self, clock):
        carousel = BannerCarousel(3, clock)

        assert carousel.next()
        assert carousel.index == 1
        assert not carousel.transitioning

        assert carousel.next()
        assert carousel.index == 2

    def test_wrap_position_fences_until_settle(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)
        carousel.prev()

        assert carousel.transitioning
        assert not carousel.next()
        assert not carousel.prev()

        clock.advance(499)
        carousel.tick()
        assert carousel.transitioning
        assert carousel.index == -1

        settle(carousel, clock, 1)
        assert not carousel.transitioning
        assert carousel.index == 2

    def test_five_nexts_with_three_slides_show_first(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)

        moved = [carousel.next() for _ in range(5)]

        assert moved == [True, True, True, False, False]
        assert carousel.index == 3
        assert carousel.display_index == 0

    @pytest.mark.parametrize("slides", [1, 2, 3, 5])
    def test_n_settled_nexts_loop_to_zero(self, clock, slides):
        carousel = BannerCarousel(slides, clock, autoplay_ms=None)

        for _ in range(slides):
            assert carousel.next()
            settle(carousel, clock)

        assert carousel.index == 0
        assert carousel.display_index == 0

    def test_wrap_forward_lands_on_clone_then_snaps(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)
        carousel.next()
        carousel.next()

        carousel.next()
        assert carousel.index == 3
        assert carousel.display_index == 0
        assert carousel.next_deadline() == 500

        settle(carousel, clock)
        assert carousel.index == 0

    def test_prev_from_first_wraps_to_last(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)

        carousel.prev()
        assert carousel.index == -1
        assert carousel.display_index == 2

        settle(carousel, clock)
        assert carousel.index == 2

    def test_go_to(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)

        assert carousel.go_to(2)
        assert not carousel.transitioning
        assert carousel.go_to(1)
        assert carousel.display_index == 1
        assert not carousel.go_to(1)

        with pytest.raises(IndexError):
            carousel.go_to(3)

    def test_go_to_during_wrap_cancels_snap(self, clock):
        carousel = BannerCarousel(3, clock, autoplay_ms=None)
        carousel.prev()

        assert carousel.go_to(0)
        assert carousel.index == 0
        assert not carousel.transitioning
        assert carousel.next_deadline() is None

        settle(carousel, clock)
        assert carousel.index == 0

    def test_autoplay_on_fixed_schedule(self, clock):
        carousel = BannerCarousel(3, clock)

        clock.advance(4999)
        carousel.tick()
        assert carousel.index == 0

        clock.advance(1)
        carousel.tick()
        assert carousel.index == 1

        clock.advance(5000)
        carousel.tick()
        assert carousel.index == 2

    def test_manual_navigation_does_not_reset_schedule(self, clock):
        carousel = BannerCarousel(3, clock)

        clock.advance(1000)
        carousel.next()

        clock.advance(4000)
        carousel.tick()
        assert carousel.index == 2

    def test_autoplay_dropped_during_transition(self, clock):
        carousel = BannerCarousel(3, clock)

        clock.advance(4800)
        carousel.prev()
        clock.advance(200)
        carousel.tick()
        assert carousel.index == -1

        clock.advance(300)
        carousel.tick()
        assert not carousel.transitioning
        assert carousel.index == 2
        assert carousel.next_deadline() == 10000

    def test_close_stops_everything(self, clock):
        carousel = BannerCarousel(3, clock)
        carousel.prev()
        carousel.close()

        settle(carousel, clock, 10_000)

        assert carousel.index == -1
        assert not carousel.next()
        assert not carousel.go_to(1)
        assert carousel.next_deadline() is None

    def test_needs_a_slide(self, clock):
        with pytest.raises(ValueError):
            BannerCarousel(0, clock)


class TestDriver:
    async def test_driver_settles_manual_navigation(self):
        carousel = BannerCarousel(3, MonotonicClock(), transition_ms=10, autoplay_ms=None)
        driver = CarouselDriver(carousel, MonotonicClock())
        driver.start()

        await asyncio.sleep(0)
        carousel.prev()
        assert carousel.transitioning
        await asyncio.sleep(0.1)

        assert not carousel.transitioning
        assert carousel.index == 2
        await driver.aclose()

    async def test_driver_autoplays(self):
        carousel = BannerCarousel(3, MonotonicClock(), transition_ms=5, autoplay_ms=20)
        driver = CarouselDriver(carousel, MonotonicClock())
        seen: list[int] = []
        carousel.subscribe(lambda: seen.append(carousel.index))
        driver.start()

        await asyncio.sleep(0.15)
        advanced = list(seen)
        await driver.aclose()

        assert advanced
        assert carousel.closed
        assert not driver.running


class TestRelatedScroller:
    def test_bounded_window(self):
        scroller = RelatedScroller(list(range(6)))

        assert scroller.visible_items() == (0, 1, 2)
        assert not scroller.can_prev
        assert [scroller.next() for _ in range(4)] == [True, True, True, False]
        assert scroller.index == 3
        assert scroller.visible_items() == (3, 4, 5)

        assert scroller.prev()
        assert scroller.index == 2

    def test_short_list_never_scrolls(self):
        scroller = RelatedScroller(["a", "b"])

        assert scroller.max_index == 0
        assert not scroller.next()
        assert not scroller.prev()
        assert scroller.visible_items() == ("a", "b")

    def test_reset_returns_to_start(self):
        scroller = RelatedScroller(list(range(6)))
        scroller.next()

        scroller.reset(list(range(4)))

        assert scroller.index == 0
        assert scroller.max_index == 1

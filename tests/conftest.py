from __future__ import annotations

import os
from typing import Any, Callable, List

import pytest

# Qt sin display (solo lo usan los tests de qt_host / qpath_render).
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from popover.core.models import ScreenRect, Size  # noqa: E402


class FakeMeasurementHost:
    def __init__(self, natural: Size = Size(0.0, 0.0)) -> None:
        self.natural = natural
        self.callbacks: List[Callable[[], None]] = []
        self.measure_calls = 0
        self.unsubscribe_calls = 0

    def measure_natural_size(self, content: Any) -> Size:
        self.measure_calls += 1
        return self.natural

    def on_natural_size_change(self, content: Any, callback: Callable[[], None]) -> Callable[[], None]:
        self.callbacks.append(callback)

        def unsubscribe() -> None:
            self.unsubscribe_calls += 1
            if callback in self.callbacks:
                self.callbacks.remove(callback)

        return unsubscribe

    def resize(self, width: float, height: float) -> None:
        self.natural = Size(float(width), float(height))
        for cb in list(self.callbacks):
            cb()


class FakeViewportHost:
    def __init__(self, rect: ScreenRect) -> None:
        self.rect = rect
        self.scroll_listeners: List[Callable[[], None]] = []
        self.resize_listeners: List[Callable[[], None]] = []
        self.rect_calls = 0

    def get_screen_rect(self, anchor: Any) -> ScreenRect:
        self.rect_calls += 1
        return self.rect

    def _subscribe(self, bucket: List[Callable[[], None]], callback: Callable[[], None]) -> Callable[[], None]:
        bucket.append(callback)

        def unsubscribe() -> None:
            if callback in bucket:
                bucket.remove(callback)

        return unsubscribe

    def on_scroll(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._subscribe(self.scroll_listeners, callback)

    def on_resize(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self._subscribe(self.resize_listeners, callback)

    def scroll_by(self, dy: float) -> None:
        r = self.rect
        self.rect = ScreenRect(top=r.top - dy, left=r.left, width=r.width, height=r.height)
        for cb in list(self.scroll_listeners):
            cb()

    def resize(self) -> None:
        for cb in list(self.resize_listeners):
            cb()

    @property
    def listener_count(self) -> int:
        return len(self.scroll_listeners) + len(self.resize_listeners)


def _drop_pvs_env() -> None:
    for key in [k for k in os.environ if k.startswith("PVS_")]:
        os.environ.pop(key, None)


@pytest.fixture(autouse=True)
def _clean_pvs_env():
    # apply_project_settings escribe os.environ directo: limpiar antes y después.
    _drop_pvs_env()
    yield
    _drop_pvs_env()


@pytest.fixture
def measurement_host() -> FakeMeasurementHost:
    return FakeMeasurementHost()


@pytest.fixture
def viewport() -> FakeViewportHost:
    return FakeViewportHost(ScreenRect(top=100.0, left=50.0, width=80.0, height=30.0))

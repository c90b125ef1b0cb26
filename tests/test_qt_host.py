from __future__ import annotations

import pytest

pytest.importorskip("PySide6")

from PySide6.QtWidgets import QApplication, QLabel, QScrollArea, QVBoxLayout, QWidget  # noqa: E402

from popover.core.models import ArrowAlign, Placement  # noqa: E402
from popover.geom.path_builder import build_outline  # noqa: E402
from popover.svg.qpath_render import outline_to_qpath, qcolor_from_rgba  # noqa: E402
from popover.ui.qt_host import PopoverWidget, QtMeasurementHost, QtViewportHost  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def test_outline_to_qpath_bounds():
    path = outline_to_qpath(build_outline(200, 120, 24, 48, 12, Placement.TOP, ArrowAlign.CENTER))
    r = path.boundingRect()
    assert r.x() == pytest.approx(0.0, abs=0.01)
    assert r.y() == pytest.approx(0.0, abs=0.01)
    assert r.width() == pytest.approx(200.0, abs=0.01)
    assert r.height() == pytest.approx(132.0, abs=0.01)

    shifted = outline_to_qpath(build_outline(200, 120, 24, 48, 12, Placement.TOP, ArrowAlign.CENTER), dx=5, dy=7)
    assert shifted.boundingRect().x() == pytest.approx(5.0, abs=0.01)


def test_qcolor_alpha():
    c = qcolor_from_rgba((250, 251, 252, 0.7))
    assert (c.red(), c.green(), c.blue(), c.alpha()) == (250, 251, 252, 178)


def test_measurement_host_uses_size_hint(qapp):
    label = QLabel("hola popover")
    size = QtMeasurementHost().measure_natural_size(label)
    hint = label.sizeHint()
    assert (size.width, size.height) == (float(hint.width()), float(hint.height()))


def test_popover_widget_explicit_size(qapp):
    content = QLabel("contenido")
    w = PopoverWidget(content, width=200, height=120, placement="top")
    try:
        assert (w.width(), w.height()) == (200, 132)
        g = content.geometry()
        assert (g.x(), g.y(), g.width(), g.height()) == (0, 12, 200, 120)
    finally:
        w.popover.close()


def test_popover_widget_auto_size_respects_min_body(qapp):
    w = PopoverWidget(QLabel("x"), placement="left")
    try:
        dims = w.popover.dimensions
        assert dims is not None
        assert dims.width >= 100 and dims.height >= 100
        assert w.width() == int(dims.width) + 12
    finally:
        w.popover.close()


def test_viewport_scroll_subscription(qapp):
    window = QWidget()
    layout = QVBoxLayout(window)
    area = QScrollArea()
    layout.addWidget(area)
    bar = area.verticalScrollBar()
    bar.setRange(0, 100)

    calls = []
    unsubscribe = QtViewportHost(window).on_scroll(lambda: calls.append(1))
    bar.setValue(10)
    assert calls

    unsubscribe()
    unsubscribe()
    n = len(calls)
    bar.setValue(20)
    assert len(calls) == n


def test_popover_widget_uses_far_shadow_of_theme(qapp):
    w = PopoverWidget(QLabel("x"), width=120, height=100, theme="dark")
    try:
        effect = w.graphicsEffect()
        assert effect.yOffset() == pytest.approx(8.0)
        assert effect.blurRadius() == pytest.approx(24.0)
        assert effect.color().alpha() == 51
    finally:
        w.popover.close()

# File: popover/ui/qt_host.py
# Project: PopoverShape (PVS)
# Version: 0.4.1
# Status: wip
# Date: 2026-10-16
# Purpose: Colaboradores Qt (medición + viewport) y widget que pinta el popover.
# Notes:
#   - El core no importa Qt; este módulo adapta QWidget a los protocolos de hosts.py.
#   - Bajas idempotentes: desconectar dos veces no hace nada.
#   - Scroll incluye cualquier QAbstractScrollArea dentro de la ventana (ancestros del anchor).
#   - Sombra: un QWidget admite un solo QGraphicsEffect, así que Qt pinta solo
#     shadow_far (la difusa). El SVG exportado lleva las dos (near + far).
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from PySide6.QtCore import QEvent, QObject, QPoint, Qt
from PySide6.QtGui import QPainter, QPen
from PySide6.QtWidgets import QAbstractScrollArea, QGraphicsDropShadowEffect, QWidget

from popover.core.hosts import Unsubscribe
from popover.core.models import ArrowAlign, GeometryConfig, Placement, Position, ScreenRect, Size, Theme
from popover.core.popover import Popover, RenderResult
from popover.svg.preview_style import style_for_theme
from popover.svg.qpath_render import outline_to_qpath, qcolor_from_rgba

log = logging.getLogger(__name__)


class _EventRelay(QObject):
    """Event filter que llama `callback` para ciertos tipos de evento (no los consume)."""

    def __init__(self, types: Iterable[QEvent.Type], callback: Callable[[], None], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._types = set(types)
        self._callback = callback

    def eventFilter(self, obj, event) -> bool:  # noqa: N802 (Qt API)
        if event.type() in self._types:
            self._callback()
        return False


def _install_relay(target: QObject, types: Iterable[QEvent.Type], callback: Callable[[], None]) -> Unsubscribe:
    relay = _EventRelay(types, callback)
    target.installEventFilter(relay)
    state = {"relay": relay}

    def unsubscribe() -> None:
        r = state.pop("relay", None)
        if r is None:
            return
        try:
            target.removeEventFilter(r)
        except RuntimeError:
            # El widget ya fue destruido por Qt: no queda nada que soltar.
            log.debug("removeEventFilter sobre objeto destruido", exc_info=True)
        r.deleteLater()

    return unsubscribe


class QtMeasurementHost:
    """Tamaño natural = sizeHint() del widget de contenido."""

    _NATURAL_SIZE_EVENTS = (
        QEvent.Type.LayoutRequest,
        QEvent.Type.FontChange,
        QEvent.Type.StyleChange,
        QEvent.Type.Polish,
    )

    def measure_natural_size(self, content: QWidget) -> Size:
        hint = content.sizeHint()
        if not hint.isValid():
            hint = content.minimumSizeHint()
        return Size(float(max(0, hint.width())), float(max(0, hint.height())))

    def on_natural_size_change(self, content: QWidget, callback: Callable[[], None]) -> Unsubscribe:
        return _install_relay(content, self._NATURAL_SIZE_EVENTS, callback)


class QtViewportHost:
    """Viewport = ventana top-level que contiene al anchor."""

    def __init__(self, window: QWidget) -> None:
        self._window = window

    def get_screen_rect(self, anchor: QWidget) -> ScreenRect:
        gp = anchor.mapToGlobal(QPoint(0, 0))
        return ScreenRect(top=float(gp.y()), left=float(gp.x()), width=float(anchor.width()), height=float(anchor.height()))

    def on_scroll(self, callback: Callable[[], None]) -> Unsubscribe:
        bars = []
        for area in self._window.findChildren(QAbstractScrollArea):
            bars.append(area.horizontalScrollBar())
            bars.append(area.verticalScrollBar())

        def slot(_value: int) -> None:
            callback()

        for sb in bars:
            sb.valueChanged.connect(slot)

        state = {"bars": bars}

        def unsubscribe() -> None:
            for sb in state.pop("bars", []):
                try:
                    sb.valueChanged.disconnect(slot)
                except (RuntimeError, TypeError):
                    log.debug("disconnect scroll sobre objeto destruido", exc_info=True)

        return unsubscribe

    def on_resize(self, callback: Callable[[], None]) -> Unsubscribe:
        return _install_relay(self._window, (QEvent.Type.Resize, QEvent.Type.Move), callback)


class PopoverWidget(QWidget):
    """Widget que pinta el outline y ubica el contenido en su content rect."""

    def __init__(
        self,
        content: QWidget,
        *,
        placement: Placement | str = Placement.TOP,
        arrow_align: ArrowAlign | str = ArrowAlign.CENTER,
        width: Optional[float] = None,
        height: Optional[float] = None,
        theme: Theme | str = Theme.LIGHT,
        config: Optional[GeometryConfig] = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self._content = content
        content.setParent(self)
        self._result: Optional[RenderResult] = None
        self._shadow = QGraphicsDropShadowEffect(self)
        self.setGraphicsEffect(self._shadow)

        self.popover = Popover(
            content,
            measurer=QtMeasurementHost(),
            placement=placement,
            arrow_align=arrow_align,
            width=width,
            height=height,
            theme=theme,
            config=config,
            on_render=self._apply_result,
        )
        self._apply_result(self.popover.render())

    # ------------------------------
    # Anclado
    # ------------------------------
    def show_anchored(self, anchor: QWidget, viewport: Any | None = None) -> Optional[Position]:
        """Muestra como ventana flotante junto a `anchor`."""
        self.setWindowFlags(Qt.WindowType.ToolTip | Qt.WindowType.FramelessWindowHint)
        vp = viewport or QtViewportHost(anchor.window())
        pos = self.popover.show(vp, anchor, on_position=self._move_to)
        self.show()
        return pos

    def hide_anchored(self) -> None:
        self.popover.hide()
        self.hide()

    def _move_to(self, pos: Position) -> None:
        self.move(int(round(pos.left)), int(round(pos.top)))

    # ------------------------------
    # Render
    # ------------------------------
    def _apply_result(self, result: RenderResult) -> None:
        self._result = result
        st = style_for_theme(self.popover.theme if hasattr(self, "popover") else Theme.LIGHT)
        # Solo shadow_far (ver Notes: un efecto por widget).
        self._shadow.setOffset(0, st.shadow_far.dy)
        self._shadow.setBlurRadius(st.shadow_far.std * 2)
        self._shadow.setColor(qcolor_from_rgba(st.shadow_far.color))

        if result.measuring:
            # Bootstrap: contenido montado pero invisible hasta tener medición.
            self._content.hide()
            self.update()
            return

        b = result.bounding
        c = result.content
        self.setFixedSize(int(round(b.width)), int(round(b.height)))
        self._content.setGeometry(int(round(c.x)), int(round(c.y)), int(round(c.width)), int(round(c.height)))
        self._content.show()
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802 (Qt API)  # pragma: no cover (UI)
        r = self._result
        if r is None or r.outline is None:
            return
        st = style_for_theme(self.popover.theme)
        path = outline_to_qpath(r.outline)
        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            p.fillPath(path, qcolor_from_rgba(st.fill))
            p.setClipPath(path)
            p.setPen(QPen(qcolor_from_rgba(st.stroke), st.stroke_width))
            p.drawPath(path)
        finally:
            p.end()

    def closeEvent(self, event) -> None:  # noqa: N802 (Qt API)  # pragma: no cover (UI)
        self.popover.close()
        super().closeEvent(event)

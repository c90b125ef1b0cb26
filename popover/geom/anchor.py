# File: popover/geom/anchor.py
# Project: PopoverShape (PVS)
# Version: 0.4.1
# Status: stable
# Date: 2026-10-15
# Purpose: Posición en pantalla del popover respecto de su anchor (+ ciclo de listeners).
# Notes:
#   - Sin auto-flip ni colisiones: la placement la elige el caller.
#   - Se recalcula (no se cachea) en cada scroll/resize mientras está visible.
#   - Listeners: se toman en show(), se sueltan en hide()/close() (también con `with`).
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from popover.core.hosts import SubscriptionGroup, ViewportHost
from popover.core.models import BodyDimensions, Placement, Position, ScreenRect
from popover.core.version import DEFAULT_ANCHOR_GAP, DEFAULT_ARROW_HEIGHT

log = logging.getLogger(__name__)


def compute_position(
    anchor: ScreenRect,
    placement: Placement,
    *,
    body_width: float,
    body_height: float,
    gap: float = DEFAULT_ANCHOR_GAP,
    arrow_height: float = DEFAULT_ARROW_HEIGHT,
) -> Position:
    """Top-left del bounding box del popover.

    El borde con flecha queda a `gap` del borde del anchor y el cuerpo se
    centra sobre el anchor en el eje perpendicular (el centrado usa el cuerpo,
    no el margen de la flecha).
    """
    placement = Placement(placement)
    total_w = body_width + arrow_height
    total_h = body_height + arrow_height

    if placement == Placement.TOP:
        top = anchor.bottom + gap
        left = anchor.left + anchor.width / 2.0 - body_width / 2.0
    elif placement == Placement.BOTTOM:
        top = anchor.top - gap - total_h
        left = anchor.left + anchor.width / 2.0 - body_width / 2.0
    elif placement == Placement.LEFT:
        top = anchor.top + anchor.height / 2.0 - body_height / 2.0
        left = anchor.right + gap
    else:
        top = anchor.top + anchor.height / 2.0 - body_height / 2.0
        left = anchor.left - gap - total_w

    return Position(top=float(top), left=float(left))


class AnchorPositioner:
    """Sigue al anchor mientras el popover está visible.

    `size_provider` devuelve las dims actuales del cuerpo (o None durante el
    bootstrap de auto-size: en ese caso no hay posición).
    """

    def __init__(
        self,
        viewport: ViewportHost,
        anchor: Any,
        *,
        placement: Placement = Placement.TOP,
        size_provider: Callable[[], Optional[BodyDimensions]],
        gap: float = DEFAULT_ANCHOR_GAP,
        arrow_height: float = DEFAULT_ARROW_HEIGHT,
        on_position: Optional[Callable[[Position], None]] = None,
    ) -> None:
        self._viewport = viewport
        self._anchor = anchor
        self._placement = Placement(placement)
        self._size_provider = size_provider
        self._gap = float(gap)
        self._arrow_height = float(arrow_height)
        self._on_position = on_position
        self._subs = SubscriptionGroup()
        self._visible = False
        self._position: Optional[Position] = None
        self.update_count = 0

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def position(self) -> Optional[Position]:
        return self._position

    @property
    def listener_count(self) -> int:
        return len(self._subs)

    def set_placement(self, placement: Placement) -> None:
        placement = Placement(placement)
        if placement == self._placement:
            return
        self._placement = placement
        self._position = None
        if self._visible:
            self.update()

    def show(self) -> Optional[Position]:
        if self._visible:
            return self.update()
        self._visible = True
        try:
            # scroll incluye regiones scrolleables ancestro (captura del host).
            self._subs.add(self._viewport.on_scroll(self._on_viewport_event), name="scroll")
            self._subs.add(self._viewport.on_resize(self._on_viewport_event), name="resize")
            return self.update()
        except BaseException:
            self.hide()
            raise

    def hide(self) -> None:
        if not self._visible and not len(self._subs):
            return
        self._visible = False
        self._position = None
        self._subs.release_all()

    def close(self) -> None:
        self.hide()

    def update(self) -> Optional[Position]:
        """Recalcula la posición ahora (también al cambiar el tamaño del contenido)."""
        if not self._visible:
            return None
        dims = self._size_provider()
        if dims is None:
            self._position = None
            return None
        rect = self._viewport.get_screen_rect(self._anchor)
        pos = compute_position(
            rect,
            self._placement,
            body_width=dims.width,
            body_height=dims.height,
            gap=self._gap,
            arrow_height=self._arrow_height,
        )
        self._position = pos
        self.update_count += 1
        log.debug("anchor position (%s): top=%s left=%s", self._placement.value, pos.top, pos.left)
        if self._on_position is not None:
            self._on_position(pos)
        return pos

    def _on_viewport_event(self) -> None:
        self.update()

    def __enter__(self) -> "AnchorPositioner":
        self.show()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

# File: popover/geom/autosize.py
# Project: PopoverShape (PVS)
# Version: 0.4.1
# Status: stable
# Date: 2026-10-15
# Purpose: Dimensiones del cuerpo: explícitas o medidas del contenido (auto-size).
# Notes:
#   - Por eje: explícito => tal cual; auto => max(ceil(natural), min_body).
#   - Dedupe: si la medición resuelve a las mismas dims, no se notifica nada.
#   - Bootstrap: eje auto sin medición => dimensions is None (no hay shape).
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Optional

from popover.core.hosts import MeasurementHost, Subscription
from popover.core.models import BodyDimensions, Size
from popover.core.version import DEFAULT_MIN_BODY

log = logging.getLogger(__name__)


def resolve_dimensions(
    width: Optional[float],
    height: Optional[float],
    measured: Optional[Size],
    *,
    min_body: float = DEFAULT_MIN_BODY,
) -> Optional[BodyDimensions]:
    """Resuelve las dims finales. None si falta la medición de un eje auto."""
    auto_w = width is None
    auto_h = height is None
    if (auto_w or auto_h) and measured is None:
        return None

    w = math.ceil(measured.width) if auto_w else width
    h = math.ceil(measured.height) if auto_h else height
    return BodyDimensions(width=float(max(w, min_body)), height=float(max(h, min_body)))


class AutoSizeEngine:
    """Mantiene las dims del cuerpo al día con el contenido.

    Solo se suscribe al host mientras algún eje esté en modo auto. Cada cambio
    efectivo de dims llama `on_change(dims)` de forma síncrona.
    """

    def __init__(
        self,
        host: Optional[MeasurementHost],
        content: Any = None,
        *,
        width: Optional[float] = None,
        height: Optional[float] = None,
        min_body: float = DEFAULT_MIN_BODY,
        on_change: Optional[Callable[[Optional[BodyDimensions]], None]] = None,
    ) -> None:
        self._host = host
        self._content = content
        self._width = width
        self._height = height
        self._min_body = float(min_body)
        self._on_change = on_change
        self._dims: Optional[BodyDimensions] = None
        self._last_natural: Optional[Size] = None
        self._sub = Subscription(None)
        self._closed = False
        self._apply()

    # ------------------------------
    # Estado
    # ------------------------------
    @property
    def auto_width(self) -> bool:
        return self._width is None

    @property
    def auto_height(self) -> bool:
        return self._height is None

    @property
    def needs_measurement(self) -> bool:
        return self.auto_width or self.auto_height

    @property
    def explicit_width(self) -> Optional[float]:
        return self._width

    @property
    def explicit_height(self) -> Optional[float]:
        return self._height

    @property
    def dimensions(self) -> Optional[BodyDimensions]:
        return self._dims

    @property
    def subscribed(self) -> bool:
        return self._sub.active

    # ------------------------------
    # Entradas
    # ------------------------------
    def set_explicit(self, width: Optional[float], height: Optional[float]) -> None:
        if width == self._width and height == self._height:
            return
        self._width = width
        self._height = height
        self._apply()

    def set_listener(self, on_change: Optional[Callable[[Optional[BodyDimensions]], None]]) -> None:
        self._on_change = on_change

    def set_min_body(self, min_body: float) -> None:
        if float(min_body) == self._min_body:
            return
        self._min_body = float(min_body)
        self._apply()

    def measure(self) -> bool:
        """Mide el contenido vía host. True si las dims cambiaron."""
        if self._closed or not self.needs_measurement or self._host is None:
            return False
        natural = self._host.measure_natural_size(self._content)
        return self.report_natural_size(natural)

    def report_natural_size(self, natural: Size) -> bool:
        """Entrada directa de una medición (hosts que empujan el tamaño)."""
        if self._closed:
            return False
        self._last_natural = natural
        return self._emit(resolve_dimensions(self._width, self._height, natural, min_body=self._min_body))

    def close(self) -> None:
        self._closed = True
        self._sub.release()

    # ------------------------------
    # Internos
    # ------------------------------
    def _apply(self) -> None:
        if self._closed:
            return
        if not self.needs_measurement:
            self._sub.release()
            self._emit(resolve_dimensions(self._width, self._height, None, min_body=self._min_body))
            return

        if self._host is not None and not self._sub.active:
            self._sub = Subscription(
                self._host.on_natural_size_change(self._content, self._on_natural_size_changed),
                name="natural-size",
            )

        if self._host is not None:
            self.measure()
        elif self._last_natural is not None:
            self.report_natural_size(self._last_natural)
        else:
            self._emit(None)

    def _on_natural_size_changed(self) -> None:
        self.measure()

    def _emit(self, dims: Optional[BodyDimensions]) -> bool:
        if dims == self._dims:
            return False
        log.debug("autosize: %s -> %s", self._dims, dims)
        self._dims = dims
        if self._on_change is not None:
            self._on_change(dims)
        return True

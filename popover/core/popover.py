# File: popover/core/popover.py
# Project: PopoverShape (PVS)
# Version: 0.4.2
# Status: stable
# Date: 2026-10-16
# Purpose: Instancia de popover: orquesta auto-size -> outline -> content frame -> anchor.
# Notes:
#   - Todo es síncrono; cada evento recalcula en el momento (sin debounce).
#   - Scroll/resize solo mueven (AnchorPositioner); nunca reconstruyen el outline.
#   - El id de instancia se asigna una vez y no cambia (scope de ids SVG).
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from popover.core.hosts import MeasurementHost, ViewportHost
from popover.core.models import (
    ArrowAlign,
    BodyDimensions,
    ContentRect,
    GeometryConfig,
    Placement,
    Position,
    Size,
    Theme,
    coerce_arrow_align,
    coerce_placement,
    coerce_theme,
)
from popover.geom.anchor import AnchorPositioner
from popover.geom.autosize import AutoSizeEngine
from popover.geom.content_frame import content_rect
from popover.geom.outline import PathOutline
from popover.geom.path_builder import bounding_size, build_outline_for

log = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True)
class RenderResult:
    """Lo que se entrega al colaborador de render en cada pass.

    Si `visible` es False estamos en bootstrap de auto-size: no hay outline ni
    superficie visible; el host solo monta el contenido oculto para medirlo.
    """

    instance_id: str
    placement: Placement
    arrow_align: ArrowAlign
    dimensions: Optional[BodyDimensions] = None
    outline: Optional[PathOutline] = None
    content: Optional[ContentRect] = None
    bounding: Optional[Size] = None

    @property
    def visible(self) -> bool:
        return self.outline is not None

    @property
    def measuring(self) -> bool:
        return self.outline is None

    @property
    def filter_id(self) -> str:
        return f"pf-{self.instance_id}"

    @property
    def clip_id(self) -> str:
        return f"pc-{self.instance_id}"


class Popover:
    """Burbuja con flecha, auto-size opcional y anclaje opcional."""

    def __init__(
        self,
        content: Any = None,
        *,
        measurer: Optional[MeasurementHost] = None,
        placement: Placement | str = Placement.TOP,
        arrow_align: ArrowAlign | str = ArrowAlign.CENTER,
        width: Optional[float] = None,
        height: Optional[float] = None,
        theme: Theme | str = Theme.LIGHT,
        config: Optional[GeometryConfig] = None,
        instance_id: Optional[str] = None,
        on_render: Optional[Callable[[RenderResult], None]] = None,
    ) -> None:
        self._id = str(instance_id) if instance_id else uuid.uuid4().hex[:8]
        self._config = config or GeometryConfig()
        self._placement = coerce_placement(placement)
        self._arrow_align = coerce_arrow_align(arrow_align)
        self._theme = coerce_theme(theme)
        self._on_render = on_render
        self._positioner: Optional[AnchorPositioner] = None
        self._closed = False
        self.rebuild_count = 0
        self._result = RenderResult(self._id, self._placement, self._arrow_align)

        # El engine resuelve/mide ya en su constructor; el primer build va explícito.
        self._engine = AutoSizeEngine(
            measurer,
            content,
            width=width,
            height=height,
            min_body=self._config.min_body,
        )
        self._engine.set_listener(self._on_dimensions)
        if self._engine.dimensions is not None:
            self._rebuild()

    # ------------------------------
    # Estado
    # ------------------------------
    @property
    def instance_id(self) -> str:
        return self._id

    @property
    def config(self) -> GeometryConfig:
        return self._config

    @property
    def placement(self) -> Placement:
        return self._placement

    @property
    def arrow_align(self) -> ArrowAlign:
        return self._arrow_align

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def dimensions(self) -> Optional[BodyDimensions]:
        return self._engine.dimensions

    @property
    def shown(self) -> bool:
        return self._positioner is not None and self._positioner.visible

    @property
    def position(self) -> Optional[Position]:
        return self._positioner.position if self._positioner is not None else None

    def render(self) -> RenderResult:
        return self._result

    # ------------------------------
    # Cambios del caller (props)
    # ------------------------------
    def configure(
        self,
        *,
        placement: Any = _UNSET,
        arrow_align: Any = _UNSET,
        width: Any = _UNSET,
        height: Any = _UNSET,
        theme: Any = _UNSET,
    ) -> RenderResult:
        """Aplica cambios de props y recalcula solo lo que depende de ellas."""
        geometry_dirty = False

        if placement is not _UNSET:
            p = coerce_placement(placement, self._placement)
            if p != self._placement:
                self._placement = p
                geometry_dirty = True
                if self._positioner is not None:
                    self._positioner.set_placement(p)

        if arrow_align is not _UNSET:
            a = coerce_arrow_align(arrow_align, self._arrow_align)
            if a != self._arrow_align:
                self._arrow_align = a
                geometry_dirty = True

        if theme is not _UNSET:
            t = coerce_theme(theme, self._theme)
            if t != self._theme:
                # Solo colores: el outline no cambia.
                self._theme = t
                self._notify()

        if width is not _UNSET or height is not _UNSET:
            w = self._engine.explicit_width if width is _UNSET else width
            h = self._engine.explicit_height if height is _UNSET else height
            dims_before = self._engine.dimensions
            auto_before = (self._engine.auto_width, self._engine.auto_height)
            self._engine.set_explicit(w, h)
            if self._engine.dimensions != dims_before:
                # _on_dimensions ya reconstruyó con la placement/align nuevas.
                geometry_dirty = False
            elif (self._engine.auto_width, self._engine.auto_height) != auto_before:
                # Mismas dims pero cambió el modo de un eje: el ContentRect lleva los flags.
                geometry_dirty = True

        if geometry_dirty:
            self._rebuild()
        return self._result

    def measure(self) -> bool:
        """Fuerza una medición del contenido (True si cambió el tamaño)."""
        return self._engine.measure()

    def report_natural_size(self, natural: Size) -> bool:
        return self._engine.report_natural_size(natural)

    # ------------------------------
    # Anclaje (show/hide)
    # ------------------------------
    def show(
        self,
        viewport: ViewportHost,
        anchor: Any,
        *,
        on_position: Optional[Callable[[Position], None]] = None,
    ) -> Optional[Position]:
        """Muestra anclado: toma listeners de scroll/resize y posiciona ya.

        Cerrada la instancia no hay nada que mostrar: devuelve None sin suscribir.
        """
        if self._closed:
            log.debug("popover %s: show() tras close(), ignorado", self._id)
            return None
        if self._positioner is not None:
            self._positioner.hide()
        self._positioner = AnchorPositioner(
            viewport,
            anchor,
            placement=self._placement,
            size_provider=lambda: self._engine.dimensions,
            gap=self._config.gap,
            arrow_height=self._config.arrow_height,
            on_position=on_position,
        )
        return self._positioner.show()

    def hide(self) -> None:
        if self._positioner is None:
            return
        positioner, self._positioner = self._positioner, None
        positioner.hide()

    def close(self) -> None:
        # hide() siempre: close() repetido no puede dejar listeners vivos.
        try:
            self.hide()
        finally:
            if not self._closed:
                self._closed = True
                self._engine.close()

    def __enter__(self) -> "Popover":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------
    # Internos
    # ------------------------------
    def _on_dimensions(self, dims: Optional[BodyDimensions]) -> None:
        self._rebuild()
        if self._positioner is not None and self._positioner.visible:
            self._positioner.update()

    def _rebuild(self) -> None:
        dims = self._engine.dimensions
        if dims is None:
            self._result = RenderResult(self._id, self._placement, self._arrow_align)
            self._notify()
            return

        cfg = self._config
        outline = build_outline_for(dims, cfg, self._placement, self._arrow_align)
        frame = content_rect(
            dims.width,
            dims.height,
            self._placement,
            cfg.arrow_height,
            auto_width=self._engine.auto_width,
            auto_height=self._engine.auto_height,
        )
        self._result = RenderResult(
            instance_id=self._id,
            placement=self._placement,
            arrow_align=self._arrow_align,
            dimensions=dims,
            outline=outline,
            content=frame,
            bounding=bounding_size(dims.width, dims.height, cfg.arrow_height, self._placement),
        )
        self.rebuild_count += 1
        log.debug("popover %s rebuild #%d (%sx%s)", self._id, self.rebuild_count, dims.width, dims.height)
        self._notify()

    def _notify(self) -> None:
        if self._on_render is not None:
            self._on_render(self._result)

# File: popover/geom/path_builder.py
# Project: PopoverShape (PVS)
# Version: 0.4.1
# Status: stable
# Date: 2026-10-15
# Purpose: Outline cerrado del popover: cuerpo redondeado + flecha fusionada en un borde.
# Notes:
#   - Función pura: mismos inputs => mismo PathOutline (sin estado oculto).
#   - Precondición (NO se valida ni se clampa): arrow_width <= borde - 2 * radio.
#     Si no se cumple, la flecha se solapa con las esquinas; no hay error.
#   - Esquinas como cuadráticas (Q), flecha como cúbicas (C).
from __future__ import annotations

import logging
from typing import Tuple

from popover.core.models import ArrowAlign, BodyDimensions, GeometryConfig, Placement, Size
from popover.geom.arrow_curve import ARROW_CURVE, ArrowCurve, ArrowDirection
from popover.geom.outline import Close, CubicTo, LineTo, MoveTo, PathCommand, PathOutline, QuadTo

log = logging.getLogger(__name__)

Point = Tuple[float, float]


def clamp_radius(r: float, w: float, h: float) -> float:
    """Radio efectivo: nunca mayor que medio lado."""
    return float(min(r, w / 2.0, h / 2.0))


def body_offset(placement: Placement, arrow_h: float) -> Tuple[float, float]:
    """Offset (bx, by) del cuerpo dentro del bounding box.

    La flecha de top/left necesita margen antes del cuerpo; bottom/right lo
    tienen después, así que el cuerpo arranca en 0.
    """
    if placement == Placement.TOP:
        return 0.0, float(arrow_h)
    if placement == Placement.LEFT:
        return float(arrow_h), 0.0
    return 0.0, 0.0


def bounding_size(w: float, h: float, arrow_h: float, placement: Placement) -> Size:
    """Cuerpo + margen de flecha en el eje de la placement."""
    if placement.is_vertical:
        return Size(float(w), float(h + arrow_h))
    return Size(float(w + arrow_h), float(h))


def arrow_center(
    w: float,
    h: float,
    rr: float,
    arrow_w: float,
    placement: Placement,
    align: ArrowAlign,
    bx: float,
    by: float,
) -> float:
    """Coordenada del centro de la flecha sobre el eje de su borde."""
    if placement.is_vertical:
        origin, length = bx, w
    else:
        origin, length = by, h

    if align == ArrowAlign.START:
        return float(origin + rr + arrow_w / 2.0)
    if align == ArrowAlign.END:
        return float(origin + length - rr - arrow_w / 2.0)
    return float(origin + length / 2.0)


def map_local_to_placement(
    point: Point,
    placement: Placement,
    center: float,
    *,
    bx: float,
    by: float,
    w: float,
    h: float,
    half_width: float,
) -> Point:
    """Mapea un punto del frame local de la flecha al sistema del outline.

    x local se re-centra (x - half_width) y corre a lo largo del borde;
    y local se proyecta hacia afuera del cuerpo.
    """
    x, y = point
    cx = x - half_width
    if placement == Placement.TOP:
        return (center + cx, by - y)
    if placement == Placement.BOTTOM:
        return (center + cx, by + h + y)
    if placement == Placement.LEFT:
        return (bx - y, center + cx)
    return (bx + w + y, center + cx)


def _direction_for(placement: Placement) -> ArrowDirection:
    # Winding horario: top va de izq. a der. y right de arriba a abajo (LTR local);
    # bottom y left se recorren al revés (RTL, orden de la tabla).
    if placement in (Placement.TOP, Placement.RIGHT):
        return ArrowDirection.LTR
    return ArrowDirection.RTL


def _arrow_commands(
    curve: ArrowCurve,
    placement: Placement,
    center: float,
    *,
    bx: float,
    by: float,
    w: float,
    h: float,
    arrow_w: float,
    arrow_h: float,
) -> list[PathCommand]:
    sx = arrow_w / curve.width
    sy = arrow_h / curve.height
    half = arrow_w / 2.0

    def tx(p: Point) -> Point:
        return map_local_to_placement(
            (p[0] * sx, p[1] * sy), placement, center, bx=bx, by=by, w=w, h=h, half_width=half
        )

    direction = _direction_for(placement)
    out: list[PathCommand] = [LineTo(tx(curve.entry_point(direction)))]
    for seg in curve.traverse(direction):
        out.append(CubicTo(tx(seg.cp1), tx(seg.cp2), tx(seg.to)))
    return out


def build_outline(
    w: float,
    h: float,
    r: float,
    arrow_w: float,
    arrow_h: float,
    placement: Placement,
    align: ArrowAlign,
    *,
    curve: ArrowCurve = ARROW_CURVE,
) -> PathOutline:
    """Construye el outline cerrado (cuerpo redondeado + flecha).

    Recorrido fijo en sentido horario desde la salida del arco superior
    izquierdo: top -> esquina TR -> right -> BR -> bottom -> BL -> left -> TL.
    En el borde de `placement` se dibuja recto hasta el flanco cercano, se
    inserta la flecha y se sigue desde el flanco lejano.
    """
    placement = Placement(placement)
    align = ArrowAlign(align)

    rr = clamp_radius(r, w, h)
    bx, by = body_offset(placement, arrow_h)
    center = arrow_center(w, h, rr, arrow_w, placement, align, bx, by)
    right = bx + w
    bottom = by + h

    def arrow_on(edge: Placement) -> list[PathCommand]:
        if edge != placement:
            return []
        return _arrow_commands(
            curve, placement, center, bx=bx, by=by, w=w, h=h, arrow_w=arrow_w, arrow_h=arrow_h
        )

    cmds: list[PathCommand] = [MoveTo((bx + rr, by))]

    cmds += arrow_on(Placement.TOP)
    cmds.append(LineTo((right - rr, by)))
    cmds.append(QuadTo((right, by), (right, by + rr)))

    cmds += arrow_on(Placement.RIGHT)
    cmds.append(LineTo((right, bottom - rr)))
    cmds.append(QuadTo((right, bottom), (right - rr, bottom)))

    cmds += arrow_on(Placement.BOTTOM)
    cmds.append(LineTo((bx + rr, bottom)))
    cmds.append(QuadTo((bx, bottom), (bx, bottom - rr)))

    cmds += arrow_on(Placement.LEFT)
    cmds.append(LineTo((bx, by + rr)))
    cmds.append(QuadTo((bx, by), (bx + rr, by)))

    cmds.append(Close())
    return PathOutline(tuple(cmds))


def build_outline_for(
    dims: BodyDimensions,
    config: GeometryConfig,
    placement: Placement,
    align: ArrowAlign,
) -> PathOutline:
    """Atajo con GeometryConfig (radio y flecha desde la config)."""
    log.debug(
        "build_outline %sx%s placement=%s align=%s",
        dims.width,
        dims.height,
        Placement(placement).value,
        ArrowAlign(align).value,
    )
    return build_outline(
        dims.width,
        dims.height,
        config.radius,
        config.arrow_width,
        config.arrow_height,
        placement,
        align,
    )

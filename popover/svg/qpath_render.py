# File: popover/svg/qpath_render.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-15
# Purpose: PathOutline -> QPainterPath (fill, stroke y clip en Qt).
# Notes:
#   - Conversión directa de comandos (sin QtSvg ni re-parseo del atributo d).
#   - QPainterPath no necesita QApplication: se puede usar en tests sin display.
from __future__ import annotations

from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor, QPainterPath

from popover.geom.outline import Close, CubicTo, LineTo, MoveTo, PathOutline, QuadTo
from popover.svg.preview_style import Rgba


def outline_to_qpath(outline: PathOutline, *, dx: float = 0.0, dy: float = 0.0) -> QPainterPath:
    """Convierte el outline a QPainterPath (opcionalmente desplazado)."""
    q = QPainterPath()

    def pt(p) -> QPointF:
        return QPointF(float(p[0]) + dx, float(p[1]) + dy)

    for c in outline:
        if isinstance(c, MoveTo):
            q.moveTo(pt(c.to))
        elif isinstance(c, LineTo):
            q.lineTo(pt(c.to))
        elif isinstance(c, QuadTo):
            q.quadTo(pt(c.ctrl), pt(c.to))
        elif isinstance(c, CubicTo):
            q.cubicTo(pt(c.cp1), pt(c.cp2), pt(c.to))
        elif isinstance(c, Close):
            q.closeSubpath()
    return q


def qcolor_from_rgba(c: Rgba) -> QColor:
    r, g, b, a = c
    return QColor(int(r), int(g), int(b), int(round(max(0.0, min(1.0, float(a))) * 255)))

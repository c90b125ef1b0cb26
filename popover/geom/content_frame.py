# File: popover/geom/content_frame.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-14
# Purpose: Rect del contenido dentro del bounding box (deja libre el margen de flecha).
# Notes: El tamaño es siempre el del cuerpo (w, h); solo cambia el offset.
from __future__ import annotations

from popover.core.models import ContentRect, Placement


def content_rect(
    w: float,
    h: float,
    placement: Placement,
    arrow_h: float,
    *,
    auto_width: bool = False,
    auto_height: bool = False,
) -> ContentRect:
    """Ubica el contenido pegado a los bordes que no lindan con la flecha.

    - top: abajo-izquierda (margen arriba).
    - bottom: arriba-izquierda (margen abajo).
    - left: arriba-derecha (margen a la izquierda).
    - right: arriba-izquierda (margen a la derecha).
    """
    placement = Placement(placement)
    x = 0.0
    y = 0.0
    if placement == Placement.TOP:
        y = float(arrow_h)
    elif placement == Placement.LEFT:
        x = float(arrow_h)

    return ContentRect(
        x=x,
        y=y,
        width=float(w),
        height=float(h),
        auto_width=bool(auto_width),
        auto_height=bool(auto_height),
    )

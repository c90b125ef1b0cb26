# File: popover/svg/preview_style.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-15
# Purpose: Paleta por tema (relleno, trazo, sombras) compartida por SVG y Qt.
# Notes: El tema nunca cambia geometría; solo estos colores.
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from popover.core.models import Theme, coerce_theme
from popover.geom.outline import fmt_num

Rgba = Tuple[int, int, int, float]  # r,g,b 0..255 + alpha 0..1


@dataclass(frozen=True)
class DropShadow:
    dy: float
    std: float
    color: Rgba


@dataclass(frozen=True)
class PopoverStyle:
    fill: Rgba
    stroke: Rgba
    stroke_width: float
    # Orden de dibujo: near (chica, pegada) y luego far (difusa).
    shadow_near: DropShadow
    shadow_far: DropShadow


_LIGHT = PopoverStyle(
    fill=(250, 251, 252, 0.7),
    stroke=(255, 255, 255, 0.5),
    stroke_width=2.0,
    shadow_near=DropShadow(dy=0.0, std=2.0, color=(0, 0, 0, 0.04)),
    shadow_far=DropShadow(dy=6.0, std=10.0, color=(0, 0, 0, 0.06)),
)

_DARK = PopoverStyle(
    fill=(43, 47, 51, 0.7),
    stroke=(255, 255, 255, 0.06),
    stroke_width=2.0,
    shadow_near=DropShadow(dy=0.0, std=4.0, color=(0, 0, 0, 0.08)),
    shadow_far=DropShadow(dy=8.0, std=12.0, color=(0, 0, 0, 0.20)),
)


def style_for_theme(theme: Theme | str) -> PopoverStyle:
    return _DARK if coerce_theme(theme) == Theme.DARK else _LIGHT


def css_rgba(c: Rgba) -> str:
    r, g, b, a = c
    return f"rgba({int(r)},{int(g)},{int(b)},{fmt_num(a)})"

# File: popover/core/models.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-14
# Purpose: Modelo de datos del popover (enums, rects, config de geometría).
# Notes: Todo es inmutable; se recalcula por render pass, nada se persiste.
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from popover.core.version import (
    DEFAULT_ANCHOR_GAP,
    DEFAULT_ARROW_HEIGHT,
    DEFAULT_ARROW_WIDTH,
    DEFAULT_MIN_BODY,
    DEFAULT_RADIUS,
)
from popover.utils.errors import PvsValidationError


class Placement(str, Enum):
    """Borde del cuerpo del que sale la flecha.

    En uso anclado también indica de qué lado del anchor se dibuja la burbuja:
    - top: flecha arriba, la burbuja queda debajo del anchor.
    - bottom: flecha abajo, la burbuja queda encima del anchor.
    - left: flecha a la izquierda, la burbuja queda a la derecha.
    - right: flecha a la derecha, la burbuja queda a la izquierda.
    """

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_vertical(self) -> bool:
        """True si la flecha sale de un borde horizontal (top/bottom)."""
        return self in (Placement.TOP, Placement.BOTTOM)


class ArrowAlign(str, Enum):
    """Posición de la flecha a lo largo de su borde."""

    START = "start"
    CENTER = "center"
    END = "end"


class Theme(str, Enum):
    """Tema visual. Solo afecta colores (relleno/trazo/sombras), nunca geometría."""

    LIGHT = "light"
    DARK = "dark"


def _coerce_enum(enum_cls, v: object, default):
    try:
        s = str(getattr(v, "value", v) or "").strip().lower()
        for m in enum_cls:
            if m.value == s:
                return m
    except Exception:
        pass
    return default


def coerce_placement(v: object, default: Placement = Placement.TOP) -> Placement:
    return _coerce_enum(Placement, v, default)


def coerce_arrow_align(v: object, default: ArrowAlign = ArrowAlign.CENTER) -> ArrowAlign:
    return _coerce_enum(ArrowAlign, v, default)


def coerce_theme(v: object, default: Theme = Theme.LIGHT) -> Theme:
    return _coerce_enum(Theme, v, default)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class BodyDimensions:
    """Tamaño del cuerpo (sin el margen de la flecha). Ambos >= min_body."""

    width: float
    height: float


@dataclass(frozen=True)
class ScreenRect:
    """Rect en coordenadas de pantalla (top/left + tamaño)."""

    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return float(self.top + self.height)

    @property
    def right(self) -> float:
        return float(self.left + self.width)


@dataclass(frozen=True)
class Position:
    top: float
    left: float


@dataclass(frozen=True)
class ContentRect:
    """Rect del contenido dentro del bounding box.

    auto_width/auto_height: el host no debe forzar ese eje (el contenido
    se mide en tamaño natural, no recortado).
    """

    x: float
    y: float
    width: float
    height: float
    auto_width: bool = False
    auto_height: bool = False


@dataclass(frozen=True)
class GeometryConfig:
    """Constantes de geometría pasadas explícitamente (sin globals ocultos)."""

    radius: float = DEFAULT_RADIUS
    arrow_width: float = DEFAULT_ARROW_WIDTH
    arrow_height: float = DEFAULT_ARROW_HEIGHT
    min_body: float = DEFAULT_MIN_BODY
    gap: float = DEFAULT_ANCHOR_GAP

    def __post_init__(self) -> None:
        for name in ("radius", "arrow_width", "arrow_height", "min_body", "gap"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise PvsValidationError(f"geometry.{name} debe ser numérico: {v!r}")
            if not math.isfinite(float(v)) or float(v) < 0:
                raise PvsValidationError(f"geometry.{name} inválido: {v!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "radius": float(self.radius),
            "arrow_width": float(self.arrow_width),
            "arrow_height": float(self.arrow_height),
            "min_body": float(self.min_body),
            "gap": float(self.gap),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "GeometryConfig":
        base = GeometryConfig()
        return GeometryConfig(
            radius=_as_float(d.get("radius", base.radius), "geometry.radius"),
            arrow_width=_as_float(d.get("arrow_width", base.arrow_width), "geometry.arrow_width"),
            arrow_height=_as_float(d.get("arrow_height", base.arrow_height), "geometry.arrow_height"),
            min_body=_as_float(d.get("min_body", base.min_body), "geometry.min_body"),
            gap=_as_float(d.get("gap", base.gap), "geometry.gap"),
        )


def _as_float(v: Any, field_name: str) -> float:
    try:
        return float(v)
    except Exception as e:
        raise PvsValidationError(f"{field_name} debe ser numérico: {v!r}") from e

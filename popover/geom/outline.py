# File: popover/geom/outline.py
# Project: PopoverShape (PVS)
# Version: 0.4.0
# Status: stable
# Date: 2026-10-14
# Purpose: PathOutline: secuencia cerrada de comandos (valor inmutable).
# Notes:
#   - Se compara por geometría (igualdad de dataclasses), nunca se muta.
#   - to_svg_d() sirve igual para fill, stroke y clipPath.
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, Union

Point = Tuple[float, float]


@dataclass(frozen=True)
class MoveTo:
    to: Point


@dataclass(frozen=True)
class LineTo:
    to: Point


@dataclass(frozen=True)
class QuadTo:
    ctrl: Point
    to: Point


@dataclass(frozen=True)
class CubicTo:
    cp1: Point
    cp2: Point
    to: Point


@dataclass(frozen=True)
class Close:
    pass


PathCommand = Union[MoveTo, LineTo, QuadTo, CubicTo, Close]


def fmt_num(v: float) -> str:
    """Número compacto para atributos SVG (máx. 4 decimales, sin ceros de cola)."""
    s = f"{float(v):.4f}".rstrip("0").rstrip(".")
    if s in ("-0", ""):
        return "0"
    return s


@dataclass(frozen=True)
class PathOutline:
    commands: Tuple[PathCommand, ...]

    def __iter__(self) -> Iterator[PathCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def start_point(self) -> Point:
        first = self.commands[0]
        if not isinstance(first, MoveTo):
            raise ValueError("PathOutline debe empezar con MoveTo")
        return first.to

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], Close)

    def end_points(self) -> list[Point]:
        """Puntos finales de cada comando (sin Close)."""
        return [c.to for c in self.commands if not isinstance(c, Close)]

    def all_points(self) -> list[Point]:
        """Puntos finales + puntos de control."""
        out: list[Point] = []
        for c in self.commands:
            if isinstance(c, CubicTo):
                out.extend((c.cp1, c.cp2, c.to))
            elif isinstance(c, QuadTo):
                out.extend((c.ctrl, c.to))
            elif isinstance(c, (MoveTo, LineTo)):
                out.append(c.to)
        return out

    def map_points(self, fn: Callable[[Point], Point]) -> "PathOutline":
        """Nuevo outline con `fn` aplicado a todos los puntos (ej.: espejos en debug)."""
        out: list[PathCommand] = []
        for c in self.commands:
            if isinstance(c, MoveTo):
                out.append(MoveTo(fn(c.to)))
            elif isinstance(c, LineTo):
                out.append(LineTo(fn(c.to)))
            elif isinstance(c, QuadTo):
                out.append(QuadTo(fn(c.ctrl), fn(c.to)))
            elif isinstance(c, CubicTo):
                out.append(CubicTo(fn(c.cp1), fn(c.cp2), fn(c.to)))
            else:
                out.append(c)
        return PathOutline(tuple(out))

    def to_svg_d(self) -> str:
        parts: list[str] = []
        for c in self.commands:
            if isinstance(c, MoveTo):
                parts.append(f"M {_pt(c.to)}")
            elif isinstance(c, LineTo):
                parts.append(f"L {_pt(c.to)}")
            elif isinstance(c, QuadTo):
                parts.append(f"Q {_pt(c.ctrl)} {_pt(c.to)}")
            elif isinstance(c, CubicTo):
                parts.append(f"C {_pt(c.cp1)}, {_pt(c.cp2)}, {_pt(c.to)}")
            elif isinstance(c, Close):
                parts.append("Z")
        return " ".join(parts)


def _pt(p: Point) -> str:
    return f"{fmt_num(p[0])} {fmt_num(p[1])}"

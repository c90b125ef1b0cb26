"""Outline geometry report (debug tooling + tests).

Purpose
- Parse the outline's `d` attribute back with `svgelements` (independent of
  our own command objects) and derive an exact bbox.
- Flatten the outline into a polyline and look for self-intersections,
  duplicate consecutive points and closure problems.

Design constraints
- Output is JSON-friendly (plain dicts/lists).
- Pure geometry: no Qt.

Notes
- The intersection test is strict (proper crossings only). Collinear
  touching of near-tangent samples is not reported.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from svgelements import Close as SvgClose, Line, Move, Path as SvgPath

from popover.geom.outline import Close, PathOutline

Point = Tuple[float, float]

_EPS = 1e-9


def parse_outline(outline: PathOutline) -> SvgPath:
    return SvgPath(outline.to_svg_d())


def outline_bbox(outline: PathOutline) -> Optional[Tuple[float, float, float, float]]:
    """BBox exacta (x0, y0, x1, y1) calculada por svgelements."""
    b = parse_outline(outline).bbox()
    if b is None:
        return None
    return (float(b[0]), float(b[1]), float(b[2]), float(b[3]))


def sample_outline(outline: PathOutline, *, steps: int = 12) -> List[Point]:
    """Polilínea del outline: curvas muestreadas en `steps`, rectas por extremo.

    Se eliminan puntos consecutivos idénticos (cierres de largo cero).
    """
    pts: List[Point] = []

    def push(x: float, y: float) -> None:
        p = (float(x), float(y))
        if not pts or pts[-1] != p:
            pts.append(p)

    for seg in parse_outline(outline):
        if isinstance(seg, Move):
            push(seg.end.x, seg.end.y)
            continue
        if seg.start is None or seg.end is None:
            continue
        if isinstance(seg, (Line, SvgClose)):
            push(seg.end.x, seg.end.y)
            continue
        for i in range(1, steps + 1):
            pt = seg.point(i / steps)
            push(pt.x, pt.y)
    return pts


def _orient(a: Point, b: Point, c: Point) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _segments_cross(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    d1 = _orient(q1, q2, p1)
    d2 = _orient(q1, q2, p2)
    d3 = _orient(p1, p2, q1)
    d4 = _orient(p1, p2, q2)
    return ((d1 > _EPS and d2 < -_EPS) or (d1 < -_EPS and d2 > _EPS)) and (
        (d3 > _EPS and d4 < -_EPS) or (d3 < -_EPS and d4 > _EPS)
    )


def find_self_intersections(points: List[Point], *, closed: bool = True) -> List[Tuple[int, int]]:
    """Pares (i, j) de segmentos no adyacentes de la polilínea que se cruzan."""
    pts = list(points)
    if closed and len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    n = len(pts)
    if n < 4:
        return []

    segs = [(pts[i], pts[(i + 1) % n]) for i in range(n if closed else n - 1)]
    m = len(segs)
    hits: List[Tuple[int, int]] = []
    for i in range(m):
        a1, a2 = segs[i]
        ax0, ax1 = min(a1[0], a2[0]), max(a1[0], a2[0])
        ay0, ay1 = min(a1[1], a2[1]), max(a1[1], a2[1])
        for j in range(i + 2, m):
            if closed and i == 0 and j == m - 1:
                continue
            b1, b2 = segs[j]
            if max(b1[0], b2[0]) < ax0 or min(b1[0], b2[0]) > ax1:
                continue
            if max(b1[1], b2[1]) < ay0 or min(b1[1], b2[1]) > ay1:
                continue
            if _segments_cross(a1, a2, b1, b2):
                hits.append((i, j))
    return hits


def duplicate_consecutive_points(outline: PathOutline) -> int:
    pts = outline.end_points()
    return sum(1 for a, b in zip(pts, pts[1:]) if a == b)


def outline_report(outline: PathOutline, *, steps: int = 12) -> Dict[str, Any]:
    """Reporte JSON-serializable.

    Status:
    - PASS: cerrado, simple, sin duplicados.
    - FAIL: cualquier otra cosa (ver `notes`).
    """
    notes: List[str] = []
    ends = outline.end_points()
    closed = outline.is_closed and bool(ends) and ends[0] == ends[-1]
    if not outline.is_closed:
        notes.append("missing Close command")
    elif not closed:
        notes.append("start and end points differ")

    dups = duplicate_consecutive_points(outline)
    if dups:
        notes.append(f"{dups} duplicate consecutive point(s)")

    crossings = find_self_intersections(sample_outline(outline, steps=steps))
    if crossings:
        notes.append(f"{len(crossings)} self-intersection(s)")

    bbox = outline_bbox(outline)
    return {
        "status": "PASS" if not notes else "FAIL",
        "closed": bool(closed),
        "duplicate_points": int(dups),
        "self_intersections": len(crossings),
        "bbox": list(bbox) if bbox is not None else None,
        "commands": sum(1 for c in outline if not isinstance(c, Close)),
        "notes": notes,
    }

"""Arrow curve table.

The arrow silhouette is stored once, as exported from the design file
(`Path/arrow.svg`), in a canonical local frame:

- x runs from 48 (start) down to 0 (end): the data is right-to-left.
- y is 0 on the body edge and grows towards the tip (apex at y=12).

Placement and alignment never touch this data. They only change how local
points are mapped into the outline (see `path_builder.map_local_to_placement`).

Traversal
- `ArrowDirection.RTL` walks the table as stored.
- `ArrowDirection.LTR` walks it backwards: each segment swaps its control
  points and ends on the previous segment's end point, so both directions
  draw exactly the same curve.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from popover.core.version import DEFAULT_ARROW_HEIGHT, DEFAULT_ARROW_WIDTH

Point = Tuple[float, float]


class ArrowDirection(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


@dataclass(frozen=True)
class CurveSegment:
    """Segmento cúbico: dos puntos de control + punto final."""

    cp1: Point
    cp2: Point
    to: Point


@dataclass(frozen=True)
class ArrowCurve:
    """Silueta de la flecha como lista ordenada de cúbicas (frame local)."""

    start: Point
    segments: Tuple[CurveSegment, ...]
    width: float = DEFAULT_ARROW_WIDTH
    height: float = DEFAULT_ARROW_HEIGHT

    @property
    def end(self) -> Point:
        return self.segments[-1].to

    def entry_point(self, direction: ArrowDirection) -> Point:
        """Primer punto dibujado al recorrer en `direction`."""
        return self.start if direction == ArrowDirection.RTL else self.end

    def exit_point(self, direction: ArrowDirection) -> Point:
        return self.end if direction == ArrowDirection.RTL else self.start

    def traverse(self, direction: ArrowDirection) -> Iterator[CurveSegment]:
        if direction == ArrowDirection.RTL:
            yield from self.segments
            return

        # Recorrido inverso: cp2/cp1 invertidos y fin en el punto anterior.
        for i in range(len(self.segments) - 1, -1, -1):
            seg = self.segments[i]
            prev_end = self.segments[i - 1].to if i > 0 else self.start
            yield CurveSegment(cp1=seg.cp2, cp2=seg.cp1, to=prev_end)


ARROW_CURVE = ArrowCurve(
    start=(48.0, 0.0019),
    segments=(
        CurveSegment((44.2537, 0.0), (43.0, 0.01), (43.0, 0.01)),
        CurveSegment((41.7463, 0.02), (39.2064, 0.051), (37.5774, 0.6066)),
        CurveSegment((35.8178, 1.2066), (34.6528, 2.2558), (33.4808, 3.4906)),
        CurveSegment((32.6369, 4.3787), (30.9794, 6.2736), (30.1723, 7.1884)),
        CurveSegment((29.5117, 7.9385), (28.2187, 9.4212), (27.5127, 10.1385)),
        CurveSegment((26.6239, 11.0409), (25.5253, 12.0), (23.9995, 12.0)),
        CurveSegment((22.4736, 12.0), (21.3756, 11.0409), (20.4873, 10.1394)),
        CurveSegment((19.7813, 9.4225), (18.4883, 7.939), (17.8272, 7.1894)),
        CurveSegment((17.0211, 6.2745), (15.3636, 4.3796), (14.5192, 3.4915)),
        CurveSegment((13.3451, 2.2568), (12.1822, 1.2076), (10.4231, 0.6075)),
        CurveSegment((8.7936, 0.0536), (6.9196, 0.0267), (5.2468, 0.0101)),
        CurveSegment((3.4973, -0.007), (1.7489, 0.0028), (0.0, 0.0028)),
    ),
)

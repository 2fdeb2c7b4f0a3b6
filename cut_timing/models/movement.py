"""
Movement model - points and straight head movements on the machine table.

All coordinates are millimeters in machine-table coordinates. Movements
are immutable; reversing or translating one creates a new Movement.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

# Two points closer than this on both axes are treated as the same point [mm]
POINT_EPSILON_MM = 0.01


@dataclass(frozen=True)
class Point:
    """Point on the machine table [mm]."""
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> 'Point':
        return Point(self.x + dx, self.y + dy)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Movement:
    """Single straight head movement, cutting (beam on) or positioning."""
    start: Point
    end: Point
    is_cutting: bool

    @property
    def length(self) -> float:
        return calculate_distance(self.start, self.end)

    def reversed(self) -> 'Movement':
        """Same movement traversed end -> start."""
        return Movement(start=self.end, end=self.start, is_cutting=self.is_cutting)

    def translated(self, dx: float, dy: float) -> 'Movement':
        return Movement(
            start=self.start.translated(dx, dy),
            end=self.end.translated(dx, dy),
            is_cutting=self.is_cutting
        )


def calculate_distance(point1: Point, point2: Point) -> float:
    """Euclidean distance between two points [mm]."""
    return math.sqrt((point2.x - point1.x) ** 2 + (point2.y - point1.y) ** 2)


def points_match(point1: Point, point2: Point,
                 epsilon: float = POINT_EPSILON_MM) -> bool:
    """Check if two points coincide within epsilon on both axes."""
    return (abs(point1.x - point2.x) < epsilon and
            abs(point1.y - point2.y) < epsilon)


def cutting(x1: float, y1: float, x2: float, y2: float) -> Movement:
    """Shorthand for a cutting movement."""
    return Movement(Point(x1, y1), Point(x2, y2), True)


def positioning(x1: float, y1: float, x2: float, y2: float) -> Movement:
    """Shorthand for a positioning (beam off) movement."""
    return Movement(Point(x1, y1), Point(x2, y2), False)


def chain(points: Iterable[Point], is_cutting: bool = True,
          closed: bool = False) -> List[Movement]:
    """
    Build connected movements through consecutive points.

    Args:
        points: Vertices in drawing order
        is_cutting: Flag applied to every produced movement
        closed: Add a closing movement from last vertex back to the first

    Returns:
        List of movements (empty for fewer than 2 points)
    """
    pts = list(points)
    movements = [
        Movement(start=p1, end=p2, is_cutting=is_cutting)
        for p1, p2 in zip(pts, pts[1:])
    ]
    if closed and len(pts) > 1:
        movements.append(Movement(start=pts[-1], end=pts[0], is_cutting=is_cutting))
    return movements


def movements_extent(movements: Iterable[Movement]) -> Optional[tuple]:
    """
    Return (min_x, min_y) over all finite endpoint coordinates.

    Non-finite coordinates are skipped; None when nothing finite remains.
    """
    min_x = math.inf
    min_y = math.inf
    for m in movements:
        for p in (m.start, m.end):
            if math.isfinite(p.x):
                min_x = min(min_x, p.x)
            if math.isfinite(p.y):
                min_y = min(min_y, p.y)
    if min_x == math.inf and min_y == math.inf:
        return None
    return (min_x if min_x != math.inf else 0.0,
            min_y if min_y != math.inf else 0.0)

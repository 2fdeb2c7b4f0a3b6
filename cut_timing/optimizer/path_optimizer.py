"""
Path Optimizer - reorder cutting contours to shorten positioning travel.

Greedy nearest-neighbor construction over contours (segments), not over
single movements:
1. insert positioning moves across gaps so the sequence is connected
2. translate geometry so its minimum corner sits at the origin
3. group connected cutting movements into segments (positioning dropped)
4. from (0, 0), repeatedly pick the segment whose entry point is closest,
   reversing multi-movement segments when their far end is strictly closer
5. connect with a positioning move unless already at the entry point
6. drop a leading positioning move that connects straight into the first cut

Runs in O(segments^2). Not globally optimal.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models.movement import (
    Movement, Point, ORIGIN, POINT_EPSILON_MM,
    calculate_distance, points_match, movements_extent
)

logger = logging.getLogger(__name__)

# Geometry already this close to the origin is left untranslated [mm]
ORIGIN_TOLERANCE_MM = 1e-6


@dataclass(frozen=True)
class CuttingSegment:
    """Maximal run of connected cutting movements (one continuous cut)."""
    movements: tuple

    @property
    def entry(self) -> Point:
        return self.movements[0].start

    @property
    def exit(self) -> Point:
        return self.movements[-1].end

    @property
    def reversible(self) -> bool:
        return len(self.movements) > 1

    def reversed(self) -> 'CuttingSegment':
        return CuttingSegment(tuple(m.reversed() for m in reversed(self.movements)))


def insert_positioning_movements(movements: Sequence[Movement],
                                 epsilon: float = POINT_EPSILON_MM) -> List[Movement]:
    """
    Connect every gap between consecutive movements with a positioning move.

    Args:
        movements: Movements in drawing order
        epsilon: Gap tolerance [mm]

    Returns:
        New list where each movement starts where the previous one ended
    """
    if not movements:
        return []

    result = [movements[0]]
    for current in movements[1:]:
        previous = result[-1]
        if (abs(previous.end.x - current.start.x) > epsilon or
                abs(previous.end.y - current.start.y) > epsilon):
            result.append(Movement(start=previous.end, end=current.start, is_cutting=False))
        result.append(current)
    return result


def normalize_movements_to_origin(movements: Sequence[Movement]) -> List[Movement]:
    """Translate movements so the bounding box minimum corner is (0, 0)."""
    extent = movements_extent(movements)
    if extent is None:
        return list(movements)

    min_x, min_y = extent
    if abs(min_x) < ORIGIN_TOLERANCE_MM and abs(min_y) < ORIGIN_TOLERANCE_MM:
        return list(movements)

    return [m.translated(-min_x, -min_y) for m in movements]


def group_cutting_segments(movements: Sequence[Movement],
                           epsilon: float = POINT_EPSILON_MM) -> List[CuttingSegment]:
    """
    Split cutting movements into continuous segments.

    A positioning movement or a gap larger than epsilon closes the current
    segment. Positioning movements are not kept.
    """
    segments: List[CuttingSegment] = []
    current: List[Movement] = []

    for movement in movements:
        if movement.is_cutting:
            if not current or points_match(movement.start, current[-1].end, epsilon):
                current.append(movement)
            else:
                segments.append(CuttingSegment(tuple(current)))
                current = [movement]
        elif current:
            segments.append(CuttingSegment(tuple(current)))
            current = []

    if current:
        segments.append(CuttingSegment(tuple(current)))

    return segments


def _closest_segment(segments: List[CuttingSegment], remaining: List[int],
                     position: Point):
    """
    Find the remaining segment with the nearest entry point.

    Returns:
        Tuple (index into `remaining`, use_reversed); first candidate wins ties
    """
    best_slot = 0
    best_distance = float('inf')
    use_reversed = False

    for slot, seg_index in enumerate(remaining):
        segment = segments[seg_index]

        dist_to_start = calculate_distance(position, segment.entry)
        if dist_to_start < best_distance:
            best_distance = dist_to_start
            best_slot = slot
            use_reversed = False

        if segment.reversible:
            dist_to_end = calculate_distance(position, segment.exit)
            if dist_to_end < best_distance:
                best_distance = dist_to_end
                best_slot = slot
                use_reversed = True

    return best_slot, use_reversed


def reorder_segments(segments: List[CuttingSegment],
                     start: Point = ORIGIN,
                     epsilon: float = POINT_EPSILON_MM) -> List[Movement]:
    """
    Greedy nearest-neighbor ordering of segments with positioning moves between.

    Args:
        segments: Segments to visit (each exactly once)
        start: Initial head position
        epsilon: Distance under which no positioning move is emitted

    Returns:
        Connected movement sequence
    """
    result: List[Movement] = []
    remaining = list(range(len(segments)))
    position = start

    while remaining:
        slot, use_reversed = _closest_segment(segments, remaining, position)
        segment = segments[remaining.pop(slot)]
        if use_reversed:
            segment = segment.reversed()

        if not points_match(position, segment.entry, epsilon):
            result.append(Movement(start=position, end=segment.entry, is_cutting=False))

        result.extend(segment.movements)
        position = segment.exit

    # Leading approach move connecting straight into the first cut is redundant
    if (len(result) > 1 and not result[0].is_cutting and
            result[0].end == result[1].start):
        result.pop(0)

    return result


def optimize_movements(movements: Sequence[Movement],
                       insert_positioning: bool = True,
                       normalize_to_origin: bool = True,
                       start: Optional[Point] = None) -> List[Movement]:
    """
    Reorder movements to minimize positioning travel.

    Cutting geometry is preserved; only order, orientation and positioning
    moves change.

    Args:
        movements: Raw movements in drawing order
        insert_positioning: Connect gaps before grouping (step 1)
        normalize_to_origin: Move geometry to the origin before grouping (step 2)
        start: Initial head position (default: origin)

    Returns:
        Optimized movement list
    """
    if len(movements) <= 1:
        return list(movements)

    prepared = list(movements)
    if insert_positioning:
        prepared = insert_positioning_movements(prepared)
    if normalize_to_origin:
        prepared = normalize_movements_to_origin(prepared)

    segments = group_cutting_segments(prepared)
    if not segments:
        return prepared

    optimized = reorder_segments(segments, start or ORIGIN)

    logger.debug(
        f"Optimized {len(movements)} movements -> {len(optimized)} "
        f"({len(segments)} cutting segments)"
    )
    return optimized

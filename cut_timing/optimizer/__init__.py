"""Greedy path reordering to reduce positioning travel."""

from .path_optimizer import (
    CuttingSegment,
    optimize_movements,
    insert_positioning_movements,
    normalize_movements_to_origin,
    group_cutting_segments,
    reorder_segments
)

__all__ = [
    'CuttingSegment',
    'optimize_movements',
    'insert_positioning_movements',
    'normalize_movements_to_origin',
    'group_cutting_segments',
    'reorder_segments'
]

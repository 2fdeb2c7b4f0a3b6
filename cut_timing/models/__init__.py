"""Data models for movements, options and cost reports."""

from .movement import (
    Point,
    Movement,
    ORIGIN,
    POINT_EPSILON_MM,
    calculate_distance,
    points_match,
    cutting,
    positioning,
    chain
)
from .results import (
    CuttingTimeOptions,
    CuttingTimeResult,
    MovementCost,
    BoundingBox,
    ExtractedGeometry
)

__all__ = [
    'Point',
    'Movement',
    'ORIGIN',
    'POINT_EPSILON_MM',
    'calculate_distance',
    'points_match',
    'cutting',
    'positioning',
    'chain',
    'CuttingTimeOptions',
    'CuttingTimeResult',
    'MovementCost',
    'BoundingBox',
    'ExtractedGeometry'
]

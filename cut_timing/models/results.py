"""
Data models for estimation input options and the cost report.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Iterable

from .movement import Movement, Point
from ..exceptions import InvalidOptionsError


def _is_finite_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True)
class CuttingTimeOptions:
    """Options for a single estimation call."""
    material_thickness: float             # Sheet thickness [mm], > 0
    kerf: Optional[float] = None          # Kerf override [mm]; None = calibration table
    scale_factor: float = 1.0             # Calibration multiplier for time and distance
    optimize: bool = False                # Reorder movements before accumulating

    def __post_init__(self):
        if not _is_finite_number(self.material_thickness) or self.material_thickness <= 0:
            raise InvalidOptionsError('material_thickness', self.material_thickness)
        if not _is_finite_number(self.scale_factor) or self.scale_factor < 0:
            raise InvalidOptionsError('scale_factor', self.scale_factor)
        if self.kerf is not None and (not _is_finite_number(self.kerf) or self.kerf < 0):
            raise InvalidOptionsError('kerf', self.kerf)


@dataclass(frozen=True)
class MovementCost:
    """Time and distance of one movement."""
    time: float = 0.0
    distance: float = 0.0
    is_cutting: bool = False


@dataclass(frozen=True)
class CuttingTimeResult:
    """Cost report for one job."""
    total_time_sec: float = 0.0
    cutting_time_sec: float = 0.0
    movement_time_sec: float = 0.0
    piercing_time_sec: float = 0.0
    setup_time_sec: float = 0.0
    total_distance: float = 0.0
    cutting_distance: float = 0.0
    movement_distance: float = 0.0
    pierce_count: int = 0
    part_count: int = 0
    cut_area_width: Optional[float] = None    # From adapter bounding box [mm]
    cut_area_height: Optional[float] = None

    @property
    def total_time_min(self) -> float:
        return self.total_time_sec / 60.0

    def with_cut_area(self, bounding_box: Optional['BoundingBox']) -> 'CuttingTimeResult':
        """Copy of this result carrying the drawing extent."""
        if bounding_box is None:
            return self
        return replace(self, cut_area_width=bounding_box.width,
                       cut_area_height=bounding_box.height)

    def to_dict(self) -> Dict:
        data = {
            'total_time_sec': self.total_time_sec,
            'cutting_time_sec': self.cutting_time_sec,
            'movement_time_sec': self.movement_time_sec,
            'piercing_time_sec': self.piercing_time_sec,
            'setup_time_sec': self.setup_time_sec,
            'total_distance': self.total_distance,
            'cutting_distance': self.cutting_distance,
            'movement_distance': self.movement_distance,
            'pierce_count': self.pierce_count,
            'part_count': self.part_count
        }
        if self.cut_area_width is not None:
            data['cut_area_width'] = self.cut_area_width
            data['cut_area_height'] = self.cut_area_height
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'CuttingTimeResult':
        return cls(
            total_time_sec=data.get('total_time_sec', 0.0),
            cutting_time_sec=data.get('cutting_time_sec', 0.0),
            movement_time_sec=data.get('movement_time_sec', 0.0),
            piercing_time_sec=data.get('piercing_time_sec', 0.0),
            setup_time_sec=data.get('setup_time_sec', 0.0),
            total_distance=data.get('total_distance', 0.0),
            cutting_distance=data.get('cutting_distance', 0.0),
            movement_distance=data.get('movement_distance', 0.0),
            pierce_count=data.get('pierce_count', 0),
            part_count=data.get('part_count', 0),
            cut_area_width=data.get('cut_area_width'),
            cut_area_height=data.get('cut_area_height')
        )


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned drawing extent [mm]."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional['BoundingBox']:
        """Smallest box containing all finite points, None when there are none."""
        xs = []
        ys = []
        for p in points:
            if math.isfinite(p.x) and math.isfinite(p.y):
                xs.append(p.x)
                ys.append(p.y)
        if not xs:
            return None
        return cls(min(xs), min(ys), max(xs), max(ys))

    def union(self, other: Optional['BoundingBox']) -> 'BoundingBox':
        if other is None:
            return self
        return BoundingBox(
            min(self.min_x, other.min_x), min(self.min_y, other.min_y),
            max(self.max_x, other.max_x), max(self.max_y, other.max_y)
        )

    def to_tuple(self):
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass
class ExtractedGeometry:
    """Movements produced by a geometry adapter, in drawing order."""
    movements: List[Movement] = field(default_factory=list)
    bounding_box: Optional[BoundingBox] = None
    entity_counts: Dict[str, int] = field(default_factory=dict)

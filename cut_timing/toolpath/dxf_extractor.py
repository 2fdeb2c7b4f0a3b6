"""
DXF Geometry Adapter - convert DXF drawings into cutting movements.

Supported entities:
- LINE: one movement
- CIRCLE: closed polygon of CIRCLE_SEGMENTS chords
- ARC: ARC_SEGMENTS chords over the counter-clockwise sweep
- LWPOLYLINE / POLYLINE: vertex chain, closing movement when closed
  (bulges are not followed, vertices are joined by chords)
- INSERT: block references expanded into absolute coordinates

Every produced movement is a cutting movement. Output is translated so the
drawing starts at the origin; the bounding box keeps drawing coordinates.
"""

import io
import logging
import math
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import ezdxf
from ezdxf.document import Drawing
from ezdxf.lldxf.const import DXFError

from ..exceptions import GeometryError
from ..models.movement import Movement, Point, chain
from ..models.results import BoundingBox, ExtractedGeometry
from ..optimizer.path_optimizer import normalize_movements_to_origin

logger = logging.getLogger(__name__)

CIRCLE_SEGMENTS = 32
ARC_SEGMENTS = 24

DxfSource = Union[str, Path, Drawing]


def _circle_point(cx: float, cy: float, radius: float, angle_rad: float) -> Point:
    return Point(cx + radius * math.cos(angle_rad), cy + radius * math.sin(angle_rad))


def _circle_envelope(cx: float, cy: float, radius: float) -> BoundingBox:
    return BoundingBox(cx - radius, cy - radius, cx + radius, cy + radius)


def line_movements(entity) -> Tuple[List[Movement], Optional[BoundingBox]]:
    """LINE -> single movement."""
    start = Point(entity.dxf.start.x, entity.dxf.start.y)
    end = Point(entity.dxf.end.x, entity.dxf.end.y)
    return [Movement(start, end, True)], BoundingBox.from_points([start, end])


def circle_movements(entity,
                     n_segments: int = CIRCLE_SEGMENTS) -> Tuple[List[Movement], Optional[BoundingBox]]:
    """CIRCLE -> closed polygon approximation."""
    center = entity.dxf.center
    radius = entity.dxf.radius
    points = [
        _circle_point(center.x, center.y, radius, 2 * math.pi * i / n_segments)
        for i in range(n_segments)
    ]
    return chain(points, closed=True), _circle_envelope(center.x, center.y, radius)


def arc_movements(entity,
                  n_segments: int = ARC_SEGMENTS) -> Tuple[List[Movement], Optional[BoundingBox]]:
    """
    ARC -> chords over the counter-clockwise sweep.

    The reported extent is the full circle envelope of the arc.
    """
    center = entity.dxf.center
    radius = entity.dxf.radius
    start_angle = math.radians(entity.dxf.start_angle)
    end_angle = math.radians(entity.dxf.end_angle)

    sweep = end_angle - start_angle
    if sweep <= 0:
        sweep += 2 * math.pi

    points = [
        _circle_point(center.x, center.y, radius, start_angle + sweep * i / n_segments)
        for i in range(n_segments + 1)
    ]
    bbox = BoundingBox.from_points(points)
    envelope = _circle_envelope(center.x, center.y, radius)
    return chain(points), envelope.union(bbox)


def lwpolyline_movements(entity) -> Tuple[List[Movement], Optional[BoundingBox]]:
    """LWPOLYLINE -> vertex chain."""
    points = [Point(x, y) for x, y in entity.get_points('xy')]
    return chain(points, closed=entity.closed), BoundingBox.from_points(points)


def polyline_movements(entity) -> Tuple[List[Movement], Optional[BoundingBox]]:
    """2D POLYLINE -> vertex chain."""
    points = [Point(v.x, v.y) for v in entity.points()]
    return chain(points, closed=entity.is_closed), BoundingBox.from_points(points)


ENTITY_CONVERTERS = {
    'LINE': line_movements,
    'CIRCLE': circle_movements,
    'ARC': arc_movements,
    'LWPOLYLINE': lwpolyline_movements,
    'POLYLINE': polyline_movements,
}


def iter_flattened_entities(entities: Iterable, counts: Dict[str, int]) -> Iterator:
    """
    Yield drawable entities with block references expanded.

    Every visited entity type (INSERT included) is counted in `counts`.
    """
    for entity in entities:
        etype = entity.dxftype()
        counts[etype] = counts.get(etype, 0) + 1

        if etype == 'INSERT':
            try:
                virtual = list(entity.virtual_entities())
            except Exception as e:
                logger.warning(f"Cannot expand block '{entity.dxf.name}': {e}")
                continue
            yield from iter_flattened_entities(virtual, counts)
        else:
            yield entity


def read_dxf_document(source: DxfSource) -> Drawing:
    """
    Load a DXF document from a path, DXF content or an open Drawing.

    Raises:
        GeometryError: Content cannot be parsed or file cannot be read
    """
    if isinstance(source, Drawing):
        return source

    try:
        if isinstance(source, Path) or ('\n' not in source and 'SECTION' not in source):
            return ezdxf.readfile(str(source))
        return ezdxf.read(io.StringIO(source))
    except (IOError, ValueError, DXFError) as e:
        raise GeometryError(f"Cannot read DXF: {e}", source_format='dxf') from e


def extract_dxf_movements(source: DxfSource) -> ExtractedGeometry:
    """
    Convert DXF modelspace geometry into cutting movements.

    Args:
        source: DXF file path, DXF content string or ezdxf Drawing

    Returns:
        ExtractedGeometry with origin-normalized movements in drawing order

    Raises:
        GeometryError: DXF cannot be read
    """
    doc = read_dxf_document(source)

    movements: List[Movement] = []
    entity_counts: Dict[str, int] = {}
    bbox: Optional[BoundingBox] = None

    for entity in iter_flattened_entities(doc.modelspace(), entity_counts):
        converter = ENTITY_CONVERTERS.get(entity.dxftype())
        if converter is None:
            continue

        entity_movements, entity_bbox = converter(entity)
        movements.extend(entity_movements)
        if entity_bbox is not None:
            bbox = entity_bbox.union(bbox)

    logger.debug(f"DXF entity types: {entity_counts}")
    if bbox is not None:
        logger.debug(
            f"DXF bounding box: {bbox.to_tuple()} "
            f"({bbox.width:.2f} x {bbox.height:.2f} mm)"
        )

    return ExtractedGeometry(
        movements=normalize_movements_to_origin(movements),
        bounding_box=bbox,
        entity_counts=entity_counts
    )

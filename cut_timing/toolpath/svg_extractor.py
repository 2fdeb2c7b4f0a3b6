"""
SVG Geometry Adapter - convert SVG shapes into movements.

All drawable shapes (path, line, polyline, polygon, rect, circle, ellipse)
are read through svgpathtools as paths. Straight segments become one
cutting movement; curves are tessellated into CURVE_SEGMENTS chords.

Each continuous sub-path is approached with a positioning movement from
the previous head position (the origin for the first one), so every
sub-path starts with its own pierce.
"""

import io
import logging
from pathlib import Path
from typing import List, Union
from xml.parsers.expat import ExpatError

from svgpathtools import Line, svg2paths

from ..exceptions import GeometryError
from ..models.movement import Movement, Point, ORIGIN
from ..models.results import BoundingBox, ExtractedGeometry

logger = logging.getLogger(__name__)

CURVE_SEGMENTS = 16


def _to_point(z: complex) -> Point:
    return Point(z.real, z.imag)


def segment_points(segment, n_segments: int = CURVE_SEGMENTS) -> List[Point]:
    """
    Points along one path segment, start and end included.

    Args:
        segment: svgpathtools Line, Arc, QuadraticBezier or CubicBezier
        n_segments: Chords used for curved segments

    Returns:
        List of points
    """
    if isinstance(segment, Line):
        return [_to_point(segment.start), _to_point(segment.end)]
    return [_to_point(segment.point(i / n_segments)) for i in range(n_segments + 1)]


def _read_svg_file(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise GeometryError(f"Cannot read SVG file {path}: {e}", source_format='svg') from e


def _names_file(source: str) -> bool:
    try:
        return bool(source) and Path(source).is_file()
    except (OSError, ValueError):
        return False


def _load_paths(source: Union[str, Path]):
    if isinstance(source, Path):
        source = _read_svg_file(source)
    elif isinstance(source, str) and '<' not in source and _names_file(source):
        source = _read_svg_file(Path(source))

    if not source or not isinstance(source, str):
        raise GeometryError("SVG content is empty", source_format='svg')
    if '<svg' not in source or '>' not in source:
        raise GeometryError("Content does not look like an SVG document", source_format='svg')

    try:
        paths, _ = svg2paths(io.StringIO(source), convert_rectangles_to_paths=True)
    except (ExpatError, ValueError) as e:
        raise GeometryError(f"Cannot parse SVG: {e}", source_format='svg') from e
    return paths


def extract_svg_movements(source: Union[str, Path]) -> ExtractedGeometry:
    """
    Convert SVG markup into movements in drawing order.

    Args:
        source: SVG markup string, or path (str or pathlib.Path) of an .svg file

    Returns:
        ExtractedGeometry (empty movement list when no shapes are drawn)

    Raises:
        GeometryError: File cannot be read or content is not a parseable SVG document
    """
    paths = _load_paths(source)

    movements: List[Movement] = []
    all_points: List[Point] = []
    position = ORIGIN
    subpath_count = 0

    for path in paths:
        for subpath in path.continuous_subpaths():
            points: List[Point] = []
            for segment in subpath:
                seg_points = segment_points(segment)
                points.extend(seg_points if not points else seg_points[1:])
            if len(points) < 2:
                continue

            subpath_count += 1
            movements.append(Movement(start=position, end=points[0], is_cutting=False))
            movements.extend(
                Movement(start=p1, end=p2, is_cutting=True)
                for p1, p2 in zip(points, points[1:])
            )
            position = points[-1]
            all_points.extend(points)

    bbox = BoundingBox.from_points(all_points)
    logger.debug(f"SVG: {len(paths)} shapes, {subpath_count} sub-paths, bounding box {bbox}")

    return ExtractedGeometry(
        movements=movements,
        bounding_box=bbox,
        entity_counts={'path': len(paths)}
    )

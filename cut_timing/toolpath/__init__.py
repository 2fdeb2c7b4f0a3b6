"""Geometry adapters: DXF and SVG drawings to movements."""

from .dxf_extractor import (
    extract_dxf_movements,
    read_dxf_document,
    CIRCLE_SEGMENTS,
    ARC_SEGMENTS
)
from .svg_extractor import (
    extract_svg_movements,
    CURVE_SEGMENTS
)

__all__ = [
    'extract_dxf_movements',
    'read_dxf_document',
    'extract_svg_movements',
    'CIRCLE_SEGMENTS',
    'ARC_SEGMENTS',
    'CURVE_SEGMENTS'
]

"""
Tests for the DXF geometry adapter.
"""

import io
import math
from pathlib import Path

import ezdxf
import pytest

from cut_timing.exceptions import GeometryError
from cut_timing.models import CuttingTimeOptions, Point
from cut_timing.services import calculate_cutting_time_from_dxf
from cut_timing.toolpath import extract_dxf_movements
from cut_timing.toolpath.dxf_extractor import ARC_SEGMENTS, CIRCLE_SEGMENTS


def _doc_to_string(doc) -> str:
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue()


@pytest.fixture
def square_doc():
    doc = ezdxf.new()
    doc.modelspace().add_lwpolyline(
        [(10, 10), (90, 10), (90, 90), (10, 90)], close=True
    )
    return doc


def test_closed_lwpolyline(square_doc):
    geometry = extract_dxf_movements(square_doc)

    assert len(geometry.movements) == 4
    assert all(m.is_cutting for m in geometry.movements)
    assert sum(m.length for m in geometry.movements) == pytest.approx(320.0)
    assert geometry.movements[0].start == Point(0, 0)
    assert geometry.bounding_box.width == pytest.approx(80.0)
    assert geometry.bounding_box.min_x == pytest.approx(10.0)
    assert geometry.entity_counts == {'LWPOLYLINE': 1}


def test_open_polyline_has_no_closing_move():
    doc = ezdxf.new()
    doc.modelspace().add_lwpolyline([(0, 0), (50, 0), (50, 20)])
    geometry = extract_dxf_movements(doc)
    assert len(geometry.movements) == 2


def test_line_and_2d_polyline():
    doc = ezdxf.new()
    msp = doc.modelspace()
    msp.add_line((0, 0), (30, 40))
    msp.add_polyline2d([(0, 0), (10, 0), (10, 10)], close=True)

    geometry = extract_dxf_movements(doc)
    assert geometry.entity_counts == {'LINE': 1, 'POLYLINE': 1}
    assert len(geometry.movements) == 1 + 3
    assert geometry.movements[0].length == pytest.approx(50.0)


def test_circle_is_tessellated():
    doc = ezdxf.new()
    doc.modelspace().add_circle((50, 50), radius=10)
    geometry = extract_dxf_movements(doc)

    assert len(geometry.movements) == CIRCLE_SEGMENTS
    perimeter = sum(m.length for m in geometry.movements)
    assert perimeter == pytest.approx(2 * math.pi * 10, rel=0.01)
    assert geometry.bounding_box.width == pytest.approx(20.0)
    assert geometry.bounding_box.height == pytest.approx(20.0)
    assert geometry.movements[-1].end == geometry.movements[0].start


def test_arc_reports_full_circle_envelope():
    doc = ezdxf.new()
    doc.modelspace().add_arc((0, 0), radius=10, start_angle=0, end_angle=90)
    geometry = extract_dxf_movements(doc)

    assert len(geometry.movements) == ARC_SEGMENTS
    assert sum(m.length for m in geometry.movements) == pytest.approx(math.pi * 5, rel=0.01)
    assert geometry.bounding_box.width == pytest.approx(20.0)
    assert geometry.bounding_box.height == pytest.approx(20.0)


def test_block_reference_is_expanded():
    doc = ezdxf.new()
    block = doc.blocks.new(name='TAB')
    block.add_line((0, 0), (10, 0))
    doc.modelspace().add_blockref('TAB', (100, 50))

    geometry = extract_dxf_movements(doc)
    assert geometry.entity_counts == {'INSERT': 1, 'LINE': 1}
    assert len(geometry.movements) == 1
    assert geometry.bounding_box.min_x == pytest.approx(100.0)
    assert geometry.bounding_box.min_y == pytest.approx(50.0)


def test_unsupported_entities_are_counted_and_skipped():
    doc = ezdxf.new()
    msp = doc.modelspace()
    msp.add_text('PART-01')
    msp.add_line((0, 0), (10, 0))
    geometry = extract_dxf_movements(doc)
    assert geometry.entity_counts['TEXT'] == 1
    assert len(geometry.movements) == 1


def test_reads_dxf_content_string(square_doc):
    geometry = extract_dxf_movements(_doc_to_string(square_doc))
    assert len(geometry.movements) == 4


def test_reads_dxf_file(square_doc, tmp_path):
    path = tmp_path / 'square.dxf'
    square_doc.saveas(path)

    assert len(extract_dxf_movements(path).movements) == 4
    assert len(extract_dxf_movements(str(path)).movements) == 4


def test_empty_drawing():
    geometry = extract_dxf_movements(ezdxf.new())
    assert geometry.movements == []
    assert geometry.bounding_box is None


@pytest.mark.parametrize('source', [
    'not a dxf\ndrawing\n',
    Path('/nonexistent/drawing.dxf'),
])
def test_unreadable_dxf(source):
    with pytest.raises(GeometryError) as exc_info:
        extract_dxf_movements(source)
    assert exc_info.value.details == {'format': 'dxf'}


def test_estimate_from_dxf(square_doc):
    options = CuttingTimeOptions(material_thickness=1.0, kerf=0.0)
    result = calculate_cutting_time_from_dxf(_doc_to_string(square_doc), options)

    assert result.cutting_distance == pytest.approx(320.0)
    assert result.pierce_count == 1
    assert result.cut_area_width == pytest.approx(80.0)
    assert result.cut_area_height == pytest.approx(80.0)


def test_closed_two_vertex_polyline_returns_to_start():
    doc = ezdxf.new()
    doc.modelspace().add_lwpolyline([(0, 0), (40, 0)], close=True)
    geometry = extract_dxf_movements(doc)

    assert len(geometry.movements) == 2
    assert geometry.movements[1].end == geometry.movements[0].start
    assert sum(m.length for m in geometry.movements) == pytest.approx(80.0)

"""Shared fixtures for cut_timing tests."""

import logging

import pytest

from cut_timing.models import Point, chain, cutting, positioning
from cut_timing.services import CuttingTimeEstimator

logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(levelname)s - %(message)s')


def square(x: float, y: float, size: float):
    """Closed square contour of cutting movements, counter-clockwise from (x, y)."""
    return chain([
        Point(x, y),
        Point(x + size, y),
        Point(x + size, y + size),
        Point(x, y + size),
    ], closed=True)


@pytest.fixture
def estimator():
    return CuttingTimeEstimator()


@pytest.fixture
def open_square_job():
    """Approach move followed by three sides of a 10 mm square."""
    return [
        positioning(0, 0, 0, 10),
        cutting(0, 10, 10, 10),
        cutting(10, 10, 10, 0),
        cutting(10, 0, 0, 0),
    ]


@pytest.fixture
def two_squares_reversed():
    """Far square drawn before the square at the origin, no positioning between."""
    return square(50, 0, 10) + square(0, 0, 10)


@pytest.fixture
def make_square():
    return square

"""Estimation services."""

from .estimator import (
    CuttingTimeEstimator,
    accumulate_movements,
    get_default_estimator,
    get_cutting_speed,
    get_pierce_time,
    calculate_cutting_time,
    calculate_cutting_time_from_dxf,
    calculate_cutting_time_from_svg
)

__all__ = [
    'CuttingTimeEstimator',
    'accumulate_movements',
    'get_default_estimator',
    'get_cutting_speed',
    'get_pierce_time',
    'calculate_cutting_time',
    'calculate_cutting_time_from_dxf',
    'calculate_cutting_time_from_svg'
]

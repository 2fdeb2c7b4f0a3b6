"""Thickness-indexed calibration tables (speed, pierce time, kerf)."""

from .tables import (
    ParameterTable,
    MachineCalibration,
    interpolate,
    CUTTING_SPEEDS_MM_MIN,
    PIERCE_TIMES_S,
    KERF_MM
)

__all__ = [
    'ParameterTable',
    'MachineCalibration',
    'interpolate',
    'CUTTING_SPEEDS_MM_MIN',
    'PIERCE_TIMES_S',
    'KERF_MM'
]

"""
Cut Timing - laser cutting time estimation.

Main components:
- parameters: thickness-indexed calibration tables (speed, pierce time, kerf)
- models: Point, Movement, options and the cost report
- motion: per-movement time/distance model and machine constants
- optimizer: greedy contour reordering to shorten positioning travel
- services: CuttingTimeEstimator (accumulator and pipeline)
- toolpath: DXF and SVG geometry adapters
- config: JSON calibration files
"""

from .exceptions import (
    CutTimingError,
    ConfigurationError,
    InvalidParameterTableError,
    InvalidMachineProfileError,
    InvalidOptionsError,
    GeometryError
)
from .models import (
    Point,
    Movement,
    CuttingTimeOptions,
    CuttingTimeResult,
    MovementCost,
    BoundingBox,
    ExtractedGeometry,
    calculate_distance
)
from .parameters import ParameterTable, MachineCalibration
from .motion import MachineProfile, cost_of_movement
from .optimizer import optimize_movements
from .services import (
    CuttingTimeEstimator,
    accumulate_movements,
    get_cutting_speed,
    get_pierce_time,
    calculate_cutting_time,
    calculate_cutting_time_from_dxf,
    calculate_cutting_time_from_svg
)
from .toolpath import extract_dxf_movements, extract_svg_movements
from .config import (
    load_config,
    save_config,
    create_calibration_from_config,
    create_machine_profile_from_config,
    create_estimator_from_config
)
from .settings import configure_logging

__all__ = [
    # Errors
    'CutTimingError',
    'ConfigurationError',
    'InvalidParameterTableError',
    'InvalidMachineProfileError',
    'InvalidOptionsError',
    'GeometryError',

    # Models
    'Point',
    'Movement',
    'CuttingTimeOptions',
    'CuttingTimeResult',
    'MovementCost',
    'BoundingBox',
    'ExtractedGeometry',
    'calculate_distance',

    # Parameters
    'ParameterTable',
    'MachineCalibration',

    # Motion
    'MachineProfile',
    'cost_of_movement',

    # Optimizer
    'optimize_movements',

    # Services
    'CuttingTimeEstimator',
    'accumulate_movements',
    'get_cutting_speed',
    'get_pierce_time',
    'calculate_cutting_time',
    'calculate_cutting_time_from_dxf',
    'calculate_cutting_time_from_svg',

    # Toolpath
    'extract_dxf_movements',
    'extract_svg_movements',

    # Config
    'load_config',
    'save_config',
    'create_calibration_from_config',
    'create_machine_profile_from_config',
    'create_estimator_from_config',
    'configure_logging',
]

"""
Cutting Time Estimator - main service turning movements into a cost report.

Pipeline:
    geometry adapter -> movements -> (optional) path optimizer -> accumulator

Usage:
    estimator = CuttingTimeEstimator()
    result = estimator.estimate(movements, CuttingTimeOptions(material_thickness=2.0))
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..models.movement import Movement
from ..models.results import CuttingTimeOptions, CuttingTimeResult, ExtractedGeometry
from ..motion.movement_cost import MachineProfile, cost_of_movement
from ..optimizer.path_optimizer import optimize_movements
from ..parameters.tables import MachineCalibration
from ..toolpath.dxf_extractor import extract_dxf_movements
from ..toolpath.svg_extractor import extract_svg_movements

logger = logging.getLogger(__name__)


def accumulate_movements(movements: Iterable[Movement],
                         cutting_speed_mm_min: float,
                         pierce_time_s: float,
                         kerf_mm: float,
                         scale_factor: float,
                         thickness_mm: float,
                         machine: MachineProfile) -> CuttingTimeResult:
    """
    Sum time and distance over an ordered movement list.

    A pierce is counted on every transition from positioning (or job start)
    into cutting. Kerf inflates the reported cutting distance only; cutting
    time stays based on the nominal distance.

    Args:
        movements: Movements in execution order
        cutting_speed_mm_min: Resolved cutting speed [mm/min]
        pierce_time_s: Resolved time per pierce [s]
        kerf_mm: Resolved kerf [mm]
        scale_factor: Multiplier applied to every movement time and distance
        thickness_mm: Material thickness [mm]
        machine: Machine constants

    Returns:
        CuttingTimeResult
    """
    cutting_time = 0.0
    movement_time = 0.0
    piercing_time = 0.0
    total_distance = 0.0
    cutting_distance = 0.0
    movement_distance = 0.0
    pierce_count = 0

    in_cutting_segment = False

    for movement in movements:
        cost = cost_of_movement(movement, cutting_speed_mm_min, machine)
        distance = cost.distance * scale_factor
        time = cost.time * scale_factor

        if cost.is_cutting and kerf_mm > 0 and thickness_mm > 0:
            distance *= (1 + kerf_mm / thickness_mm)

        total_distance += distance

        if cost.is_cutting:
            cutting_distance += distance
            cutting_time += time
            if not in_cutting_segment:
                pierce_count += 1
                piercing_time += pierce_time_s
                in_cutting_segment = True
        else:
            movement_distance += distance
            movement_time += time
            in_cutting_segment = False

    # One part per pierce: no part-grouping information exists in the input
    part_count = pierce_count
    setup_time = machine.setup_time_s * part_count

    return CuttingTimeResult(
        total_time_sec=cutting_time + movement_time + piercing_time + setup_time,
        cutting_time_sec=cutting_time,
        movement_time_sec=movement_time,
        piercing_time_sec=piercing_time,
        setup_time_sec=setup_time,
        total_distance=total_distance,
        cutting_distance=cutting_distance,
        movement_distance=movement_distance,
        pierce_count=pierce_count,
        part_count=part_count
    )


class CuttingTimeEstimator:
    """
    Estimates cutting time and travel distance of a laser job.

    Calibration tables and machine constants are injected; the estimator
    keeps no per-job state, so one instance can serve concurrent callers.
    """

    def __init__(self, calibration: Optional[MachineCalibration] = None,
                 machine: Optional[MachineProfile] = None):
        """
        Initialize estimator.

        Args:
            calibration: Thickness tables (built-in GS3015 data if None)
            machine: Machine constants (GS3015 defaults if None)
        """
        self.calibration = calibration or MachineCalibration()
        self.machine = machine or MachineProfile()

    def resolve_cutting_speed(self, thickness_mm: float) -> float:
        """Cutting speed [mm/min] for a thickness."""
        return self.calibration.cutting_speed(thickness_mm)

    def resolve_pierce_time(self, thickness_mm: float) -> float:
        """Pierce time [s] for a thickness."""
        return self.calibration.pierce_time(thickness_mm)

    def resolve_kerf(self, thickness_mm: float, override: Optional[float] = None) -> float:
        """Kerf [mm]: explicit override, else exact table entry, else 0."""
        if override is not None:
            return float(override)
        return self.calibration.kerf_for(thickness_mm)

    def estimate(self, movements: Sequence[Movement],
                 options: CuttingTimeOptions) -> CuttingTimeResult:
        """
        Estimate time and distance for a movement list.

        Args:
            movements: Movements in drawing order
            options: Thickness, kerf override, scale factor, optimize flag

        Returns:
            CuttingTimeResult (all zero for empty input)
        """
        if not movements:
            return CuttingTimeResult()

        thickness = options.material_thickness
        kerf = self.resolve_kerf(thickness, options.kerf)

        processed: List[Movement] = (
            optimize_movements(movements) if options.optimize else list(movements)
        )

        result = accumulate_movements(
            processed,
            cutting_speed_mm_min=self.resolve_cutting_speed(thickness),
            pierce_time_s=self.resolve_pierce_time(thickness),
            kerf_mm=kerf,
            scale_factor=options.scale_factor,
            thickness_mm=thickness,
            machine=self.machine
        )

        logger.debug(
            f"Estimated {len(processed)} movements @ {thickness} mm: "
            f"{result.total_time_sec:.2f}s, {result.pierce_count} pierces, "
            f"cut {result.cutting_distance:.1f} mm, move {result.movement_distance:.1f} mm"
        )
        return result

    def estimate_geometry(self, geometry: ExtractedGeometry,
                          options: CuttingTimeOptions) -> CuttingTimeResult:
        """Estimate adapter output and attach its drawing extent."""
        result = self.estimate(geometry.movements, options)
        return result.with_cut_area(geometry.bounding_box)

    def estimate_dxf(self, source: Union[str, Path],
                     options: CuttingTimeOptions) -> CuttingTimeResult:
        """
        Estimate a DXF drawing.

        Args:
            source: DXF file path or DXF content string

        Raises:
            GeometryError: DXF cannot be read
        """
        return self.estimate_geometry(extract_dxf_movements(source), options)

    def estimate_svg(self, source: Union[str, Path],
                     options: CuttingTimeOptions) -> CuttingTimeResult:
        """
        Estimate an SVG drawing.

        Args:
            source: SVG markup or SVG file path

        Raises:
            GeometryError: SVG cannot be parsed
        """
        return self.estimate_geometry(extract_svg_movements(source), options)


# Built-in calibration, shared read-only by the module-level helpers
_DEFAULT_ESTIMATOR = CuttingTimeEstimator()


def get_default_estimator() -> CuttingTimeEstimator:
    return _DEFAULT_ESTIMATOR


def get_cutting_speed(thickness_mm: float) -> float:
    """Cutting speed [mm/min] from the built-in calibration."""
    return get_default_estimator().resolve_cutting_speed(thickness_mm)


def get_pierce_time(thickness_mm: float) -> float:
    """Pierce time [s] from the built-in calibration."""
    return get_default_estimator().resolve_pierce_time(thickness_mm)


def calculate_cutting_time(movements: Sequence[Movement],
                           options: CuttingTimeOptions) -> CuttingTimeResult:
    return get_default_estimator().estimate(movements, options)


def calculate_cutting_time_from_dxf(source, options: CuttingTimeOptions) -> CuttingTimeResult:
    return get_default_estimator().estimate_dxf(source, options)


def calculate_cutting_time_from_svg(source, options: CuttingTimeOptions) -> CuttingTimeResult:
    return get_default_estimator().estimate_svg(source, options)

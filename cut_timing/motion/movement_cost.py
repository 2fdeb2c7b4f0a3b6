"""
Movement Cost Model - time and distance of a single head movement.

Constant-velocity model with a flat acceleration penalty:
- cutting moves run at the thickness-dependent cutting speed
- positioning moves run at a fraction of rapid speed chosen by distance band:
    distance <= head-down limit  -> head stays down, 80% rapid
    distance <= jump limit       -> jump, 90% rapid
    otherwise                    -> full rapid traverse
- moves at least `min_distance_for_acceleration_mm` long get a fixed
  acceleration/deceleration time added
"""

import logging
import math
from dataclasses import dataclass

from ..exceptions import InvalidMachineProfileError
from ..models.movement import Movement, calculate_distance
from ..models.results import MovementCost

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MachineProfile:
    """Machine constants (GloryStar GS3015 defaults)."""
    rapid_speed_mm_min: float = 16000.0            # Positioning speed [mm/min]
    acceleration_time_s: float = 0.2               # Flat acc/dec penalty per move [s]
    min_distance_for_acceleration_mm: float = 5.0  # Shorter moves get no penalty
    setup_time_s: float = 1.5                      # Setup time per part [s]
    max_distance_for_head_down_mm: float = 3.0     # Head stays down up to this distance
    max_distance_for_jump_mm: float = 10.0         # Jump move up to this distance
    head_down_speed_factor: float = 0.8
    jump_speed_factor: float = 0.9

    def __post_init__(self):
        if not self.max_distance_for_head_down_mm < self.max_distance_for_jump_mm:
            raise InvalidMachineProfileError(
                "head-down distance must be below jump distance",
                details={
                    'max_distance_for_head_down_mm': self.max_distance_for_head_down_mm,
                    'max_distance_for_jump_mm': self.max_distance_for_jump_mm
                }
            )
        if self.rapid_speed_mm_min <= 0:
            raise InvalidMachineProfileError(
                "rapid speed must be positive",
                details={'rapid_speed_mm_min': self.rapid_speed_mm_min}
            )

    def positioning_speed(self, distance_mm: float) -> float:
        """
        Select positioning speed by distance band.

        Args:
            distance_mm: Length of the positioning move [mm]

        Returns:
            Speed [mm/min]
        """
        if distance_mm <= self.max_distance_for_head_down_mm:
            return self.rapid_speed_mm_min * self.head_down_speed_factor
        if distance_mm <= self.max_distance_for_jump_mm:
            return self.rapid_speed_mm_min * self.jump_speed_factor
        return self.rapid_speed_mm_min


DEFAULT_MACHINE = MachineProfile()


def mm_min_to_mm_s(v_mm_min: float) -> float:
    """Convert mm/min to mm/s."""
    return v_mm_min / 60.0


def movement_time(distance: float, speed_mm_min: float,
                  machine: MachineProfile = DEFAULT_MACHINE) -> float:
    """
    Time to travel `distance` at `speed_mm_min`, including acceleration penalty.

    Non-positive or non-finite inputs give zero time.
    """
    if not (math.isfinite(distance) and math.isfinite(speed_mm_min)):
        return 0.0
    if distance <= 0 or speed_mm_min <= 0:
        return 0.0

    time_s = distance / mm_min_to_mm_s(speed_mm_min)

    if distance >= machine.min_distance_for_acceleration_mm:
        time_s += machine.acceleration_time_s

    return time_s


def cost_of_movement(movement: Movement, cutting_speed_mm_min: float,
                     machine: MachineProfile = DEFAULT_MACHINE) -> MovementCost:
    """
    Calculate time and distance for one movement.

    Args:
        movement: Movement to evaluate
        cutting_speed_mm_min: Resolved cutting speed for the material [mm/min]
        machine: Machine constants

    Returns:
        MovementCost; malformed geometry (NaN/inf length) costs nothing
    """
    distance = calculate_distance(movement.start, movement.end)

    if not math.isfinite(distance):
        logger.debug(f"Ignoring movement with non-finite length: {movement}")
        return MovementCost(time=0.0, distance=0.0, is_cutting=movement.is_cutting)

    if movement.is_cutting:
        speed = cutting_speed_mm_min
    else:
        speed = machine.positioning_speed(distance)

    return MovementCost(
        time=movement_time(distance, speed, machine),
        distance=distance,
        is_cutting=movement.is_cutting
    )

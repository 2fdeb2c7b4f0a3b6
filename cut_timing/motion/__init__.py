"""Per-movement time and distance model."""

from .movement_cost import (
    MachineProfile,
    DEFAULT_MACHINE,
    cost_of_movement,
    movement_time,
    mm_min_to_mm_s
)

__all__ = [
    'MachineProfile',
    'DEFAULT_MACHINE',
    'cost_of_movement',
    'movement_time',
    'mm_min_to_mm_s'
]

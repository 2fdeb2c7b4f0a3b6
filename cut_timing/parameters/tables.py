"""
Thickness-indexed calibration tables.

Each table maps material thickness [mm] to one machine parameter:
- cutting speed [mm/min]
- pierce time [s]
- kerf allowance [mm]

Lookup policy (interpolating tables):
- exact key: table value
- below the smallest / above the largest key: flat extrapolation
- between two keys: linear interpolation
- anything else: value of the nearest key
"""

import math
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ..exceptions import InvalidParameterTableError


# Calibration data for the GloryStar GS3015 fiber laser
CUTTING_SPEEDS_MM_MIN: Dict[float, float] = {
    0.5: 16000.0,
    0.9: 6200.0,
    1.2: 6000.0,
    1.5: 4000.0,
    2.0: 3400.0,
    2.65: 3400.0,
    3.0: 3400.0,
    4.75: 2100.0,
    5.0: 2200.0,
    6.35: 1670.0,
    8.0: 1370.0,
    9.5: 1100.0,
    12.7: 842.0,
}

PIERCE_TIMES_S: Dict[float, float] = {
    0.5: 0.5,
    0.9: 0.1,
    1.2: 0.3,
    1.5: 0.4,
    2.0: 0.2,
    2.65: 0.2,
    3.0: 0.3,
    4.75: 0.8,
    5.0: 0.4,
    6.35: 0.8,
    8.0: 0.8,
    9.5: 0.8,
    12.7: 1.6,
}

KERF_MM: Dict[float, float] = {
    0.5: 0.0,
    0.9: 0.05,
    1.2: 0.1,
    1.5: 0.35,
    2.0: 0.25,
    2.65: 0.25,
    3.0: 0.3,
    4.75: 0.35,
    5.0: 0.35,
    6.35: 0.25,
    8.0: 0.4,
    9.5: 0.4,
    12.7: 1.4,
}


def interpolate(lo_key: float, lo_value: float,
                hi_key: float, hi_value: float, key: float) -> float:
    """Linear interpolation between (lo_key, lo_value) and (hi_key, hi_value)."""
    ratio = (key - lo_key) / (hi_key - lo_key)
    return lo_value + ratio * (hi_value - lo_value)


class ParameterTable:
    """
    Read-only ordered mapping thickness [mm] -> parameter value.

    Keys are stored sorted and strictly increasing; lookup uses binary search.
    """

    __slots__ = ('_name', '_keys', '_values')

    def __init__(self, name: str, data: Mapping[float, float]):
        if not data:
            raise InvalidParameterTableError(name, "table is empty")

        items = []
        for key, value in data.items():
            try:
                k = float(key)
                v = float(value)
            except (TypeError, ValueError):
                raise InvalidParameterTableError(
                    name, f"entry {key!r}: {value!r} is not numeric"
                )
            if not (math.isfinite(k) and math.isfinite(v)):
                raise InvalidParameterTableError(
                    name, f"entry {key!r}: {value!r} is not finite"
                )
            items.append((k, v))

        items.sort()
        for (k1, _), (k2, _) in zip(items, items[1:]):
            if k2 <= k1:
                raise InvalidParameterTableError(name, f"duplicate thickness {k1}")

        self._name = name
        self._keys: Tuple[float, ...] = tuple(k for k, _ in items)
        self._values: Tuple[float, ...] = tuple(v for _, v in items)

    @property
    def name(self) -> str:
        return self._name

    @property
    def keys(self) -> Tuple[float, ...]:
        return self._keys

    @property
    def min_key(self) -> float:
        return self._keys[0]

    @property
    def max_key(self) -> float:
        return self._keys[-1]

    def items(self):
        return zip(self._keys, self._values)

    def to_dict(self) -> Dict[float, float]:
        return dict(self.items())

    def get_exact(self, thickness: float, default: Optional[float] = None) -> Optional[float]:
        """Value for an exactly calibrated thickness, `default` otherwise."""
        i = bisect_left(self._keys, thickness)
        if i < len(self._keys) and self._keys[i] == thickness:
            return self._values[i]
        return default

    def lookup(self, thickness: float) -> float:
        """
        Resolve the parameter for any thickness.

        Args:
            thickness: Material thickness [mm]

        Returns:
            Exact, clamped or linearly interpolated table value
        """
        keys = self._keys
        values = self._values
        i = bisect_left(keys, thickness)

        # Exact match
        if i < len(keys) and keys[i] == thickness:
            return values[i]

        # Flat extrapolation below the table
        if thickness < keys[0]:
            return values[0]

        # Flat extrapolation above the table
        if thickness > keys[-1]:
            return values[-1]

        # Strictly between keys[i-1] and keys[i]
        if 0 < i < len(keys) and keys[i - 1] < thickness < keys[i]:
            return interpolate(keys[i - 1], values[i - 1], keys[i], values[i], thickness)

        return self._nearest(thickness)

    def _nearest(self, thickness: float) -> float:
        """Value of the key with minimal |key - thickness|; first key wins ties."""
        best = 0
        for j, key in enumerate(self._keys):
            if abs(key - thickness) < abs(self._keys[best] - thickness):
                best = j
        return self._values[best]

    def __len__(self):
        return len(self._keys)

    def __contains__(self, thickness) -> bool:
        return self.get_exact(thickness) is not None

    def __repr__(self):
        return f"ParameterTable({self.name!r}, {len(self._keys)} entries, {self.min_key}-{self.max_key} mm)"


@dataclass(frozen=True)
class MachineCalibration:
    """The three calibration tables of one machine."""
    cutting_speeds: ParameterTable = field(
        default_factory=lambda: ParameterTable('cutting_speeds_mm_min', CUTTING_SPEEDS_MM_MIN))
    pierce_times: ParameterTable = field(
        default_factory=lambda: ParameterTable('pierce_times_s', PIERCE_TIMES_S))
    kerf: ParameterTable = field(
        default_factory=lambda: ParameterTable('kerf_mm', KERF_MM))

    def cutting_speed(self, thickness: float) -> float:
        """Cutting speed [mm/min], interpolated."""
        return self.cutting_speeds.lookup(thickness)

    def pierce_time(self, thickness: float) -> float:
        """Pierce time [s], interpolated."""
        return self.pierce_times.lookup(thickness)

    def kerf_for(self, thickness: float) -> float:
        """Kerf [mm] for an exactly calibrated thickness, 0 otherwise."""
        return self.kerf.get_exact(thickness, default=0.0)

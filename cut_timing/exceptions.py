"""
Cut Timing - exception hierarchy.

Only configuration, option and geometry-adapter problems are raised.
Malformed numbers inside movements are neutralized to zero cost instead.
"""


class CutTimingError(Exception):
    """Base exception for all cut_timing errors."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(CutTimingError):
    """Invalid calibration or machine configuration."""
    pass


class InvalidParameterTableError(ConfigurationError):
    """Parameter table is empty, has non-finite entries or unordered keys."""

    def __init__(self, table_name: str, reason: str):
        super().__init__(
            f"Invalid parameter table '{table_name}': {reason}",
            code="INVALID_PARAMETER_TABLE",
            details={"table": table_name}
        )


class InvalidMachineProfileError(ConfigurationError):
    """Machine constants are inconsistent."""

    def __init__(self, reason: str, details: dict = None):
        super().__init__(
            f"Invalid machine profile: {reason}",
            code="INVALID_MACHINE_PROFILE",
            details=details
        )


# ============================================================
# Input Errors
# ============================================================

class InvalidOptionsError(CutTimingError):
    """Estimation options are out of their valid domain."""

    def __init__(self, field: str, value):
        super().__init__(
            f"Invalid value for '{field}': {value!r}",
            code="INVALID_OPTIONS",
            details={"field": field, "value": value}
        )


class GeometryError(CutTimingError):
    """Drawing content could not be converted into movements."""

    def __init__(self, message: str, source_format: str = None):
        super().__init__(
            message,
            code="GEOMETRY_ERROR",
            details={"format": source_format} if source_format else None
        )

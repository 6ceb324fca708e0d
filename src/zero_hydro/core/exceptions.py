"""
Exceptions for Zero-Hydro simulation runs.
"""


class ZeroHydroError(Exception):
    """Base exception for simulation and sync errors."""

    pass


class UpstreamDataUnavailable(ZeroHydroError):
    """Weather data could not be retrieved or is unusable as a series."""

    pass


class MalformedSample(ZeroHydroError):
    """A single hourly sample has a missing or non-numeric field."""

    def __init__(self, field: str, timestamp=None, value=None):
        self.field = field
        self.timestamp = timestamp
        self.value = value
        super().__init__(f"Malformed field '{field}' at {timestamp}: {value!r}")


class InvalidProfile(ZeroHydroError):
    """Water body profile is missing required values or is inconsistent."""

    pass


class NumericDivergence(ZeroHydroError):
    """Carried simulation state became NaN or infinite."""

    pass

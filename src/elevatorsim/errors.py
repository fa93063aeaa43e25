from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a run is configured with values it cannot simulate."""


class InvariantViolation(RuntimeError):
    """Internal fault: occupant ownership or car/rider state went inconsistent."""

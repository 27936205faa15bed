"""
Error taxonomy for the performance engine

Every failure degrades to "keep prior state" plus a diagnostic. Operations
raise these to their caller; nothing here is fatal to the process.
"""

from typing import Any, Dict, Optional


class PerformanceError(Exception):
    """Base class for all engine errors"""

    code = "PERFORMANCE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AddressingError(PerformanceError):
    """Layer or surface index/id out of range (no mutation performed)"""

    code = "ADDRESSING_ERROR"

    def __init__(self, target: str, value: Any, valid: Optional[list] = None):
        super().__init__(
            f"Invalid {target}: {value}",
            details={"target": target, "value": value, "valid": valid or []},
        )


class UnknownKindError(PerformanceError):
    """Unrecognized animation kind, effect kind or transition name"""

    code = "UNKNOWN_KIND"

    def __init__(self, what: str, name: Any, available: Optional[list] = None):
        super().__init__(
            f"Unknown {what}: {name}",
            details={"what": what, "name": name, "available": available or []},
        )


class ConfigurationError(PerformanceError):
    """Configuration cannot be resolved (e.g. default transition missing)"""

    code = "CONFIGURATION_ERROR"


class InvalidIntervalError(PerformanceError):
    """Auto-advance bounds rejected: min >= max or min below the floor"""

    code = "INVALID_INTERVAL"

    def __init__(self, interval_min: float, interval_max: float, reason: str):
        super().__init__(
            f"Invalid interval {interval_min}-{interval_max}ms: {reason}",
            details={"min": interval_min, "max": interval_max, "reason": reason},
        )


class SwitchInProgressError(PerformanceError):
    """A transition is already running; concurrent switches are rejected"""

    code = "SWITCH_IN_PROGRESS"

"""Configuration exceptions: settings values and declared versions."""

from typing import Any

from .base import SemcmpError


class ConfigurationError(SemcmpError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidVersionError(ConfigurationError):
    """Raised when a declared library version is not MAJOR.MINOR.PATCH."""

    def __init__(self, version: str):
        super().__init__(
            f"Invalid version: {version!r}",
            details={"version": version, "reason": "expected MAJOR.MINOR.PATCH"},
        )
        self.version = version

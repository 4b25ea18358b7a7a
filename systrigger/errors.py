"""Error types shared across systrigger."""

from __future__ import annotations


class SystriggerError(Exception):
    """Base exception for systrigger errors."""


class ConfigurationError(SystriggerError):
    """Raised for faults detected before dispatch; aborts the whole run."""


class DuplicateHandlerError(ConfigurationError):
    """Raised when two handlers are registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Handler '{name}' is already registered")
        self.name = name


class PatternError(ConfigurationError):
    """Raised when an interest glob is malformed."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid interest pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason

"""Application-level exception types for Gembot."""

from __future__ import annotations


class GembotError(Exception):
    """Base exception for Gembot."""


class ConfigurationError(GembotError):
    """Base exception for configuration and startup validation errors."""


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when an API key is required but missing."""


class TransportError(GembotError):
    """Raised when the generation service call does not complete successfully."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class DecodeError(GembotError):
    """Raised when a service response cannot be parsed at all."""

"""
Exception hierarchy shared by the services and the API layer.

Services raise these; ``src.api.app`` maps them to HTTP responses.
"""

from __future__ import annotations

from typing import Any, Optional


class RideShareError(Exception):
    """Base class for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "error": self.code,
            "details": self.details,
        }


class NotFoundError(RideShareError):
    """Referenced user, ride, booking or notification does not exist."""


class ConflictError(RideShareError):
    """Write would violate a uniqueness rule (e.g. a taken username)."""


class InvalidStatusTransition(RideShareError):
    """Raised when a booking status change violates the state machine."""


class TransportError(RideShareError):
    """Publishing to the push channel failed."""

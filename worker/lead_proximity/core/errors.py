"""Request-level errors raised by the lead scoring pipeline."""

from __future__ import annotations

from typing import Any, Dict, Optional


class LeadScoringError(RuntimeError):
    """Base class for failures that abort a scoring request."""

    def __init__(self, message: str, *, status: Optional[str] = None, address: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.address = address

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "status": self.status,
            "address": self.address,
        }


class InputError(LeadScoringError):
    """Raised when a required request field is missing or empty."""


class GeocodeError(LeadScoringError):
    """Raised when the geocoder cannot resolve an address."""


class ProviderError(LeadScoringError):
    """Raised when a travel-time batch request fails as a whole."""


class StoreError(LeadScoringError):
    """Raised when the candidate store cannot be read or written."""

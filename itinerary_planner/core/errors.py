"""Error hierarchy for itinerary generation.

Every failure the itinerary path can produce maps to one of three kinds:

- ``TripRequestError``: the caller sent missing or invalid trip parameters.
  Raised before any external call and reported as HTTP 400.
- ``UpstreamError``: the text-generation provider call failed (network,
  auth, rate limit, provider-side error). Reported as HTTP 500 with the
  provider's message.
- ``ParseError``: the provider answered but no well-formed JSON could be
  extracted from its text. Reported as HTTP 500 with the parser diagnostic.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ItineraryError(Exception):
    """Base class for errors that are reported to the caller as JSON."""

    status_code: int = 500
    error: str = "Failed to generate itinerary"

    def __init__(self, details: Optional[str] = None, *, error: Optional[str] = None) -> None:
        if error is not None:
            self.error = error
        self.details = details
        super().__init__(details or self.error)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class TripRequestError(ItineraryError):
    """Trip parameters are missing or malformed."""

    status_code = 400
    error = "Missing required parameters"


class UpstreamError(ItineraryError):
    """The text-generation service call did not succeed."""

    status_code = 500
    error = "Failed to generate itinerary"


class ParseError(ItineraryError):
    """The text-generation response held no usable JSON."""

    status_code = 500
    error = "Failed to parse AI response"

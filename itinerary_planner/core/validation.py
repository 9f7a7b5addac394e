"""Validation of raw request bodies into ``TripRequest``."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping

from pydantic import ValidationError

from itinerary_planner.core.errors import TripRequestError
from itinerary_planner.core.schemas import TripRequest

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("destination", "duration", "budget", "interests", "travelType")


def missing_fields(body: Mapping[str, Any]) -> List[str]:
    """Return the required fields that are absent or empty in ``body``."""

    return [name for name in REQUIRED_FIELDS if not body.get(name)]


def parse_trip_request(body: Any) -> TripRequest:
    """Validate a decoded JSON body and build a ``TripRequest``.

    Raises:
        TripRequestError: If the body is not an object, a required field is
            missing or empty, or a field has the wrong type or range.
    """
    if not isinstance(body, Mapping):
        raise TripRequestError("Request body must be a JSON object")

    missing = missing_fields(body)
    if missing:
        logger.info("Rejecting trip request; missing fields: %s", ", ".join(missing))
        raise TripRequestError(f"Missing fields: {', '.join(missing)}")

    try:
        return TripRequest.model_validate(dict(body))
    except ValidationError as exc:
        logger.info("Rejecting trip request; invalid fields: %s", exc)
        raise TripRequestError(str(exc), error="Invalid trip parameters") from exc

"""Turn free-text model output into a complete ``ItineraryResponse``.

Two steps live here:

1. ``extract_json`` isolates the JSON payload from a completion that may wrap
   it in prose. It scans from the first ``{``/``[`` to the last ``}``/``]`` and
   parses strictly. Stray brackets in prose before the real payload can
   mis-locate the start; that case surfaces as a ``ParseError``.
2. ``assemble_itinerary`` merges whatever the model produced with defaults
   computed from the budget so the response always has ``duration`` days and
   every field populated. Only a missing payload is fatal; missing or broken
   fields are filled in.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from itinerary_planner.core.errors import ParseError
from itinerary_planner.core.schemas import (
    Activity,
    Attraction,
    BudgetAllocation,
    BudgetBreakdown,
    BudgetSummary,
    DayItinerary,
    Hotel,
    ItineraryResponse,
    TripRequest,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_ACTIVITY_TIME = "Flexible"
DEFAULT_ACTIVITY_DESCRIPTION = "Enjoy your time"
DEFAULT_HOTEL_NAME = "Recommended Hotel"
DEFAULT_HOTEL_RATING = 4.0
DEFAULT_HOTEL_DESCRIPTION = "A comfortable stay in a great location."
DEFAULT_ATTRACTION_NAME = "Must-See Attraction"
DEFAULT_ATTRACTION_DURATION = "2-3 hours"
DEFAULT_ATTRACTION_DESCRIPTION = "A popular attraction worth visiting."

# Activities per day the default cost is spread over.
ACTIVITY_COST_DIVISOR = 4

_NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def extract_json(raw_output: str) -> Any:
    """Extract and parse the JSON object or array embedded in ``raw_output``.

    Raises:
        ParseError: If no opening or closing bracket exists, or the bracketed
            text is not valid JSON.
    """
    starts = [idx for idx in (raw_output.find("{"), raw_output.find("[")) if idx != -1]
    if not starts:
        raise ParseError("No JSON object or array found")
    trimmed = raw_output[min(starts):]

    end = max(trimmed.rfind("}"), trimmed.rfind("]"))
    if end == -1:
        raise ParseError("No closing JSON bracket found")
    candidate = trimmed[: end + 1]
    logger.debug("Cleaned JSON: %s", candidate)

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse model output as JSON: %s", exc)
        raise ParseError(str(exc)) from exc


def _is_missing(item: Mapping[str, Any], key: str) -> bool:
    return item.get(key) is None


def _text(item: Mapping[str, Any], key: str, default: str) -> str:
    if _is_missing(item, key):
        return default
    value = item[key]
    return value if isinstance(value, str) else str(value)


def _number(item: Mapping[str, Any], key: str, default: float) -> float:
    """Read a numeric field, accepting strings such as ``"$1,200"``."""
    if _is_missing(item, key):
        return default
    value = item[key]
    if isinstance(value, bool):
        logger.debug("Ignoring boolean value for %s: %r", key, value)
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER_PATTERN.search(value.replace(",", ""))
        if match:
            return float(match.group())
    logger.warning("Could not read %s=%r as a number; using %s", key, value, default)
    return default


def _map_entries(
    entries: Any,
    *,
    label: str,
    build: Callable[[Mapping[str, Any]], ModelT],
    limit: Optional[int] = None,
) -> List[ModelT]:
    """Build models from a list of dicts, skipping entries that are not dicts."""
    if entries is None:
        return []
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        logger.warning("Expected a list of %s entries, got %s", label, type(entries).__name__)
        return []

    results: List[ModelT] = []
    for idx, entry in enumerate(entries):
        if limit is not None and len(results) >= limit:
            logger.debug("Dropping %s %s entries beyond limit %s", len(entries) - idx, label, limit)
            break
        if not isinstance(entry, Mapping):
            logger.debug(
                "Skipping %s at position %s; expected object, got %s",
                label,
                idx,
                type(entry).__name__,
            )
            continue
        try:
            results.append(build(entry))
        except ValidationError as exc:
            logger.warning("Skipping %s at position %s: %s", label, idx, exc)
    return results


def format_activities(activities: Any, activities_budget: float) -> List[Activity]:
    """Map raw activity dicts, filling missing fields with defaults."""
    default_cost = activities_budget / ACTIVITY_COST_DIVISOR
    return _map_entries(
        activities,
        label="activity",
        build=lambda item: Activity(
            time=_text(item, "time", DEFAULT_ACTIVITY_TIME),
            description=_text(item, "description", DEFAULT_ACTIVITY_DESCRIPTION),
            cost=_number(item, "cost", default_cost),
        ),
    )


def build_daily_itinerary(
    days: Any, duration: int, budgets: BudgetAllocation
) -> List[DayItinerary]:
    """Return exactly ``duration`` days; absent days get no activities."""
    raw_days: Sequence[Any] = days if isinstance(days, list) else []
    if len(raw_days) != duration:
        logger.info("Model returned %s days for a %s-day trip", len(raw_days), duration)

    breakdown = budgets.daily_breakdown
    itinerary: List[DayItinerary] = []
    for index in range(duration):
        day_data = raw_days[index] if index < len(raw_days) else None
        activities: Any = []
        if isinstance(day_data, Mapping):
            activities = day_data.get("activities") or []
        itinerary.append(
            DayItinerary(
                day=index + 1,
                activities=format_activities(activities, breakdown.activities),
                budget=breakdown.model_copy(),
            )
        )
    return itinerary


def build_hotels(
    hotels: Any, destination: str, budgets: BudgetAllocation, limit: Optional[int] = None
) -> List[Hotel]:
    """Map raw hotel dicts, filling missing fields with defaults.

    Ratings outside 0..5 are clamped into that range, so a supplied rating of
    9 comes back as 5.
    """
    accommodation = budgets.daily_breakdown.accommodation

    def build(item: Mapping[str, Any]) -> Hotel:
        rating = _number(item, "rating", DEFAULT_HOTEL_RATING)
        return Hotel(
            name=_text(item, "name", DEFAULT_HOTEL_NAME),
            price_per_night=_number(item, "pricePerNight", accommodation),
            location=_text(item, "location", destination),
            rating=min(max(rating, 0.0), 5.0),
            description=_text(item, "description", DEFAULT_HOTEL_DESCRIPTION),
        )

    return _map_entries(hotels, label="hotel", build=build, limit=limit)


def build_attractions(
    attractions: Any, budgets: BudgetAllocation, limit: Optional[int] = None
) -> List[Attraction]:
    """Map raw attraction dicts, filling missing fields with defaults."""
    default_cost = budgets.daily_breakdown.activities / ACTIVITY_COST_DIVISOR
    return _map_entries(
        attractions,
        label="attraction",
        build=lambda item: Attraction(
            name=_text(item, "name", DEFAULT_ATTRACTION_NAME),
            estimated_cost=_number(item, "estimatedCost", default_cost),
            suggested_duration=_text(item, "suggestedDuration", DEFAULT_ATTRACTION_DURATION),
            description=_text(item, "description", DEFAULT_ATTRACTION_DESCRIPTION),
        ),
        limit=limit,
    )


def assemble_itinerary(
    payload: Any,
    request: TripRequest,
    budgets: BudgetAllocation,
    *,
    max_hotels: Optional[int] = None,
    max_attractions: Optional[int] = None,
) -> ItineraryResponse:
    """Merge the parsed model payload with computed defaults.

    Args:
        payload: Parsed JSON from the model; anything but an object is
            treated as an empty object
        request: The validated trip request
        budgets: Allocation computed from the request
        max_hotels: Upper bound on hotel recommendations, ``None`` for no cap
        max_attractions: Upper bound on attractions, ``None`` for no cap

    Returns:
        ItineraryResponse with exactly ``request.duration`` days
    """
    data: Dict[str, Any]
    if isinstance(payload, Mapping):
        data = dict(payload)
    else:
        logger.warning("Model payload is %s, not an object; using defaults", type(payload).__name__)
        data = {}

    return ItineraryResponse(
        daily_itinerary=build_daily_itinerary(
            data.get("dailyItinerary"), request.duration, budgets
        ),
        hotel_recommendations=build_hotels(
            data.get("hotelRecommendations"), request.destination, budgets, max_hotels
        ),
        must_see_attractions=build_attractions(
            data.get("mustSeeAttractions"), budgets, max_attractions
        ),
        budget_breakdown=BudgetBreakdown(total_cost=request.budget, remaining=0),
        budget_summary=BudgetSummary(
            savings_buffer=budgets.savings_buffer,
            daily_spending=budgets.daily_budget,
            weekly_overview=budgets.weekly_budget,
            planned_spend=budgets.available_budget,
            remaining=0,
        ),
    )

"""Pydantic data models for the itinerary planner.

This module contains the models shared by the itinerary generation path and the
planner session layer. Every model that crosses the HTTP boundary serialises to
camelCase so the JSON contract matches what the web client expects.

Key model categories:
- TripRequest: validated trip parameters submitted by the client
- BudgetAllocation / DayBudget: derived budget arithmetic
- DayItinerary / Activity / Hotel / Attraction: normalised model output
- ItineraryResponse: the complete payload returned to the client
- TripDraft / PlannerSession: explicit per-user planner state
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from itinerary_planner.core.types import NonEmptyStr, NonNegMoney, PositiveMoney, Rating

__all__ = [
    "Activity",
    "Attraction",
    "BudgetAllocation",
    "BudgetBreakdown",
    "BudgetSummary",
    "CamelModel",
    "CityInfo",
    "DayBudget",
    "DayItinerary",
    "Hotel",
    "ItineraryResponse",
    "PlannerSession",
    "TripDraft",
    "TripRequest",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model that reads either naming style and writes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TripRequest(CamelModel):
    """Trip parameters submitted to the itinerary endpoint.

    Attributes:
        destination: Free-text destination, e.g. "Lisbon, Portugal"
        duration: Trip length in days
        budget: Total trip budget in USD
        interests: Interest tags; duplicates are dropped, order is kept
        travel_type: Travel style tag (``travelType`` on the wire)
    """

    destination: NonEmptyStr
    duration: int = Field(gt=0, description="Trip length in days")
    budget: PositiveMoney = Field(description="Total trip budget")
    interests: List[NonEmptyStr] = Field(min_length=1, description="Interest tags")
    travel_type: NonEmptyStr = Field(description="Preferred travel style")

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    @field_validator("interests")
    @classmethod
    def _dedupe_interests(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


class DayBudget(CamelModel):
    """Per-day spend split across the four budget categories."""

    accommodation: NonNegMoney
    food: NonNegMoney
    transportation: NonNegMoney
    activities: NonNegMoney
    total: NonNegMoney


class BudgetAllocation(CamelModel):
    """Budget figures derived from the total budget and trip length."""

    savings_buffer: NonNegMoney
    available_budget: NonNegMoney
    daily_budget: NonNegMoney
    weekly_budget: NonNegMoney
    daily_breakdown: DayBudget


class Activity(CamelModel):
    """Single scheduled activity within a day."""

    time: str
    description: str
    cost: float


class DayItinerary(CamelModel):
    """One day of the plan with its activities and budget split."""

    day: int = Field(ge=1)
    activities: List[Activity] = Field(default_factory=list)
    budget: DayBudget


class Hotel(CamelModel):
    """Lodging suggestion."""

    name: str
    price_per_night: float
    location: str
    rating: Rating
    description: str


class Attraction(CamelModel):
    """Must-see place suggestion."""

    name: str
    estimated_cost: float
    suggested_duration: str
    description: str


class BudgetBreakdown(CamelModel):
    total_cost: float
    # Spend tracking does not exist yet; always 0.
    remaining: float = 0


class BudgetSummary(CamelModel):
    """Budget overview mirroring ``BudgetAllocation`` for display."""

    savings_buffer: float
    daily_spending: float
    weekly_overview: float
    planned_spend: float
    remaining: float = 0


class ItineraryResponse(CamelModel):
    """Complete itinerary returned by the generate endpoint."""

    daily_itinerary: List[DayItinerary]
    hotel_recommendations: List[Hotel] = Field(default_factory=list)
    must_see_attractions: List[Attraction] = Field(default_factory=list)
    budget_breakdown: BudgetBreakdown
    budget_summary: BudgetSummary


class CityInfo(CamelModel):
    """City picked in the planner form."""

    name: NonEmptyStr
    country: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    population: Optional[int] = None
    country_code: Optional[str] = None


class TripDraft(CamelModel):
    """Partially completed trip form kept between visits."""

    country: str = ""
    city: Optional[CityInfo] = None
    budget: float = 1000
    days: int = 7
    touring: Optional[Literal["country", "city"]] = None
    interests: List[str] = Field(default_factory=list)

    @property
    def destination(self) -> str:
        """Destination string derived from the touring preference."""

        if self.touring == "country" or self.city is None:
            return self.country
        if self.country:
            return f"{self.city.name}, {self.country}"
        return self.city.name

    def to_request_body(self) -> Dict[str, Any]:
        """Map the draft onto the generate-itinerary request body."""

        return {
            "destination": self.destination,
            "duration": self.days,
            "budget": self.budget,
            "interests": list(self.interests),
            "travelType": self.touring,
        }


class PlannerSession(CamelModel):
    """Explicit per-user planner state: who is signed in and the form draft."""

    session_id: str
    user_email: Optional[str] = None
    draft: Optional[TripDraft] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @computed_field(alias="loggedIn", return_type=bool)
    @property
    def logged_in(self) -> bool:
        return self.user_email is not None

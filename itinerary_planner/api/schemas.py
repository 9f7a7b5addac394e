from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from itinerary_planner.core.schemas import (
    CamelModel,
    ItineraryResponse,
    PlannerSession,
    TripDraft,
)


class ErrorResponse(BaseModel):
    """Structured error body returned for 4xx/5xx responses."""

    error: str = Field(..., description="Short error summary")
    details: Optional[str] = Field(default=None, description="Underlying diagnostic")


class LoginRequest(BaseModel):
    """Sign-in payload. Credentials are not verified."""

    email: str = Field(..., min_length=3, description="User email address")
    password: Optional[str] = Field(default=None, description="Accepted and ignored")


class TestRouteResponse(BaseModel):
    message: str
    received: Optional[Any] = None


class CleanupResponse(CamelModel):
    removed: int = Field(..., description="Number of sessions dropped")
    active_sessions: int = Field(..., description="Sessions still stored")


__all__: List[str] = [
    "CleanupResponse",
    "ErrorResponse",
    "ItineraryResponse",
    "LoginRequest",
    "PlannerSession",
    "TestRouteResponse",
    "TripDraft",
]

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid trip parameters"},
    500: {"model": ErrorResponse, "description": "Text generation or parsing failed"},
}

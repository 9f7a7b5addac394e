"""Shared type aliases used across the itinerary models."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

NonNegMoney = Annotated[float, Field(ge=0)]
PositiveMoney = Annotated[float, Field(gt=0)]
Rating = Annotated[float, Field(ge=0, le=5)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

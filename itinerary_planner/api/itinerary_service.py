from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage
from langchain_core.runnables import Runnable

from itinerary_planner.core.budget import BUDGET_ALLOCATIONS, calculate_budgets
from itinerary_planner.core.config import ApiSettings
from itinerary_planner.core.errors import ParseError, UpstreamError
from itinerary_planner.core.post_processing import assemble_itinerary, extract_json
from itinerary_planner.core.prompts import itinerary_prompt
from itinerary_planner.core.schemas import ItineraryResponse, TripRequest
from itinerary_planner.services import create_chat_model, message_text

logger = logging.getLogger(__name__)


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def build_itinerary_prompt(request: TripRequest) -> str:
    """Render the itinerary prompt for a trip request."""

    return itinerary_prompt.format(
        duration=request.duration,
        destination=request.destination,
        budget=_format_amount(request.budget),
        interests=", ".join(request.interests),
        travel_type=request.travel_type,
        accommodation_budget=request.budget * BUDGET_ALLOCATIONS["accommodation"],
        food_budget=request.budget * BUDGET_ALLOCATIONS["food"],
        transportation_budget=request.budget * BUDGET_ALLOCATIONS["transportation"],
        activities_budget=request.budget * BUDGET_ALLOCATIONS["activities"],
    )


class ItineraryService:
    """Generates itineraries by prompting the chat model and normalising its answer.

    The service holds no per-request state; one instance serves every request.

    Attributes:
        settings: Generation settings (model, limits, list caps)
        llm: Runnable chat model; a single user message in, one completion out
    """

    def __init__(self, settings: ApiSettings, llm: Optional[Runnable] = None) -> None:
        """Initialise the service.

        Args:
            settings: Configuration containing the provider key and model knobs
            llm: Pre-built chat model; created from ``settings`` when omitted
        """
        self.settings = settings
        self.llm = llm if llm is not None else create_chat_model(settings)

    def __repr__(self) -> str:
        return (
            f"ItineraryService(model='{self.settings.model}', "
            f"temperature={self.settings.temperature}, "
            f"max_tokens={self.settings.max_tokens})"
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "llm_model": self.settings.model,
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
            "json_mode": self.settings.json_mode,
            "max_hotels": self.settings.max_hotels,
            "max_attractions": self.settings.max_attractions,
        }

    async def complete(self, prompt: str) -> str:
        """Send one user-role prompt to the chat model and return its text.

        Raises:
            UpstreamError: If the provider call fails for any reason
        """
        logger.info("Making request to %s", self.settings.model)
        try:
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as exc:
            logger.error("Text generation request failed: %s", exc)
            raise UpstreamError(str(exc) or type(exc).__name__) from exc
        logger.info("Received response from %s", self.settings.model)

        raw_output = message_text(response)
        logger.debug("Raw AI output: %s", raw_output)
        return raw_output

    async def generate(self, request: TripRequest) -> ItineraryResponse:
        """Produce a complete itinerary for a validated trip request.

        Raises:
            UpstreamError: If the chat model call fails
            ParseError: If the completion holds no well-formed JSON
        """
        budgets = calculate_budgets(request.budget, request.duration)
        prompt = build_itinerary_prompt(request)

        raw_output = await self.complete(prompt)
        if not raw_output.strip():
            raise ParseError("Empty response from text generation service")

        payload = extract_json(raw_output)
        return assemble_itinerary(
            payload,
            request,
            budgets,
            max_hotels=self.settings.max_hotels,
            max_attractions=self.settings.max_attractions,
        )

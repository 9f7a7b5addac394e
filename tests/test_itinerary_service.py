"""Tests for the itinerary service and the chat model helpers."""
from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from itinerary_planner.api.itinerary_service import ItineraryService, build_itinerary_prompt
from itinerary_planner.core.config import ApiSettings
from itinerary_planner.core.errors import ParseError, UpstreamError
from itinerary_planner.core.schemas import TripRequest
from itinerary_planner.services import create_chat_model, message_text


@pytest.fixture
def trip() -> TripRequest:
    return TripRequest(
        destination="Lisbon, Portugal",
        duration=3,
        budget=1200,
        interests=["food", "nightlife"],
        travel_type="city",
    )


def _completion(**overrides) -> str:
    payload = {
        "dailyItinerary": [
            {"day": 1, "activities": [{"time": "10:00 AM", "description": "Alfama stroll", "cost": 0}]},
            {"day": 2, "activities": [{"description": "Pasteis de Belem"}]},
        ],
        "hotelRecommendations": [{"name": f"Hotel {i}"} for i in range(5)],
        "mustSeeAttractions": [{"name": "Torre de Belem", "estimatedCost": 8}],
    }
    payload.update(overrides)
    return "Sure! Here is the itinerary:\n" + json.dumps(payload) + "\nHave a great trip."


def test_build_itinerary_prompt_mentions_trip_details(trip):
    prompt = build_itinerary_prompt(trip)

    assert "3-day trip to Lisbon, Portugal" in prompt
    assert "budget of $1200" in prompt
    assert "interested in food, nightlife" in prompt
    assert "prefers a city style trip" in prompt
    assert "Accommodation: 480.00" in prompt
    assert "Activities: 240.00" in prompt
    assert "Provide exactly 3 days of activities" in prompt
    for key in ("dailyItinerary", "hotelRecommendations", "mustSeeAttractions"):
        assert f'"{key}"' in prompt


def test_build_itinerary_prompt_formats_fractional_budget(trip):
    prompt = build_itinerary_prompt(trip.model_copy(update={"budget": 999.5}))
    assert "budget of $999.50" in prompt


@pytest.mark.asyncio
async def test_generate_normalises_completion(settings, stub_llm, trip):
    stub_llm.response = _completion()
    service = ItineraryService(settings, llm=stub_llm)

    itinerary = await service.generate(trip)

    assert len(stub_llm.calls) == 1
    messages = stub_llm.calls[0]
    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)
    assert "Lisbon, Portugal" in messages[0].content

    assert [d.day for d in itinerary.daily_itinerary] == [1, 2, 3]
    assert itinerary.daily_itinerary[0].activities[0].cost == 0
    assert itinerary.daily_itinerary[1].activities[0].time == "Flexible"
    assert itinerary.daily_itinerary[2].activities == []
    assert len(itinerary.hotel_recommendations) == settings.max_hotels
    assert itinerary.must_see_attractions[0].estimated_cost == 8
    assert itinerary.budget_breakdown.total_cost == 1200


@pytest.mark.asyncio
async def test_generate_wraps_upstream_failures(settings, stub_llm, trip):
    stub_llm.error = RuntimeError("429 rate limit exceeded")
    service = ItineraryService(settings, llm=stub_llm)

    with pytest.raises(UpstreamError) as excinfo:
        await service.generate(trip)

    assert excinfo.value.error == "Failed to generate itinerary"
    assert excinfo.value.details == "429 rate limit exceeded"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_generate_rejects_completion_without_json(settings, stub_llm, trip):
    stub_llm.response = "I'm sorry, I can't plan that trip."
    service = ItineraryService(settings, llm=stub_llm)

    with pytest.raises(ParseError) as excinfo:
        await service.generate(trip)

    assert excinfo.value.details == "No JSON object or array found"


@pytest.mark.asyncio
async def test_generate_rejects_empty_completion(settings, stub_llm, trip):
    stub_llm.response = "   "
    service = ItineraryService(settings, llm=stub_llm)

    with pytest.raises(ParseError):
        await service.generate(trip)


def test_service_describe_reports_generation_settings(settings, stub_llm):
    info = ItineraryService(settings, llm=stub_llm).describe()

    assert info["llm_model"] == settings.model
    assert info["temperature"] == 0.7
    assert info["max_tokens"] == 2048
    assert info["max_hotels"] == 3


def test_create_chat_model_requires_api_key():
    with pytest.raises(RuntimeError, match="groq_api_key"):
        create_chat_model(ApiSettings())


def test_create_chat_model_uses_configured_model(settings):
    llm = create_chat_model(settings)

    assert llm.model_name == settings.model
    assert llm.temperature == settings.temperature
    assert llm.max_tokens == settings.max_tokens


def test_create_chat_model_json_mode_binds_response_format():
    settings = ApiSettings(groq_api_key="test-key", json_mode=True)

    llm = create_chat_model(settings)

    assert llm.kwargs["response_format"] == {"type": "json_object"}


@pytest.mark.parametrize(
    "content, expected",
    [
        ("plain text", "plain text"),
        ([{"type": "text", "text": "a"}, "b", {"type": "image_url"}], "ab"),
        ({"dailyItinerary": []}, '{"dailyItinerary": []}'),
    ],
)
def test_message_text_flattens_content(content, expected):
    assert message_text(SimpleNamespace(content=content)) == expected


def test_message_text_reads_ai_message():
    assert message_text(AIMessage(content="{}")) == "{}"

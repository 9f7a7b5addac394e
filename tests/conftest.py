"""Pytest configuration for the itinerary planner project."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest
from langchain_core.messages import AIMessage

# Ensure the project root is on sys.path so that import itinerary_planner works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from itinerary_planner.core.config import ApiSettings  # noqa: E402


class StubLLM:
    """Async chat model double that records prompts and returns canned text."""

    def __init__(self, response: str = "", error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[List[Any]] = []

    async def ainvoke(self, messages: List[Any]) -> AIMessage:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.response)


@pytest.fixture
def settings() -> ApiSettings:
    return ApiSettings(groq_api_key="test-key")


@pytest.fixture
def stub_llm() -> StubLLM:
    return StubLLM()

"""Chat model factory for the hosted text-generation provider.

The provider exposes an OpenAI-compatible API, so the model is driven through
``ChatOpenAI`` with a custom base URL.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI

from itinerary_planner.core.config import ApiSettings

logger = logging.getLogger(__name__)


def create_chat_model(settings: ApiSettings) -> Runnable:
    """Build the chat model used for itinerary generation.

    When ``settings.json_mode`` is on, the provider is asked for a JSON object
    response so the completion needs no prose stripping.
    """
    llm: BaseChatModel = ChatOpenAI(
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        api_key=settings.ensure("groq_api_key"),
        base_url=settings.groq_base_url,
    )
    logger.info(
        "Created chat model %s (temperature=%s, max_tokens=%s, json_mode=%s)",
        settings.model,
        settings.temperature,
        settings.max_tokens,
        settings.json_mode,
    )
    if settings.json_mode:
        return llm.bind(response_format={"type": "json_object"})
    return llm


def message_text(message: Any) -> str:
    """Return the text content of a chat model response."""

    content = getattr(message, "content", message)
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                chunks.append(chunk)
        return "".join(chunks)
    if isinstance(content, dict):
        return json.dumps(content)
    return str(content)

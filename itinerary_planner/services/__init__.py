"""External service integrations for itinerary generation.

- LLM: chat model factory for the hosted text-generation provider

Example Usage:
    >>> from itinerary_planner.services import create_chat_model
    >>> from itinerary_planner.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> llm = create_chat_model(settings)
"""

from itinerary_planner.services.llm import create_chat_model, message_text

__all__ = [
    "create_chat_model",
    "message_text",
]

"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the LLM credentials and generation knobs."""

    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.1-8b-instant"
    temperature: float = 0.7
    max_tokens: int = 2048
    request_timeout: float = 60.0
    max_retries: int = 2
    json_mode: bool = False
    max_hotels: int = 3
    max_attractions: int = 7
    cors_origins: List[str] = field(
        default_factory=lambda: DEFAULT_CORS_ORIGINS.split(",")
    )
    log_level: str = "INFO"
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables."""

        origins = os.getenv("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)
        return cls(
            groq_api_key=os.getenv("GROQ_API_KEY"),
            groq_base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
            model=os.getenv("ITINERARY_MODEL", "llama-3.1-8b-instant"),
            temperature=float(os.getenv("ITINERARY_TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv("ITINERARY_MAX_TOKENS", "2048")),
            request_timeout=float(os.getenv("LLM_REQUEST_TIMEOUT", "60")),
            max_retries=int(os.getenv("LLM_MAX_RETRIES", "2")),
            json_mode=_env_bool("ITINERARY_JSON_MODE", False),
            max_hotels=int(os.getenv("MAX_HOTEL_RECOMMENDATIONS", "3")),
            max_attractions=int(os.getenv("MAX_ATTRACTIONS", "7")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    def apply_logging(self) -> None:
        """Configure the root logger with the configured level."""

        level = getattr(logging, self.log_level, logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )

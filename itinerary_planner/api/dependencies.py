import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from itinerary_planner.api.itinerary_service import ItineraryService
from itinerary_planner.api.session_store import InMemorySessionStore
from itinerary_planner.core.config import ApiSettings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


@lru_cache(maxsize=1)
def get_itinerary_service() -> ItineraryService:
    return ItineraryService(get_settings())


@lru_cache(maxsize=1)
def get_session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Itinerary planner API starting")
    try:
        yield
    finally:
        logger.info("Itinerary planner API shutting down")

"""FastAPI surface for the AI itinerary planner."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict, Union

import sentry_sdk
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from itinerary_planner.api.dependencies import (
    get_itinerary_service,
    get_session_store,
    get_settings,
    lifespan,
)
from itinerary_planner.api.schemas import (
    ERROR_RESPONSES,
    CleanupResponse,
    ItineraryResponse,
    LoginRequest,
    PlannerSession,
    TestRouteResponse,
    TripDraft,
)
from itinerary_planner.core.errors import ItineraryError, TripRequestError, UpstreamError
from itinerary_planner.core.validation import parse_trip_request

settings = get_settings()
settings.apply_logging()

logger = logging.getLogger(__name__)

if settings.sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        enable_logs=True,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="Itinerary Planner API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: ItineraryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise TripRequestError("Request body must be valid JSON") from exc


async def _generate(body: Any) -> Union[ItineraryResponse, JSONResponse]:
    """Validate ``body`` and run itinerary generation, mapping errors to JSON."""
    try:
        trip = parse_trip_request(body)
        logger.info(
            "Generating itinerary: %s days in %s, budget %s, style %s",
            trip.duration,
            trip.destination,
            trip.budget,
            trip.travel_type,
        )
        service = get_itinerary_service()
        itinerary = await service.generate(trip)
    except TripRequestError as exc:
        logger.warning("Invalid trip request: %s", exc.details)
        return _error_response(exc)
    except ItineraryError as exc:
        logger.error("%s: %s", exc.error, exc.details)
        return _error_response(exc)
    except Exception as exc:
        logger.error("Unexpected error during itinerary generation: %s", exc, exc_info=True)
        return _error_response(UpstreamError(str(exc) or type(exc).__name__))

    logger.info("Itinerary generated with %s days", len(itinerary.daily_itinerary))
    return itinerary


@app.post(
    "/api/generate-itinerary",
    response_model=ItineraryResponse,
    responses=ERROR_RESPONSES,
)
async def generate_itinerary(request: Request) -> Union[ItineraryResponse, JSONResponse]:
    """Generate a budgeted day-by-day itinerary with the hosted LLM.

    Validates the trip parameters, splits the budget, prompts the model, and
    normalises its answer so the response always contains ``duration`` days.

    Example JSON payload:
        ```json
        {
            "destination": "Lisbon, Portugal",
            "duration": 5,
            "budget": 1000,
            "interests": ["culture", "food"],
            "travelType": "city"
        }
        ```

    Returns:
        200 with the itinerary, 400 ``{error, details}`` when parameters are
        missing or invalid, 500 ``{error, details}`` when the model call or
        response parsing fails
    """
    logger.info("Received itinerary request")
    try:
        body = await _read_json(request)
    except TripRequestError as exc:
        return _error_response(exc)
    return await _generate(body)


@app.get("/api/test", response_model=TestRouteResponse)
async def test_route() -> TestRouteResponse:
    return TestRouteResponse(message="Test API route is working!")


@app.post("/api/test", response_model=TestRouteResponse)
async def test_route_echo(request: Request) -> Union[TestRouteResponse, JSONResponse]:
    """Echo the received JSON body back to the caller."""
    try:
        body = await _read_json(request)
    except TripRequestError as exc:
        return _error_response(exc)
    logger.info("Test API received: %s", body)
    return TestRouteResponse(message="Test API route is working!", received=body)


def _load_session(session_id: str) -> PlannerSession:
    session = get_session_store().load(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown planner session '{session_id}'.")
    return session


@app.post("/api/session", response_model=PlannerSession, status_code=201)
async def create_session() -> PlannerSession:
    """Start a planner session holding sign-in state and the trip draft."""
    return get_session_store().create()


@app.post("/api/session/cleanup", response_model=CleanupResponse)
async def cleanup_sessions(max_age_minutes: int = 60) -> CleanupResponse:
    """Drop sessions that have been idle longer than ``max_age_minutes``."""
    store = get_session_store()
    removed = store.cleanup_old_sessions(max_age_minutes=max_age_minutes)
    return CleanupResponse(removed=removed, active_sessions=len(store))


@app.get("/api/session/{session_id}", response_model=PlannerSession)
async def get_session(session_id: str) -> PlannerSession:
    return _load_session(session_id)


@app.post("/api/session/{session_id}/login", response_model=PlannerSession)
async def login(session_id: str, payload: LoginRequest) -> PlannerSession:
    """Record the signed-in user on the session."""
    session = _load_session(session_id)
    logger.info("Session %s signed in", session_id)
    return get_session_store().save(session.model_copy(update={"user_email": payload.email}))


@app.post("/api/session/{session_id}/logout", response_model=PlannerSession)
async def logout(session_id: str) -> PlannerSession:
    session = _load_session(session_id)
    logger.info("Session %s signed out", session_id)
    return get_session_store().save(session.model_copy(update={"user_email": None}))


@app.put("/api/session/{session_id}/draft", response_model=PlannerSession)
async def save_draft(session_id: str, draft: TripDraft) -> PlannerSession:
    """Store the current trip form draft."""
    session = _load_session(session_id)
    logger.debug("Saving draft for session %s: %s", session_id, draft)
    return get_session_store().save_draft(session, draft)


@app.delete("/api/session/{session_id}/draft", response_model=PlannerSession)
async def discard_draft(session_id: str) -> PlannerSession:
    session = _load_session(session_id)
    return get_session_store().save_draft(session, None)


@app.post(
    "/api/session/{session_id}/itinerary",
    response_model=ItineraryResponse,
    responses=ERROR_RESPONSES,
)
async def generate_from_draft(session_id: str) -> Union[ItineraryResponse, JSONResponse]:
    """Generate an itinerary from the session's saved draft.

    Requires a signed-in session. The draft is discarded once an itinerary
    has been produced; on failure it is kept so the user can retry.
    """
    session = _load_session(session_id)
    if not session.logged_in:
        raise HTTPException(status_code=401, detail="Sign in to generate an itinerary.")
    if session.draft is None:
        return _error_response(TripRequestError("No trip draft saved for this session"))

    submitted = session.draft
    result = await _generate(submitted.to_request_body())
    if isinstance(result, ItineraryResponse):
        # Reload: the session may have changed while the model was running.
        store = get_session_store()
        current = store.load(session_id)
        if current is not None and current.draft == submitted:
            store.save_draft(current, None)
    return result


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "itinerary-planner-api"}


@app.get("/service/info")
async def get_service_info() -> Dict[str, Any]:
    """Get information about the generation configuration."""
    service = get_itinerary_service()

    return {
        "service_info": {
            **service.describe(),
            "active_sessions": len(get_session_store()),
        }
    }

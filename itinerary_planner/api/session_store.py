from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from uuid import uuid4

from itinerary_planner.core.schemas import PlannerSession, TripDraft

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Process-local store for planner sessions.

    Sessions carry the signed-in user and the trip form draft. They are loaded
    and saved explicitly by the routes that need them and are lost on restart.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, PlannerSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> PlannerSession:
        session = PlannerSession(session_id=f"session_{uuid4()}")
        self._sessions[session.session_id] = session
        logger.info("Created planner session %s", session.session_id)
        return session.model_copy(deep=True)

    def load(self, session_id: str) -> Optional[PlannerSession]:
        """Return a copy of the stored session, or ``None`` if unknown."""

        session = self._sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    def save(self, session: PlannerSession) -> PlannerSession:
        """Persist ``session`` and stamp its update time."""

        stored = session.model_copy(
            update={"updated_at": datetime.now(timezone.utc)}, deep=True
        )
        self._sessions[stored.session_id] = stored
        return stored.model_copy(deep=True)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def save_draft(self, session: PlannerSession, draft: Optional[TripDraft]) -> PlannerSession:
        return self.save(session.model_copy(update={"draft": draft}))

    def cleanup_old_sessions(self, max_age_minutes: int = 60) -> int:
        """Remove sessions not updated within ``max_age_minutes``.

        Returns:
            Number of sessions removed
        """
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=max_age_minutes)
        stale = [sid for sid, s in self._sessions.items() if s.updated_at < cutoff]
        for session_id in stale:
            self._sessions.pop(session_id, None)
        if stale:
            logger.info("Cleaned up %s planner sessions", len(stale))
        return len(stale)

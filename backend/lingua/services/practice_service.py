import logging
import threading
import uuid
from typing import Callable

from fastapi import Request
from sqlalchemy.orm import Session

from lingua.core.config import Settings, settings as default_settings
from lingua.db.session import SessionLocal
from lingua.domain.practice.dto import ExercisePreferences
from lingua.domain.practice.policy import SchedulingPolicy
from lingua.domain.practice.queue import SessionBuilder
from lingua.domain.practice.scores import ScoreTracker
from lingua.domain.practice.session import PracticeSession
from lingua.services.card_store import SqlCardStore

logger = logging.getLogger(__name__)


class PracticeSessionRegistry:
    """
    Keeps one practice session per user between requests.
    Sessions live in process memory only.
    """

    def __init__(
            self,
            session_factory: Callable[[], Session] = SessionLocal,
            settings: Settings = default_settings,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self._sessions: dict[uuid.UUID, PracticeSession] = {}
        # One lock per user serialises every call into that user's session
        self._user_locks: dict[uuid.UUID, threading.Lock] = {}
        self._lock = threading.Lock()

    def get(self, user_id: uuid.UUID) -> PracticeSession | None:
        return self._sessions.get(user_id)

    def lock_for(self, user_id: uuid.UUID) -> threading.Lock:
        with self._lock:
            return self._user_locks.setdefault(user_id, threading.Lock())

    def get_or_create(self, user_id: uuid.UUID, preferences: ExercisePreferences) -> PracticeSession:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = self._create(user_id, preferences)
                self._sessions[user_id] = session
            return session

    def discard(self, user_id: uuid.UUID) -> None:
        with self._lock:
            self._sessions.pop(user_id, None)

    def _create(self, user_id: uuid.UUID, preferences: ExercisePreferences) -> PracticeSession:
        s = self.settings
        logger.debug("Creating practice session for user %s", user_id)
        return PracticeSession(
            SqlCardStore(self.session_factory, user_id),
            preferences,
            builder=SessionBuilder(min_cards_for_multiple_choice=s.MIN_CARDS_FOR_MULTIPLE_CHOICE),
            tracker=ScoreTracker(SchedulingPolicy(s.scheduling_snapshot())),
            removal_policy=s.REMOVED_CARD_POLICY,
            on_session_complete=lambda reviewed: logger.info(
                "User %s finished a practice session: %s item(s) reviewed", user_id, reviewed
            ),
        )


def get_session_registry(request: Request) -> PracticeSessionRegistry:
    return request.app.state.practice_sessions

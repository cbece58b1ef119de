# backend/lingua/domain/practice/session.py

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from lingua.core.enums import AnswerState, ExerciseType, RemovalPolicy, SessionStatus

from .dto import ExercisePreferences
from .entities import Card, PracticeItem
from .ports import CardStore
from .queue import SessionBuilder, select_due_cards
from .scores import ScoreTracker

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PracticeSessionState:
    queue: list[PracticeItem] = field(default_factory=list)
    position: int = 0
    is_session_active: bool = False
    is_session_complete: bool = False
    session_start_time: Optional[datetime] = None

    correct_count: int = 0
    incorrect_count: int = 0

    # Current turn
    answer_state: AnswerState = AnswerState.pending
    current_answer_correct: Optional[bool] = None
    user_input: Optional[str] = None
    multiple_choice_options: Optional[list[str]] = None


class PracticeSession:
    """
    Drives one practice session over a queue of (card, exercise type) items.

    NotStarted -> Active (each item: pending -> answered) -> Complete.
    Calls that make no sense in the current state are ignored.
    """

    def __init__(
            self,
            card_store: CardStore,
            preferences: ExercisePreferences | None = None,
            *,
            builder: SessionBuilder | None = None,
            tracker: ScoreTracker | None = None,
            clock: Callable[[], datetime] = _utcnow,
            removal_policy: RemovalPolicy = RemovalPolicy.incorrect,
            on_session_complete: Callable[[int], None] | None = None,
    ):
        self.card_store = card_store
        self.preferences = preferences or ExercisePreferences.defaults()
        self.builder = builder or SessionBuilder()
        self.tracker = tracker or ScoreTracker()
        self.clock = clock
        self.removal_policy = removal_policy
        # Called with the number of answered items when a session completes
        self.on_session_complete = on_session_complete

        self.state = PracticeSessionState()
        self._all_cards: list[Card] = []

    # ---------
    # Accessors
    # ---------

    @property
    def status(self) -> SessionStatus:
        if self.state.is_session_active:
            return SessionStatus.active
        if self.state.is_session_complete:
            return SessionStatus.complete
        return SessionStatus.not_started

    @property
    def current_item(self) -> Optional[PracticeItem]:
        s = self.state
        if s.is_session_active and s.position < len(s.queue):
            return s.queue[s.position]
        return None

    @property
    def current_card(self) -> Optional[Card]:
        item = self.current_item
        return item.card if item else None

    @property
    def current_exercise_type(self) -> Optional[ExerciseType]:
        item = self.current_item
        return item.exercise_type if item else None

    @property
    def multiple_choice_options(self) -> Optional[list[str]]:
        return self.state.multiple_choice_options

    @property
    def can_swipe(self) -> bool:
        return self.state.answer_state == AnswerState.answered

    @property
    def is_session_active(self) -> bool:
        return self.state.is_session_active

    @property
    def is_session_complete(self) -> bool:
        return self.state.is_session_complete

    @property
    def correct_count(self) -> int:
        return self.state.correct_count

    @property
    def incorrect_count(self) -> int:
        return self.state.incorrect_count

    @property
    def total_count(self) -> int:
        return len(self.state.queue)

    @property
    def remaining_count(self) -> int:
        if not self.state.is_session_active:
            return 0
        return len(self.state.queue) - self.state.position

    @property
    def progress(self) -> float:
        if self.state.is_session_complete:
            return 1.0
        if not self.state.queue:
            return 0.0
        return self.state.position / len(self.state.queue)

    @property
    def accuracy(self) -> float:
        answered = self.state.correct_count + self.state.incorrect_count
        return self.state.correct_count / answered if answered else 0.0

    @property
    def session_duration(self) -> timedelta:
        if self.state.session_start_time is None:
            return timedelta(0)
        return self.clock() - self.state.session_start_time

    def stats(self) -> dict:
        return {
            "total_items": self.total_count,
            "completed": self.state.correct_count + self.state.incorrect_count,
            "correct_count": self.state.correct_count,
            "incorrect_count": self.state.incorrect_count,
            "accuracy": self.accuracy,
            "duration_seconds": self.session_duration.total_seconds(),
        }

    # ------------------
    # Session management
    # ------------------

    def start_session(self, cards: Sequence[Card] | None = None, active_language: str = "") -> None:
        now = self.clock()
        self._all_cards = list(self.card_store.get_all_cards())

        if cards is None:
            pool = select_due_cards(
                self._all_cards,
                self.preferences,
                active_language=active_language,
                now=now,
                min_cards_for_multiple_choice=self.builder.min_cards_for_multiple_choice,
            )
        else:
            pool = list(cards)

        queue = self.builder.build_queue(pool, self._all_cards, self.preferences, now=now) if pool else []
        if not queue:
            logger.info("Nothing to practice: %s due card(s), empty queue", len(pool))
            self.state = PracticeSessionState()
            return

        self.state = PracticeSessionState(
            queue=queue,
            is_session_active=True,
            session_start_time=now,
        )
        logger.info("Practice session started: %s card(s), %s item(s)", len(pool), len(queue))
        self._prepare_current_exercise()

    def restart_session(self) -> None:
        if self.state.queue:
            cards = list({item.card.id: item.card for item in self.state.queue}.values())
            self.start_session(cards=cards)
        else:
            self.start_session()

    def end_session(self) -> None:
        self.state = PracticeSessionState()

    def update_exercise_preferences(self, preferences: ExercisePreferences, *, rebuild_queue: bool = True) -> None:
        self.preferences = preferences
        if not (rebuild_queue and self.state.is_session_active):
            return

        s = self.state
        remaining = list({item.card.id: item.card for item in s.queue[s.position:]}.values())
        new_tail = self.builder.build_queue(remaining, self._all_cards, preferences, now=self.clock())
        if not new_tail:
            return

        s.queue = s.queue[:s.position] + new_tail
        self._reset_turn()
        self._prepare_current_exercise()

    # ---------------
    # Answer handling
    # ---------------

    def update_user_input(self, text: str) -> None:
        if self.current_item is None:
            return
        self.state.user_input = text

    def check_answer(self, is_correct: bool) -> None:
        if self.current_item is None:
            return
        self.state.answer_state = AnswerState.answered
        self.state.current_answer_correct = is_correct

    def override_answer(self, is_correct: bool) -> None:
        if self.current_item is None or self.state.answer_state != AnswerState.answered:
            return
        self.state.current_answer_correct = is_correct

    def confirm_answer_and_advance(self, marked_correct: bool) -> None:
        item = self.current_item
        if item is None:
            return

        updated = self.tracker.record_attempt(
            item.card,
            item.exercise_type,
            was_correct=marked_correct,
            now=self.clock(),
        )
        # A failed write leaves the session exactly where it was
        saved = self.card_store.save_card(updated)
        self._replace_card(saved)

        if marked_correct:
            self.state.correct_count += 1
        else:
            self.state.incorrect_count += 1

        self._advance()

    def skip_exercise(self) -> None:
        if self.current_item is None or self.state.answer_state == AnswerState.answered:
            return
        self.confirm_answer_and_advance(marked_correct=False)

    # ---------------------
    # External card changes
    # ---------------------

    def update_card_in_queue(self, card: Card) -> None:
        if not self.state.is_session_active:
            return

        self._replace_card(card)
        if self.current_card is not None and self.current_card.id == card.id:
            self._prepare_current_exercise()

    def remove_card_from_queue(self, card_id: str) -> None:
        s = self.state
        if not s.is_session_active:
            return

        self._all_cards = [c for c in self._all_cards if c.id != card_id]

        current = self.current_card
        was_current = current is not None and current.id == card_id
        removed_before = sum(1 for item in s.queue[:s.position] if item.card.id == card_id)

        s.queue = [item for item in s.queue if item.card.id != card_id]
        s.position = max(s.position - removed_before, 0)

        if not was_current:
            return

        if s.position >= len(s.queue):
            s.position = max(len(s.queue) - 1, 0)
        self._reset_turn()

        if self.removal_policy is RemovalPolicy.incorrect:
            s.incorrect_count += 1

        logger.info("Current card %s removed from session (%s)", card_id, self.removal_policy.value)

        if not s.queue:
            self._complete()
        else:
            self._prepare_current_exercise()

    # -------
    # Helpers
    # -------

    def _replace_card(self, card: Card) -> None:
        s = self.state
        s.queue = [
            PracticeItem(card=card, exercise_type=item.exercise_type) if item.card.id == card.id else item
            for item in s.queue
        ]
        self._all_cards = [card if c.id == card.id else c for c in self._all_cards]

    def _reset_turn(self) -> None:
        s = self.state
        s.answer_state = AnswerState.pending
        s.current_answer_correct = None
        s.user_input = None

    def _advance(self) -> None:
        s = self.state
        if s.position + 1 >= len(s.queue):
            s.position = len(s.queue)
            self._complete()
            return

        s.position += 1
        self._reset_turn()
        self._prepare_current_exercise()

    def _complete(self) -> None:
        s = self.state
        s.is_session_active = False
        s.is_session_complete = True
        s.multiple_choice_options = None
        self._reset_turn()
        logger.info(
            "Practice session complete: %s correct, %s incorrect",
            s.correct_count,
            s.incorrect_count,
        )

        if self.on_session_complete is not None:
            try:
                self.on_session_complete(s.correct_count + s.incorrect_count)
            except Exception:
                logger.exception("Session completion callback failed")

    def _prepare_current_exercise(self) -> None:
        item = self.current_item
        if item is None:
            return

        if item.exercise_type.is_multiple_choice:
            self.state.multiple_choice_options = self.builder.multiple_choice_options(item.card, self._all_cards)
        else:
            self.state.multiple_choice_options = None
        self.state.user_input = None

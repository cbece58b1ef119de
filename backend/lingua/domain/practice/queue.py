"""
Session queue building.

Turns a pool of due cards into an ordered list of practice items:
- every card gets its due exercise types (or all eligible ones as a fallback)
- with weakness priority only the weakest type per card is kept and the whole
  queue is sorted weakest first, unseen exercises before any measured one
- otherwise every candidate type is queued and the queue is shuffled
"""
import logging
import random
from datetime import datetime
from typing import Sequence

from lingua.core.enums import ExerciseType

from .dto import ExercisePreferences
from .eligibility import (
    MIN_CARDS_FOR_MULTIPLE_CHOICE,
    distractor_cards,
    due_types,
    eligible_types,
)
from .entities import Card, PracticeItem

logger = logging.getLogger(__name__)


MULTIPLE_CHOICE_OPTIONS = 4
UNSEEN_WEAKNESS = -1.0


def weakness_key(card: Card, exercise_type: ExerciseType) -> float:
    """Lower sorts first. Unseen exercises rank below any measured 0-100 rate."""
    score = card.get_exercise_score(exercise_type)
    if score is None or score.is_unseen:
        return UNSEEN_WEAKNESS
    return score.success_rate


def is_card_due(
        card: Card,
        pool: Sequence[Card],
        preferences: ExercisePreferences,
        now: datetime,
        *,
        min_cards_for_multiple_choice: int = MIN_CARDS_FOR_MULTIPLE_CHOICE,
) -> bool:
    # Cards never practised per exercise fall back to the card-level timestamp
    if not card.exercise_scores:
        return card.is_due_for_review(now)
    if not card.is_due_for_any_exercise(preferences, now):
        return False

    # Only types the card can actually be tested with count
    eligible = eligible_types(
        card,
        pool,
        preferences,
        min_cards_for_multiple_choice=min_cards_for_multiple_choice,
    )
    return bool(due_types(card, eligible, now))


def select_due_cards(
        cards: Sequence[Card],
        preferences: ExercisePreferences,
        *,
        active_language: str = "",
        now: datetime,
        min_cards_for_multiple_choice: int = MIN_CARDS_FOR_MULTIPLE_CHOICE,
) -> list[Card]:
    return [
        c for c in cards
        if not c.is_archived
        and (not active_language or c.language == active_language)
        and is_card_due(c, cards, preferences, now, min_cards_for_multiple_choice=min_cards_for_multiple_choice)
    ]


class SessionBuilder:
    def __init__(
            self,
            rng: random.Random | None = None,
            min_cards_for_multiple_choice: int = MIN_CARDS_FOR_MULTIPLE_CHOICE,
    ):
        self.rng = rng or random.Random()
        self.min_cards_for_multiple_choice = min_cards_for_multiple_choice

    def candidate_types(
            self,
            card: Card,
            all_cards: Sequence[Card],
            preferences: ExercisePreferences,
            now: datetime,
    ) -> list[ExerciseType]:
        eligible = eligible_types(
            card,
            all_cards,
            preferences,
            min_cards_for_multiple_choice=self.min_cards_for_multiple_choice,
        )
        return due_types(card, eligible, now) or eligible

    def build_queue(
            self,
            due_cards: Sequence[Card],
            all_cards: Sequence[Card],
            preferences: ExercisePreferences,
            *,
            now: datetime,
    ) -> list[PracticeItem]:
        queue: list[PracticeItem] = []

        for card in due_cards:
            types = self.candidate_types(card, all_cards, preferences, now)
            if not types:
                logger.debug("Card %s has no eligible exercise type, skipping", card.id)
                continue

            if preferences.prioritize_weaknesses:
                weakest = min(types, key=lambda t: weakness_key(card, t))
                queue.append(PracticeItem(card=card, exercise_type=weakest))
            else:
                types = list(types)
                self.rng.shuffle(types)
                queue.extend(PracticeItem(card=card, exercise_type=t) for t in types)

        if preferences.prioritize_weaknesses:
            queue.sort(key=lambda item: weakness_key(item.card, item.exercise_type))
        else:
            self.rng.shuffle(queue)

        return queue

    def multiple_choice_options(self, card: Card, all_cards: Sequence[Card]) -> list[str]:
        wrong = list(dict.fromkeys(c.back_text for c in distractor_cards(card, all_cards)))
        self.rng.shuffle(wrong)

        options = [card.back_text, *wrong[:MULTIPLE_CHOICE_OPTIONS - 1]]
        self.rng.shuffle(options)
        return options

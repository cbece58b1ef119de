from datetime import datetime
from typing import Sequence

from lingua.core.enums import ExerciseType

from .dto import ExercisePreferences
from .entities import Card, VerbData


MIN_CARDS_FOR_MULTIPLE_CHOICE = 4

# Languages whose nouns carry a grammatical article the learner must pick
ARTICLE_LANGUAGES = frozenset({"de"})


def has_enough_cards_for_multiple_choice(
        pool_size: int,
        minimum: int = MIN_CARDS_FOR_MULTIPLE_CHOICE,
) -> bool:
    return pool_size >= minimum


def distractor_cards(card: Card, pool: Sequence[Card]) -> list[Card]:
    return [
        c for c in pool
        if c.id != card.id and c.back_text and c.back_text != card.back_text
    ]


def can_use(
        exercise_type: ExerciseType,
        card: Card,
        *,
        has_enough_cards_for_multiple_choice: bool,
        has_distractors: bool = True,
) -> bool:
    if not exercise_type.is_implemented:
        return False

    if exercise_type.is_multiple_choice:
        if not (has_enough_cards_for_multiple_choice and has_distractors):
            return False
        if exercise_type.requires_icon:
            return bool(card.icon)
        return True

    if exercise_type is ExerciseType.article_selection:
        return card.language.lower() in ARTICLE_LANGUAGES and card.article is not None

    if exercise_type is ExerciseType.conjugation_practice:
        return isinstance(card.word_data, VerbData)

    if exercise_type is ExerciseType.sentence_building:
        return len(card.back_text.split()) >= 2

    return bool(card.front_text.strip() and card.back_text.strip())


def eligible_types(
        card: Card,
        pool: Sequence[Card],
        preferences: ExercisePreferences,
        *,
        min_cards_for_multiple_choice: int = MIN_CARDS_FOR_MULTIPLE_CHOICE,
) -> list[ExerciseType]:
    """
    Exercise types the card can be tested with right now, in declaration order.
    Scheduling is ignored here, see due_types.
    """
    enough = has_enough_cards_for_multiple_choice(len(pool), min_cards_for_multiple_choice)
    has_distractors = bool(distractor_cards(card, pool)) if enough else False

    return [
        t for t in ExerciseType
        if t.is_implemented
        and preferences.is_enabled(t)
        and can_use(
            t,
            card,
            has_enough_cards_for_multiple_choice=enough,
            has_distractors=has_distractors,
        )
    ]


def due_types(card: Card, candidates: Sequence[ExerciseType], now: datetime) -> list[ExerciseType]:
    return [t for t in candidates if card.is_exercise_due(t, now)]

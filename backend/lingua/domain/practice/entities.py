# backend/lingua/domain/practice/entities.py

from dataclasses import dataclass, field, asdict, replace
from datetime import datetime
from typing import Any, Optional, Union

from lingua.core.enums import ExerciseType, WordType
from lingua.core.exceptions import ValidationError

from .dto import ExercisePreferences


MASTERY_STREAK = 5


# ---------
# Word data
# ---------

@dataclass(frozen=True)
class VerbData:
    is_regular: bool = True
    is_separable: bool = False
    separable_prefix: Optional[str] = None
    auxiliary: str = "haben"
    present_du: Optional[str] = None
    present_er: Optional[str] = None
    past_simple: Optional[str] = None
    past_participle: Optional[str] = None

    word_type = WordType.verb


@dataclass(frozen=True)
class NounData:
    gender: str
    plural: Optional[str] = None
    genitive: Optional[str] = None

    word_type = WordType.noun


@dataclass(frozen=True)
class AdjectiveData:
    comparative: Optional[str] = None
    superlative: Optional[str] = None

    word_type = WordType.adjective


@dataclass(frozen=True)
class AdverbData:
    usage_note: Optional[str] = None

    word_type = WordType.adverb


WordData = Union[VerbData, NounData, AdjectiveData, AdverbData]

_WORD_DATA_TYPES = {
    WordType.verb: VerbData,
    WordType.noun: NounData,
    WordType.adjective: AdjectiveData,
    WordType.adverb: AdverbData,
}


def word_data_to_dict(word_data: Optional[WordData]) -> Optional[dict[str, Any]]:
    if word_data is None:
        return None
    return {"type": word_data.word_type.value, **asdict(word_data)}


def word_data_from_dict(data: Optional[dict[str, Any]]) -> Optional[WordData]:
    if not data:
        return None
    payload = dict(data)
    try:
        word_type = WordType(payload.pop("type"))
        return _WORD_DATA_TYPES[word_type](**payload)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid word data: {data!r}") from e


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _format_dt(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


# --------------
# Exercise score
# --------------

@dataclass(frozen=True)
class ExerciseScore:
    """
    Performance of one card on one exercise type.
    Never mutated in place, see ScoreTracker.record_attempt.
    """

    type: ExerciseType
    correct_count: int = 0
    incorrect_count: int = 0
    current_streak: int = 0
    best_streak: int = 0
    last_practiced: Optional[datetime] = None
    next_review: Optional[datetime] = None

    @classmethod
    def initial(cls, exercise_type: ExerciseType) -> "ExerciseScore":
        return cls(type=exercise_type)

    @property
    def total_attempts(self) -> int:
        return self.correct_count + self.incorrect_count

    @property
    def is_unseen(self) -> bool:
        return self.total_attempts == 0

    @property
    def success_rate(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.correct_count / self.total_attempts * 100

    def is_due(self, now: datetime) -> bool:
        if self.is_unseen or self.next_review is None:
            return True
        return self.next_review <= now

    @property
    def mastery_level(self) -> str:
        if self.current_streak >= MASTERY_STREAK:
            return "Mastered"
        if self.total_attempts == 0:
            return "New"
        if self.current_streak >= 3:
            return "Good"
        if self.current_streak >= 1:
            return "Learning"
        return "Difficult"

    @property
    def mastery_progress(self) -> float:
        return min(max(self.current_streak / MASTERY_STREAK, 0.0), 1.0)

    @property
    def answers_to_mastery(self) -> int:
        return min(max(MASTERY_STREAK - self.current_streak, 0), MASTERY_STREAK)

    @property
    def net_score(self) -> int:
        return self.correct_count - self.incorrect_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "correct_count": self.correct_count,
            "incorrect_count": self.incorrect_count,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "last_practiced": _format_dt(self.last_practiced),
            "next_review": _format_dt(self.next_review),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExerciseScore":
        return cls(
            type=ExerciseType(data["type"]),
            correct_count=data.get("correct_count", 0),
            incorrect_count=data.get("incorrect_count", 0),
            current_streak=max(data.get("current_streak", 0), 0),
            best_streak=data.get("best_streak", 0),
            last_practiced=_parse_dt(data.get("last_practiced")),
            next_review=_parse_dt(data.get("next_review")),
        )


# ----
# Card
# ----

def _mastery_from_rate(rate: float) -> str:
    if rate >= 90:
        return "Mastered"
    if rate >= 70:
        return "Good"
    if rate >= 50:
        return "Learning"
    return "Difficult"


@dataclass(frozen=True, eq=False)
class Card:
    """
    Snapshot of a learnable card as the scheduler sees it.
    Pure domain state, knows nothing about the DB or SQLAlchemy.
    """

    id: str
    front_text: str
    back_text: str
    language: str
    category: str = ""
    tags: tuple[str, ...] = ()
    difficulty: int = 1
    german_article: Optional[str] = None
    word_data: Optional[WordData] = None
    icon: Optional[str] = None

    review_count: int = 0
    correct_count: int = 0
    last_reviewed: Optional[datetime] = None
    next_review: Optional[datetime] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_favorite: bool = False
    is_archived: bool = False

    exercise_scores: dict[ExerciseType, ExerciseScore] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Card) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    # -------------
    # Legacy fields
    # -------------

    @property
    def success_rate(self) -> float:
        if self.review_count == 0:
            return 0.0
        return self.correct_count / self.review_count * 100

    @property
    def mastery_level(self) -> str:
        if self.review_count < 3:
            return "New"
        return _mastery_from_rate(self.success_rate)

    def is_due_for_review(self, now: datetime) -> bool:
        if self.next_review is None:
            return True
        return self.next_review <= now

    # ---------------
    # Exercise scores
    # ---------------

    def get_exercise_score(self, exercise_type: ExerciseType) -> Optional[ExerciseScore]:
        return self.exercise_scores.get(exercise_type)

    def is_exercise_due(self, exercise_type: ExerciseType, now: datetime) -> bool:
        score = self.exercise_scores.get(exercise_type)
        return score is None or score.is_due(now)

    def due_exercise_types(self, now: datetime) -> list[ExerciseType]:
        return [t for t, score in self.exercise_scores.items() if score.is_due(now)]

    def is_due_for_any_exercise(self, preferences: ExercisePreferences, now: datetime) -> bool:
        return any(
            self.is_exercise_due(t, now)
            for t in ExerciseType
            if t.is_implemented and preferences.is_enabled(t)
        )

    @property
    def overall_mastery_level(self) -> str:
        if not self.exercise_scores:
            return self.mastery_level

        total = sum(s.total_attempts for s in self.exercise_scores.values())
        if total < 5:
            return "New"
        correct = sum(s.correct_count for s in self.exercise_scores.values())
        return _mastery_from_rate(correct / total * 100)

    @property
    def article(self) -> Optional[str]:
        if self.german_article:
            return self.german_article.lower()
        if isinstance(self.word_data, NounData):
            return self.word_data.gender.lower()
        return None

    def with_score(self, score: ExerciseScore, **changes: Any) -> "Card":
        scores = dict(self.exercise_scores)
        scores[score.type] = score
        return replace(self, exercise_scores=scores, **changes)


@dataclass(frozen=True, eq=False)
class PracticeItem:
    """One queued study turn: a card snapshot plus how to test it."""

    card: Card
    exercise_type: ExerciseType

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, PracticeItem)
            and other.card.id == self.card.id
            and other.exercise_type == self.exercise_type
        )

    def __hash__(self) -> int:
        return hash((self.card.id, self.exercise_type))

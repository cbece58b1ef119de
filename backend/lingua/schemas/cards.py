from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from lingua.core.enums import ExerciseType
from lingua.domain.practice.entities import Card, ExerciseScore, word_data_to_dict


class ExerciseScoreOut(BaseModel):
    type: ExerciseType
    correct_count: int
    incorrect_count: int
    current_streak: int
    best_streak: int
    success_rate: float
    mastery_level: str
    last_practiced: Optional[datetime] = None
    next_review: Optional[datetime] = None

    @classmethod
    def from_domain(cls, score: ExerciseScore) -> "ExerciseScoreOut":
        return cls(
            type=score.type,
            correct_count=score.correct_count,
            incorrect_count=score.incorrect_count,
            current_streak=score.current_streak,
            best_streak=score.best_streak,
            success_rate=score.success_rate,
            mastery_level=score.mastery_level,
            last_practiced=score.last_practiced,
            next_review=score.next_review,
        )


class CardOut(BaseModel):
    id: UUID
    front_text: str
    back_text: str
    language: str
    category: str
    tags: List[str]
    difficulty: int
    german_article: Optional[str] = None
    word_data: Optional[dict] = None
    icon: Optional[str] = None

    review_count: int
    correct_count: int
    success_rate: float
    mastery_level: str
    overall_mastery_level: str
    last_reviewed: Optional[datetime] = None
    next_review: Optional[datetime] = None

    is_favorite: bool
    is_archived: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    exercise_scores: List[ExerciseScoreOut] = []

    @classmethod
    def from_domain(cls, card: Card) -> "CardOut":
        return cls(
            id=UUID(card.id),
            front_text=card.front_text,
            back_text=card.back_text,
            language=card.language,
            category=card.category,
            tags=list(card.tags),
            difficulty=card.difficulty,
            german_article=card.german_article,
            word_data=word_data_to_dict(card.word_data),
            icon=card.icon,
            review_count=card.review_count,
            correct_count=card.correct_count,
            success_rate=card.success_rate,
            mastery_level=card.mastery_level,
            overall_mastery_level=card.overall_mastery_level,
            last_reviewed=card.last_reviewed,
            next_review=card.next_review,
            is_favorite=card.is_favorite,
            is_archived=card.is_archived,
            created_at=card.created_at,
            updated_at=card.updated_at,
            exercise_scores=[
                ExerciseScoreOut.from_domain(s)
                for s in sorted(card.exercise_scores.values(), key=lambda s: s.type.value)
            ],
        )


class CreateCardRequest(BaseModel):
    front_text: str
    back_text: str
    language: str
    category: str = ""
    tags: List[str] = []
    difficulty: int = Field(1, ge=1, le=5)
    german_article: Optional[str] = None
    word_data: Optional[dict] = None
    icon: Optional[str] = None
    is_favorite: bool = False


class UpdateCardRequest(BaseModel):
    front_text: Optional[str] = None
    back_text: Optional[str] = None
    language: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    difficulty: Optional[int] = Field(None, ge=1, le=5)
    german_article: Optional[str] = None
    word_data: Optional[dict] = None
    icon: Optional[str] = None
    is_favorite: Optional[bool] = None
    is_archived: Optional[bool] = None


class CardStats(BaseModel):
    card_id: UUID
    overall_mastery_level: str
    total_attempts: int
    weak_types: List[ExerciseType]
    due_types: List[ExerciseType]
    scores: List[ExerciseScoreOut]

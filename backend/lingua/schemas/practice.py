from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from lingua.core.enums import AnswerState, ExerciseType, SessionStatus
from lingua.domain.practice.entities import PracticeItem
from lingua.domain.practice.session import PracticeSession
from lingua.schemas.cards import CardOut


class StartSessionRequest(BaseModel):
    # None = every due card
    card_ids: Optional[List[UUID]] = None
    active_language: str = ""


class AnswerRequest(BaseModel):
    is_correct: bool


class ConfirmRequest(BaseModel):
    marked_correct: bool


class UserInputRequest(BaseModel):
    text: str


class PracticeItemOut(BaseModel):
    card: CardOut
    exercise_type: ExerciseType
    exercise_name: str

    @classmethod
    def from_domain(cls, item: PracticeItem) -> "PracticeItemOut":
        return cls(
            card=CardOut.from_domain(item.card),
            exercise_type=item.exercise_type,
            exercise_name=item.exercise_type.display_name,
        )


class SessionStateOut(BaseModel):
    status: SessionStatus
    current_item: Optional[PracticeItemOut] = None
    answer_state: AnswerState
    current_answer_correct: Optional[bool] = None
    user_input: Optional[str] = None
    multiple_choice_options: Optional[List[str]] = None
    can_swipe: bool

    position: int
    total_count: int
    remaining_count: int
    progress: float
    correct_count: int
    incorrect_count: int
    accuracy: float
    duration_seconds: float

    @classmethod
    def from_session(cls, session: PracticeSession) -> "SessionStateOut":
        state = session.state
        item = session.current_item
        return cls(
            status=session.status,
            current_item=PracticeItemOut.from_domain(item) if item else None,
            answer_state=state.answer_state,
            current_answer_correct=state.current_answer_correct,
            user_input=state.user_input,
            multiple_choice_options=session.multiple_choice_options,
            can_swipe=session.can_swipe,
            position=state.position,
            total_count=session.total_count,
            remaining_count=session.remaining_count,
            progress=session.progress,
            correct_count=session.correct_count,
            incorrect_count=session.incorrect_count,
            accuracy=session.accuracy,
            duration_seconds=session.session_duration.total_seconds(),
        )

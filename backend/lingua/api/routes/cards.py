# backend/lingua/api/routes/cards.py
import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from starlette import status

from lingua.auth.dependencies import get_current_user_id
from lingua.core.config import settings
from lingua.core.exceptions import ValidationError
from lingua.db.session import get_db
from lingua.domain.practice.entities import word_data_from_dict
from lingua.domain.practice.queue import select_due_cards
from lingua.domain.practice.scores import ScoreTracker
from lingua.models.card import Card
from lingua.schemas.cards import (
    CardOut,
    CardStats,
    CreateCardRequest,
    ExerciseScoreOut,
    UpdateCardRequest,
)
from lingua.services.card_store import to_domain
from lingua.services.practice_service import PracticeSessionRegistry, get_session_registry
from lingua.services.preferences_service import PreferencesService

logger = logging.getLogger(__name__)

router = APIRouter()

# Fields a PATCH may clear with null
NULLABLE_FIELDS = {"german_article", "word_data", "icon"}


def _get_owned_card(db: Session, card_id: UUID, user_id: UUID) -> Card:
    card = db.get(Card, card_id)
    # Other users' cards look the same as missing ones
    if not card or card.user_id != user_id:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


def _validate_word_data(data: dict | None) -> dict | None:
    try:
        word_data_from_dict(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return data


def _require_text(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise HTTPException(status_code=422, detail=f"{field} is required")
    return value


@router.post("/", response_model=CardOut, status_code=status.HTTP_201_CREATED)
def create_card(
    payload: CreateCardRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = Card(
        user_id=user_id,
        front_text=_require_text(payload.front_text, "front_text"),
        back_text=_require_text(payload.back_text, "back_text"),
        language=_require_text(payload.language, "language").lower(),
        category=payload.category.strip(),
        tags=payload.tags,
        difficulty=payload.difficulty,
        german_article=payload.german_article,
        word_data=_validate_word_data(payload.word_data),
        icon=payload.icon,
        is_favorite=payload.is_favorite,
        exercise_scores={},
    )
    db.add(card)
    db.commit()
    db.refresh(card)

    logger.info("User %s created card %s", user_id, card.id)
    return CardOut.from_domain(to_domain(card))


@router.get("/", response_model=list[CardOut])
def list_cards(
    language: str | None = None,
    include_archived: bool = False,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    query = db.query(Card).filter(Card.user_id == user_id)
    if language:
        query = query.filter(Card.language == language.lower())
    if not include_archived:
        query = query.filter(Card.is_archived == False)  # noqa: E712

    return [CardOut.from_domain(to_domain(c)) for c in query.order_by(Card.created_at.asc()).all()]


@router.get("/due", response_model=list[CardOut])
def list_due_cards(
    language: str = "",
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    preferences = PreferencesService.load(db, user_id)
    cards = [to_domain(c) for c in db.query(Card).filter(Card.user_id == user_id).all()]

    due = select_due_cards(
        cards,
        preferences,
        active_language=language.lower(),
        now=datetime.now(timezone.utc),
        min_cards_for_multiple_choice=settings.MIN_CARDS_FOR_MULTIPLE_CHOICE,
    )
    return [CardOut.from_domain(c) for c in due]


@router.get("/{card_id}", response_model=CardOut)
def get_card(
    card_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return CardOut.from_domain(to_domain(_get_owned_card(db, card_id, user_id)))


@router.get("/{card_id}/stats", response_model=CardStats)
def get_card_stats(
    card_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    card = to_domain(_get_owned_card(db, card_id, user_id))
    preferences = PreferencesService.load(db, user_id)
    scores = sorted(card.exercise_scores.values(), key=lambda s: s.type.value)

    return CardStats(
        card_id=card_id,
        overall_mastery_level=card.overall_mastery_level,
        total_attempts=sum(s.total_attempts for s in scores),
        weak_types=ScoreTracker().weak_exercise_types(card, preferences),
        due_types=card.due_exercise_types(datetime.now(timezone.utc)),
        scores=[ExerciseScoreOut.from_domain(s) for s in scores],
    )


@router.patch("/{card_id}", response_model=CardOut)
def update_card(
    card_id: UUID,
    payload: UpdateCardRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    card = _get_owned_card(db, card_id, user_id)
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }

    for field in ("front_text", "back_text", "language"):
        if field in changes:
            changes[field] = _require_text(changes[field], field)
    if "language" in changes:
        changes["language"] = changes["language"].lower()
    if "word_data" in changes:
        _validate_word_data(changes["word_data"])

    for field, value in changes.items():
        setattr(card, field, value)

    db.commit()
    db.refresh(card)

    updated = to_domain(card)
    with registry.lock_for(user_id):
        session = registry.get(user_id)
        if session is not None:
            session.update_card_in_queue(updated)

    return CardOut.from_domain(updated)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card(
    card_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    card = _get_owned_card(db, card_id, user_id)
    db.delete(card)
    db.commit()

    with registry.lock_for(user_id):
        session = registry.get(user_id)
        if session is not None:
            session.remove_card_from_queue(str(card_id))

    logger.info("User %s deleted card %s", user_id, card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

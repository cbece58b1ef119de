# backend/lingua/services/card_store.py

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lingua.core.exceptions import CardStoreError, NotFoundError
from lingua.domain.practice.entities import (
    Card,
    ExerciseScore,
    word_data_from_dict,
    word_data_to_dict,
)
from lingua.models.card import Card as CardRow

logger = logging.getLogger(__name__)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # sqlite hands back naive datetimes even for timezone=True columns
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------
# ORM <-> domain
# ---------------

def _scores_from_json(card_id, raw: dict | None) -> dict:
    scores = {}
    for key, data in (raw or {}).items():
        try:
            score = ExerciseScore.from_dict(data)
        except ValueError:
            logger.warning("Card %s: dropping score for unknown exercise type %r", card_id, key)
            continue
        scores[score.type] = replace(
            score,
            last_practiced=as_utc(score.last_practiced),
            next_review=as_utc(score.next_review),
        )
    return scores


def to_domain(row: CardRow) -> Card:
    return Card(
        id=str(row.id),
        front_text=row.front_text,
        back_text=row.back_text,
        language=row.language,
        category=row.category or "",
        tags=tuple(row.tags or ()),
        difficulty=row.difficulty,
        german_article=row.german_article,
        word_data=word_data_from_dict(row.word_data),
        icon=row.icon,
        review_count=row.review_count,
        correct_count=row.correct_count,
        last_reviewed=as_utc(row.last_reviewed),
        next_review=as_utc(row.next_review),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        is_favorite=row.is_favorite,
        is_archived=row.is_archived,
        exercise_scores=_scores_from_json(row.id, row.exercise_scores),
    )


def apply_to_row(card: Card, row: CardRow) -> None:
    row.front_text = card.front_text
    row.back_text = card.back_text
    row.language = card.language
    row.category = card.category
    row.tags = list(card.tags)
    row.difficulty = card.difficulty
    row.german_article = card.german_article
    row.word_data = word_data_to_dict(card.word_data)
    row.icon = card.icon
    row.review_count = card.review_count
    row.correct_count = card.correct_count
    row.last_reviewed = card.last_reviewed
    row.next_review = card.next_review
    row.is_favorite = card.is_favorite
    row.is_archived = card.is_archived
    # New dict so the JSON column is flagged dirty
    row.exercise_scores = {t.value: s.to_dict() for t, s in card.exercise_scores.items()}
    if card.updated_at is not None:
        row.updated_at = card.updated_at


# -----
# Store
# -----

class SqlCardStore:
    """
    Card store for one user, backed by the cards table.
    Opens a short-lived DB session per call.
    """

    def __init__(self, session_factory: Callable[[], Session], user_id: uuid.UUID):
        self.session_factory = session_factory
        self.user_id = user_id

    def get_all_cards(self) -> list[Card]:
        with self.session_factory() as db:
            rows = db.scalars(
                select(CardRow)
                .where(CardRow.user_id == self.user_id)
                .order_by(CardRow.created_at.asc())
            ).all()
            return [to_domain(r) for r in rows]

    def get_cards(self, card_ids: list[str]) -> list[Card]:
        wanted = set(card_ids)
        by_id = {c.id: c for c in self.get_all_cards() if c.id in wanted}
        missing = wanted - by_id.keys()
        if missing:
            raise NotFoundError(f"Cards not found: {', '.join(sorted(missing))}")
        return [by_id[i] for i in card_ids if i in by_id]

    def save_card(self, card: Card) -> Card:
        with self.session_factory() as db:
            row = db.get(CardRow, uuid.UUID(card.id))
            if row is None or row.user_id != self.user_id:
                raise NotFoundError(f"Card {card.id} not found")

            try:
                apply_to_row(card, row)
                db.commit()
                db.refresh(row)
            except SQLAlchemyError as e:
                db.rollback()
                logger.exception("Failed to save card %s", card.id)
                raise CardStoreError(f"Could not save card {card.id}") from e

            logger.debug("Saved card %s (%s reviews)", card.id, row.review_count)
            return to_domain(row)

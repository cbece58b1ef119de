import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lingua.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserExercisePreferences(Base):
    __tablename__ = "user_exercise_preferences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        unique=True,
        index=True,
    )

    # Exercise type wire values
    enabled_types: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    prioritize_weaknesses: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # Success rate (0-100) under which an exercise counts as weak
    weakness_threshold: Mapped[float] = mapped_column(Float, default=70.0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

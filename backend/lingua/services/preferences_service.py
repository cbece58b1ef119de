import logging
import uuid

from sqlalchemy.orm import Session

from lingua.domain.practice.dto import ExercisePreferences
from lingua.models.user_exercise_preferences import UserExercisePreferences

logger = logging.getLogger(__name__)


class PreferencesService:
    @staticmethod
    def _row(db: Session, user_id: uuid.UUID) -> UserExercisePreferences | None:
        return db.query(UserExercisePreferences).filter_by(user_id=user_id).first()

    @staticmethod
    def load(db: Session, user_id: uuid.UUID) -> ExercisePreferences:
        row = PreferencesService._row(db, user_id)
        if row is None:
            return ExercisePreferences.defaults()

        return ExercisePreferences.from_dict({
            "enabled_types": row.enabled_types,
            "prioritize_weaknesses": row.prioritize_weaknesses,
            "weakness_threshold": row.weakness_threshold,
        })

    @staticmethod
    def save(db: Session, user_id: uuid.UUID, preferences: ExercisePreferences) -> ExercisePreferences:
        row = PreferencesService._row(db, user_id)
        if row is None:
            row = UserExercisePreferences(user_id=user_id)
            db.add(row)

        data = preferences.to_dict()
        row.enabled_types = data["enabled_types"]
        row.prioritize_weaknesses = data["prioritize_weaknesses"]
        row.weakness_threshold = data["weakness_threshold"]

        db.commit()
        logger.info("User %s: %s exercise type(s) enabled", user_id, preferences.enabled_count)
        return preferences

    @staticmethod
    def reset(db: Session, user_id: uuid.UUID) -> ExercisePreferences:
        return PreferencesService.save(db, user_id, ExercisePreferences.defaults())

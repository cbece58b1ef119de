# backend/lingua/api/routes/preferences.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lingua.auth.dependencies import get_current_user_id
from lingua.core.enums import ExerciseCategory, ExerciseType
from lingua.db.session import get_db
from lingua.domain.practice.dto import ExercisePreferences
from lingua.schemas.preferences import PreferencesOut, UpdatePreferencesRequest
from lingua.services.practice_service import PracticeSessionRegistry, get_session_registry
from lingua.services.preferences_service import PreferencesService

router = APIRouter()


def _apply(
    db: Session,
    registry: PracticeSessionRegistry,
    user_id: UUID,
    preferences: ExercisePreferences,
    *,
    rebuild_queue: bool = True,
) -> PreferencesOut:
    with registry.lock_for(user_id):
        saved = PreferencesService.save(db, user_id, preferences)
        session = registry.get(user_id)
        if session is not None:
            session.update_exercise_preferences(saved, rebuild_queue=rebuild_queue)

    return PreferencesOut.from_domain(saved)


@router.get("/", response_model=PreferencesOut)
def get_preferences(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return PreferencesOut.from_domain(PreferencesService.load(db, user_id))


@router.put("/", response_model=PreferencesOut)
def update_preferences(
    payload: UpdatePreferencesRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    return _apply(db, registry, user_id, payload.to_domain(), rebuild_queue=payload.rebuild_queue)


@router.post("/types/{exercise_type}/toggle", response_model=PreferencesOut)
def toggle_exercise_type(
    exercise_type: ExerciseType,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    current = PreferencesService.load(db, user_id)
    if not exercise_type.is_implemented:
        return PreferencesOut.from_domain(current)
    return _apply(db, registry, user_id, current.toggle_type(exercise_type))


@router.post("/categories/{category}", response_model=PreferencesOut)
def set_category(
    category: ExerciseCategory,
    enabled: bool = True,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    current = PreferencesService.load(db, user_id)
    return _apply(db, registry, user_id, current.toggle_category(category, enabled=enabled))


@router.post("/reset", response_model=PreferencesOut)
def reset_preferences(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    return _apply(db, registry, user_id, ExercisePreferences.defaults())

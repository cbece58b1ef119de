# backend/lingua/api/routes/practice.py
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from lingua.auth.dependencies import get_current_user_id
from lingua.core.exceptions import CardStoreError, NotFoundError
from lingua.db.session import get_db
from lingua.domain.practice.session import PracticeSession
from lingua.schemas.practice import (
    AnswerRequest,
    ConfirmRequest,
    SessionStateOut,
    StartSessionRequest,
    UserInputRequest,
)
from lingua.services.practice_service import PracticeSessionRegistry, get_session_registry
from lingua.services.preferences_service import PreferencesService

router = APIRouter()


def get_practice_session(
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
):
    # Requests for the same user run one at a time
    with registry.lock_for(user_id):
        session = registry.get(user_id)
        if session is None:
            session = registry.get_or_create(user_id, PreferencesService.load(db, user_id))
        yield session


def _run_store_call(action) -> None:
    try:
        action()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CardStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/start", response_model=SessionStateOut)
def start_session(
    payload: StartSessionRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    session: PracticeSession = Depends(get_practice_session),
):
    # Preferences may have changed since the session object was created
    session.update_exercise_preferences(PreferencesService.load(db, user_id), rebuild_queue=False)

    if payload.card_ids is None:
        session.start_session(active_language=payload.active_language.lower())
    else:
        try:
            cards = session.card_store.get_cards([str(i) for i in payload.card_ids])
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        session.start_session(cards=cards)

    return SessionStateOut.from_session(session)


@router.get("/state", response_model=SessionStateOut)
def get_state(session: PracticeSession = Depends(get_practice_session)):
    return SessionStateOut.from_session(session)


@router.post("/check", response_model=SessionStateOut)
def check_answer(payload: AnswerRequest, session: PracticeSession = Depends(get_practice_session)):
    session.check_answer(payload.is_correct)
    return SessionStateOut.from_session(session)


@router.post("/override", response_model=SessionStateOut)
def override_answer(payload: AnswerRequest, session: PracticeSession = Depends(get_practice_session)):
    session.override_answer(payload.is_correct)
    return SessionStateOut.from_session(session)


@router.post("/input", response_model=SessionStateOut)
def update_input(payload: UserInputRequest, session: PracticeSession = Depends(get_practice_session)):
    session.update_user_input(payload.text)
    return SessionStateOut.from_session(session)


@router.post("/confirm", response_model=SessionStateOut)
def confirm_answer(payload: ConfirmRequest, session: PracticeSession = Depends(get_practice_session)):
    _run_store_call(lambda: session.confirm_answer_and_advance(payload.marked_correct))
    return SessionStateOut.from_session(session)


@router.post("/skip", response_model=SessionStateOut)
def skip_exercise(session: PracticeSession = Depends(get_practice_session)):
    _run_store_call(session.skip_exercise)
    return SessionStateOut.from_session(session)


@router.post("/restart", response_model=SessionStateOut)
def restart_session(session: PracticeSession = Depends(get_practice_session)):
    session.restart_session()
    return SessionStateOut.from_session(session)


@router.post("/end", response_model=SessionStateOut)
def end_session(
    user_id: UUID = Depends(get_current_user_id),
    registry: PracticeSessionRegistry = Depends(get_session_registry),
    session: PracticeSession = Depends(get_practice_session),
):
    session.end_session()
    registry.discard(user_id)
    return SessionStateOut.from_session(session)

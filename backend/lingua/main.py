import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

import lingua.models  # noqa: F401  registers tables on Base.metadata
from lingua.api.routes import cards, practice, preferences
from lingua.core.config import settings
from lingua.db.base import Base
from lingua.db.session import engine
from lingua.services.practice_service import PracticeSessionRegistry

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Lingua Practice API")
app.state.practice_sessions = PracticeSessionRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cards.router, prefix="/cards", tags=["cards"])
app.include_router(practice.router, prefix="/practice", tags=["practice"])
app.include_router(preferences.router, prefix="/preferences", tags=["preferences"])


@app.get("/health")
def health_check():
    return {"status": "ok"}

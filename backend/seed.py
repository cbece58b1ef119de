"""Seed a demo user with a handful of German cards and print a bearer token."""
import logging
import uuid

from lingua.auth.jwt import create_user_token
from lingua.db.base import Base
from lingua.db.session import SessionLocal, engine
from lingua.domain.practice.entities import NounData, VerbData, word_data_to_dict
from lingua.models import Card

logger = logging.getLogger(__name__)

DEMO_CARDS = [
    dict(front_text="the house", back_text="Haus", german_article="das", icon="🏠",
         word_data=word_data_to_dict(NounData(gender="das", plural="Häuser"))),
    dict(front_text="the dog", back_text="Hund", german_article="der", icon="🐕",
         word_data=word_data_to_dict(NounData(gender="der", plural="Hunde"))),
    dict(front_text="the cat", back_text="Katze", german_article="die", icon="🐈",
         word_data=word_data_to_dict(NounData(gender="die", plural="Katzen"))),
    dict(front_text="to go", back_text="gehen", difficulty=2,
         word_data=word_data_to_dict(VerbData(
             is_regular=False, auxiliary="sein", present_du="gehst",
             present_er="geht", past_simple="ging", past_participle="gegangen",
         ))),
    dict(front_text="to play", back_text="spielen",
         word_data=word_data_to_dict(VerbData(present_du="spielst", present_er="spielt"))),
    dict(front_text="good morning", back_text="guten Morgen", category="phrases"),
]


def seed(user_id: uuid.UUID) -> None:
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        db.add_all(
            Card(user_id=user_id, language="de", tags=[], exercise_scores={}, **data)
            for data in DEMO_CARDS
        )
        db.commit()

    logger.info("Seeded %s cards for user %s", len(DEMO_CARDS), user_id)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demo_user = uuid.uuid4()
    seed(demo_user)
    print(f"User id: {demo_user}")
    print(f"Token:   {create_user_token(demo_user)}")

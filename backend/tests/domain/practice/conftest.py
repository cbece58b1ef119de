import itertools
from datetime import datetime, timezone

import pytest

from lingua.core.exceptions import CardStoreError
from lingua.domain.practice.entities import Card

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_card():
    counter = itertools.count(1)

    def _make(**overrides) -> Card:
        n = next(counter)
        data = dict(
            id=f"card-{n}",
            front_text=f"word {n}",
            back_text=f"Wort{n}",
            language="de",
        )
        data.update(overrides)
        return Card(**data)

    return _make


class InMemoryCardStore:
    def __init__(self, cards=()):
        self.cards = {c.id: c for c in cards}
        self.saved: list[Card] = []
        self.fail_next_save = False

    def get_all_cards(self) -> list[Card]:
        return list(self.cards.values())

    def save_card(self, card: Card) -> Card:
        if self.fail_next_save:
            self.fail_next_save = False
            raise CardStoreError("disk full")
        self.cards[card.id] = card
        self.saved.append(card)
        return card


@pytest.fixture
def store_factory():
    return InMemoryCardStore

from typing import Protocol

from .entities import Card


class CardStore(Protocol):
    """Where the scheduler reads the card pool from and writes answered cards to."""

    def get_all_cards(self) -> list[Card]:
        ...

    def save_card(self, card: Card) -> Card:
        ...

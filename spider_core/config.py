from __future__ import annotations

from dataclasses import dataclass

from spider_core.card import CARDS_PER_DECK

STANDARD_COLUMNS = 10
STANDARD_LAYOUT = (6, 6, 6, 6, 5, 5, 5, 5, 5, 5)
FALLBACK_PILE_SIZE = 5
SUIT_COUNTS = (1, 2, 4)


def initial_layout(columns: int) -> tuple[int, ...]:
    """Cards dealt to each column at the start of a game."""
    if columns == STANDARD_COLUMNS:
        return STANDARD_LAYOUT
    return tuple(FALLBACK_PILE_SIZE for _ in range(columns))


@dataclass(frozen=True, slots=True)
class GameConfig:
    columns: int = STANDARD_COLUMNS
    num_suits: int = 1
    num_decks: int = 2

    @property
    def total_cards(self) -> int:
        return CARDS_PER_DECK * self.num_decks

    def validate(self) -> GameConfig:
        if self.columns < 1:
            raise ValueError(f"columns must be positive: {self.columns}")
        if self.num_suits not in SUIT_COUNTS:
            raise ValueError(f"num_suits must be one of {SUIT_COUNTS}: {self.num_suits}")
        if self.num_decks < 1:
            raise ValueError(f"num_decks must be positive: {self.num_decks}")
        needed = sum(initial_layout(self.columns))
        if needed > self.total_cards:
            raise ValueError(f"{self.total_cards} cards cannot fill the initial deal of {needed}")
        return self

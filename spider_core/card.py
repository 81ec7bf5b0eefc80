from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence, TypeVar

NUM_PER_SUIT = 13
CARDS_PER_DECK = 52
RANK_LABELS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

Rng = Callable[[], float]
T = TypeVar("T")


class Suit(Enum):
    SPADE = "S"
    HEART = "H"
    DIAMOND = "D"
    CLUB = "C"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


SUIT_ORDER = (Suit.SPADE, Suit.HEART, Suit.DIAMOND, Suit.CLUB)
_SUIT_SYMBOLS = {Suit.SPADE: "♠", Suit.HEART: "♥", Suit.DIAMOND: "♦", Suit.CLUB: "♣"}


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card. Identity is the id, rank 1 is the Ace and 13 the King."""

    id: int
    rank: int
    suit: Suit
    face_up: bool = False

    @property
    def label(self) -> str:
        return rank_label(self.rank)

    def game_str(self) -> str:
        return face_text(self.suit, self.label, self.face_up)

    def turned(self, face_up: bool) -> Card:
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def __str__(self):
        return self.game_str()


def face_text(suit: Suit, label: str, face_up: bool) -> str:
    """Short text for a card as the player sees it, "---" while face down."""
    if not face_up:
        return "---"
    return f"{suit.symbol}{label}"


def rank_label(rank: int) -> str:
    if rank < 1 or rank > NUM_PER_SUIT:
        raise ValueError(f"rank out of range: {rank}")
    return RANK_LABELS[rank - 1]


def build_deck(num_suits: int, num_decks: int) -> list[Card]:
    """
    Build ``52 * num_decks`` face-down cards using the first ``num_suits`` suits.

    With fewer than four suits every deck copy is padded back up to 52 cards
    with extra cards of the first suit, ranks cycling A..K.
    """
    if num_suits not in (1, 2, 4):
        raise ValueError(f"unsupported suit count: {num_suits}")
    if num_decks < 1:
        raise ValueError(f"deck count must be positive: {num_decks}")
    suits = SUIT_ORDER[:num_suits]
    cards: list[Card] = []

    def add(suit: Suit, rank: int):
        cards.append(Card(id=len(cards), rank=rank, suit=suit))

    for _ in range(num_decks):
        for suit in suits:
            for rank in range(1, NUM_PER_SUIT + 1):
                add(suit, rank)
        need = CARDS_PER_DECK - len(suits) * NUM_PER_SUIT
        for i in range(need):
            add(suits[0], (i % NUM_PER_SUIT) + 1)
    return cards


def shuffle(items: Sequence[T], rng: Rng) -> list[T]:
    """Fisher-Yates shuffle into a new list. ``rng`` returns floats in [0, 1)."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out

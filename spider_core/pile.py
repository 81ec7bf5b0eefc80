from __future__ import annotations

from typing import Iterable, Optional

from spider_core.card import NUM_PER_SUIT, Card


class PileError(ValueError):
    """A pile primitive was called outside its contract."""


class InvalidCount(PileError):
    pass


class InvalidRun(PileError):
    pass


def is_descending_same_suit(cards: list[Card]) -> bool:
    """All face-up, one suit, each card exactly one rank above the card on top of it."""
    for card in cards:
        if not card.face_up:
            return False
    for lower, upper in zip(cards, cards[1:]):
        if lower.suit != upper.suit or lower.rank != upper.rank + 1:
            return False
    return True


def is_complete_sequence(cards: list[Card]) -> bool:
    if len(cards) != NUM_PER_SUIT:
        return False
    if cards[0].rank != NUM_PER_SUIT or cards[-1].rank != 1:
        return False
    return is_descending_same_suit(cards)


class Pile:
    """
    One tableau column, cards ordered bottom to top.

    The card list is private; everything goes through the operations below so a
    run handed out is always contiguous up to the top.
    """

    def __init__(self, cards: Iterable[Card] = ()):
        self._cards: list[Card] = list(cards)

    def __len__(self):
        return len(self._cards)

    def __repr__(self):
        return f"Pile({self._cards!r})"

    @property
    def length(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def peek(self) -> Optional[Card]:
        if not self._cards:
            return None
        return self._cards[-1]

    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def push(self, card: Card):
        self._cards.append(card)

    def push_many(self, cards: Iterable[Card]):
        for card in cards:
            self._cards.append(card)

    def _check_count(self, count: int):
        if count <= 0:
            raise InvalidCount(f"count must be positive (received {count})")
        if count > len(self._cards):
            raise InvalidCount(f"cannot take {count} cards from pile of size {len(self._cards)}")

    def pop_many(self, count: int) -> list[Card]:
        self._check_count(count)
        start = len(self._cards) - count
        taken = self._cards[start:]
        del self._cards[start:]
        return taken

    def peek_run(self, count: int) -> list[Card]:
        self._check_count(count)
        return self._cards[len(self._cards) - count:]

    def can_take_descending_run(self, count: int) -> bool:
        if count <= 0 or count > len(self._cards):
            return False
        return is_descending_same_suit(self.peek_run(count))

    def take_descending_run(self, count: int) -> list[Card]:
        self._check_count(count)
        if not self.can_take_descending_run(count):
            raise InvalidRun(f"top {count} cards are not a face-up descending run of one suit")
        return self.pop_many(count)

    def max_movable_run_length(self) -> int:
        cards = self._cards
        length = 0
        for i in range(len(cards) - 1, -1, -1):
            current = cards[i]
            if not current.face_up:
                break
            if length > 0:
                above = cards[i + 1]
                if current.suit != above.suit or current.rank != above.rank + 1:
                    break
            length += 1
        return length

    def collect_complete_sequence(self) -> Optional[list[Card]]:
        """Remove and return a finished King-to-Ace run sitting on top, if there is one."""
        if self.max_movable_run_length() < NUM_PER_SUIT:
            return None
        if not is_complete_sequence(self.peek_run(NUM_PER_SUIT)):
            return None
        return self.pop_many(NUM_PER_SUIT)

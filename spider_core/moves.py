from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from spider_core.card import Card


@dataclass(frozen=True, slots=True)
class Collection:
    """A finished King-to-Ace run retired from a column as a side effect of an action."""

    col: int
    cards: tuple[Card, ...]
    # Card exposed by the retirement and turned face up.
    flipped_card: Optional[Card] = None


@dataclass(frozen=True, slots=True)
class DealRecord:
    """One card dealt from stock onto each column, in column order."""

    cards: tuple[Card, ...]
    collections: tuple[Collection, ...] = ()


@dataclass(frozen=True, slots=True)
class MoveRecord:
    from_col: int
    to_col: int
    count: int
    # Moved cards in their pile order, bottom of the run first.
    cards: tuple[Card, ...]
    # Card exposed on from_col and turned face up, as it is after the flip.
    flipped_card: Optional[Card] = None
    # Run retired from to_col once the cards landed.
    collected: Optional[Collection] = None


Record = Union[DealRecord, MoveRecord]


class MoveLog:
    """Append-only history with an undo cursor; records past the cursor are the redo tail."""

    def __init__(self):
        self._records: list[Record] = []
        self._idx = 0  # number of applied records

    def log(self, record: Record):
        if self._idx != len(self._records):
            del self._records[self._idx:]
        self._records.append(record)
        self._idx += 1

    @property
    def applied(self) -> tuple[Record, ...]:
        return tuple(self._records[:self._idx])

    def can_undo(self) -> bool:
        return self._idx > 0

    def can_redo(self) -> bool:
        return self._idx < len(self._records)

    def peek_undo(self) -> Optional[Record]:
        if not self.can_undo():
            return None
        return self._records[self._idx - 1]

    def peek_redo(self) -> Optional[Record]:
        if not self.can_redo():
            return None
        return self._records[self._idx]

    def step_back(self):
        if not self.can_undo():
            raise IndexError("nothing to undo")
        self._idx -= 1

    def step_forward(self):
        if not self.can_redo():
            raise IndexError("nothing to redo")
        self._idx += 1

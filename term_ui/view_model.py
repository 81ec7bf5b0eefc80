from dataclasses import dataclass
from typing import Optional

from spider_core.card import Suit


@dataclass(frozen=True)
class SelectionState:
    source_column: Optional[int] = None
    selected_count: Optional[int] = None
    target_column: Optional[int] = None
    cursor_column: int = 0


@dataclass(frozen=True)
class CardView:
    id: int
    label: str
    face_up: bool
    suit: Suit
    selected: bool = False
    highlighted: bool = False


@dataclass(frozen=True)
class ColumnView:
    index: int
    cards: tuple[CardView, ...]
    focused: bool = False
    selected: bool = False


@dataclass(frozen=True)
class BoardSnapshot:
    columns: tuple[ColumnView, ...]
    stock_count: int
    can_deal: bool
    completed_count: int
    move_count: int
    won: bool
    selection: Optional[SelectionState] = None

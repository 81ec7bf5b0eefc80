from typing import Optional

from spider_core.card import Card
from spider_core.moves import DealRecord, MoveRecord, Record
from spider_core.pile import Pile
from spider_core.state import GameState
from term_ui.view_model import BoardSnapshot, CardView, ColumnView, SelectionState

HIDDEN_LABEL = "###"


def _card_view(card: Card, selected: bool, highlighted: bool) -> CardView:
    return CardView(
        id=card.id,
        label=card.label if card.face_up else HIDDEN_LABEL,
        face_up=card.face_up,
        suit=card.suit,
        selected=selected,
        highlighted=highlighted,
    )


def _column_view(pile: Pile, index: int, selection: Optional[SelectionState]) -> ColumnView:
    cards = pile.cards()
    is_source = selection is not None and selection.source_column == index
    is_focused = selection is not None and selection.cursor_column == index
    selected_count = selection.selected_count if is_source else None

    views = []
    for i, card in enumerate(cards):
        selected = selected_count is not None and i >= len(cards) - selected_count
        highlighted = is_focused and i == len(cards) - 1
        views.append(_card_view(card, selected, highlighted))
    return ColumnView(index=index, cards=tuple(views), focused=is_focused, selected=is_source)


def snapshot(state: GameState, selection: Optional[SelectionState] = None) -> BoardSnapshot:
    """Read-only projection of the game for renderers."""
    return BoardSnapshot(
        columns=tuple(_column_view(pile, i, selection) for i, pile in enumerate(state.tableau)),
        stock_count=len(state.stock),
        can_deal=state.can_deal_row(),
        completed_count=len(state.completed),
        move_count=len(state.moves),
        won=state.is_won(),
        selection=selection,
    )


def describe(record: Record) -> str:
    if isinstance(record, MoveRecord):
        text = f"moved {record.count} card(s) from column {record.from_col} to column {record.to_col}"
        if record.flipped_card is not None:
            text += f", revealed {record.flipped_card}"
        if record.collected is not None:
            text += ", completed a run"
        return text
    if isinstance(record, DealRecord):
        text = f"dealt {len(record.cards)} card(s)"
        if record.collections:
            text += f", completed {len(record.collections)} run(s)"
        return text
    raise TypeError(f"unknown record: {record!r}")

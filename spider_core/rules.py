from typing import Optional

from spider_core.card import Card
from spider_core.pile import Pile


def can_place_on(card: Card, target: Optional[Card]) -> bool:
    """
    Any card may start an empty column. Otherwise the target must be face up and
    exactly one rank higher; suits do not have to match.
    """
    if target is None:
        return True
    if not target.face_up:
        return False
    return card.rank == target.rank - 1


def can_move_stack(src: Pile, count: int, dest: Pile) -> bool:
    if count <= 0 or count > src.length:
        return False
    if not src.can_take_descending_run(count):
        return False
    # The deepest card of the run is the one that lands on the destination.
    base = src.peek_run(count)[0]
    return can_place_on(base, dest.peek())


def should_flip_top_card(pile: Pile) -> bool:
    top = pile.peek()
    return top is not None and not top.face_up


def flip_card(card: Card) -> Card:
    return card.turned(True)

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from spider_core.card import NUM_PER_SUIT, Card, Rng, build_deck, shuffle
from spider_core.config import GameConfig, initial_layout
from spider_core.moves import Collection, DealRecord, MoveLog, MoveRecord, Record
from spider_core.pile import Pile
from spider_core import rules

logger = logging.getLogger(__name__)


class GameState:
    """
    The authoritative Spider session: tableau, stock, retired runs and history.

    Rejected actions return False and leave the state untouched. Only Pile
    primitives raise, and only when called outside their contract.
    """

    def __init__(self, config: GameConfig, rng: Rng):
        config.validate()
        deck = shuffle(build_deck(config.num_suits, config.num_decks), rng)
        tableau = []
        cursor = 0
        for count in initial_layout(config.columns):
            dealt = deck[cursor:cursor + count]
            cursor += count
            # Only the last card dealt to a column starts face up.
            tableau.append([card.turned(i == count - 1) for i, card in enumerate(dealt)])
        self._setup(config, tableau, deck[cursor:], ())
        logger.debug(
            "new game: %d columns, %d suits, %d decks, stock %d",
            config.columns, config.num_suits, config.num_decks, len(self._stock),
        )

    @classmethod
    def from_position(
        cls,
        tableau: Iterable[Iterable[Card]],
        stock: Iterable[Card] = (),
        completed: Iterable[Iterable[Card]] = (),
        num_suits: int = 1,
        num_decks: int = 2,
    ) -> GameState:
        """Build a state from explicit piles, stock listed bottom to top."""
        tableau = [list(cards) for cards in tableau]
        state = cls.__new__(cls)
        config = GameConfig(columns=len(tableau), num_suits=num_suits, num_decks=num_decks)
        state._setup(config, tableau, list(stock), completed)
        return state

    def _setup(self, config: GameConfig, tableau, stock, completed):
        self.config = config
        self._tableau = [Pile(cards) for cards in tableau]
        self._stock: list[Card] = list(stock)
        self._completed: list[tuple[Card, ...]] = [tuple(run) for run in completed]
        self._log = MoveLog()

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def num_suits(self) -> int:
        return self.config.num_suits

    @property
    def num_decks(self) -> int:
        return self.config.num_decks

    @property
    def tableau(self) -> tuple[Pile, ...]:
        """Detached copies of the columns; changes to them do not reach the game."""
        return tuple(Pile(pile.cards()) for pile in self._tableau)

    @property
    def stock(self) -> tuple[Card, ...]:
        return tuple(self._stock)

    @property
    def completed(self) -> tuple[tuple[Card, ...], ...]:
        return tuple(self._completed)

    @property
    def moves(self) -> tuple[Record, ...]:
        return self._log.applied

    def pile(self, col: int) -> Pile:
        return Pile(self._tableau[col].cards())

    def _valid_column(self, col: int) -> bool:
        return 0 <= col < len(self._tableau)

    # ---- dealing ----

    def can_deal_row(self) -> bool:
        if any(pile.is_empty() for pile in self._tableau):
            return False
        return len(self._stock) >= len(self._tableau)

    def deal_row(self) -> bool:
        if not self.can_deal_row():
            logger.debug("deal rejected: stock %d, columns %d", len(self._stock), len(self._tableau))
            return False
        self._log.log(self._apply_deal())
        return True

    def _apply_deal(self) -> DealRecord:
        dealt = []
        for pile in self._tableau:
            card = rules.flip_card(self._stock.pop())
            pile.push(card)
            dealt.append(card)
        collections = []
        for col in range(len(self._tableau)):
            collection = self._collect_after(col)
            if collection is not None:
                collections.append(collection)
        logger.debug("dealt %d cards, stock left %d", len(dealt), len(self._stock))
        return DealRecord(cards=tuple(dealt), collections=tuple(collections))

    # ---- moving ----

    def can_move_stack(self, from_col: int, count: int, to_col: int) -> bool:
        if not self._valid_column(from_col) or not self._valid_column(to_col):
            return False
        if from_col == to_col:
            return False
        return rules.can_move_stack(self._tableau[from_col], count, self._tableau[to_col])

    def move_stack(self, from_col: int, count: int, to_col: int) -> bool:
        if not self.can_move_stack(from_col, count, to_col):
            logger.debug("move rejected: %d card(s) from %d to %d", count, from_col, to_col)
            return False
        self._log.log(self._apply_move(from_col, count, to_col))
        return True

    def _apply_move(self, from_col: int, count: int, to_col: int) -> MoveRecord:
        cards = self._tableau[from_col].take_descending_run(count)
        flipped = self._reveal_top(from_col)
        self._tableau[to_col].push_many(cards)
        logger.debug("moved %d card(s) from %d to %d", count, from_col, to_col)
        return MoveRecord(
            from_col=from_col,
            to_col=to_col,
            count=count,
            cards=tuple(cards),
            flipped_card=flipped,
            collected=self._collect_after(to_col),
        )

    def legal_moves(self) -> Iterator[tuple[int, int, int]]:
        """Every (from_col, count, to_col) currently accepted by move_stack."""
        for from_col, src in enumerate(self._tableau):
            for count in range(1, src.max_movable_run_length() + 1):
                for to_col in range(len(self._tableau)):
                    if self.can_move_stack(from_col, count, to_col):
                        yield from_col, count, to_col

    def has_legal_move(self) -> bool:
        if self.can_deal_row():
            return True
        return next(self.legal_moves(), None) is not None

    # ---- completed runs ----

    def try_collect_complete_sequence(self, col: int) -> bool:
        """Retire a finished run from ``col``. Direct calls are not recorded in the history."""
        return self._retire_run(col) is not None

    def _retire_run(self, col: int) -> Optional[list[Card]]:
        run = self._tableau[col].collect_complete_sequence()
        if run is None:
            return None
        self._completed.append(tuple(run))
        logger.debug("collected %s run from column %d", run[0].suit.name, col)
        if self.is_won():
            logger.info("all %d runs collected", len(self._completed))
        return run

    def _collect_after(self, col: int) -> Optional[Collection]:
        run = self._retire_run(col)
        if run is None:
            return None
        return Collection(col=col, cards=tuple(run), flipped_card=self._reveal_top(col))

    def is_won(self) -> bool:
        return len(self._completed) == self.config.total_cards // NUM_PER_SUIT

    # ---- face state ----

    def _reveal_top(self, col: int) -> Optional[Card]:
        pile = self._tableau[col]
        if not rules.should_flip_top_card(pile):
            return None
        flipped = rules.flip_card(pile.pop_many(1)[0])
        pile.push(flipped)
        logger.debug("revealed %s on column %d", flipped, col)
        return flipped

    def _hide_top(self, col: int, card: Card):
        pile = self._tableau[col]
        top = pile.pop_many(1)[0]
        if top.id != card.id:
            raise RuntimeError(f"history out of sync: expected card {card.id} on column {col}, found {top.id}")
        pile.push(top.turned(False))

    # ---- history ----

    def can_undo(self) -> bool:
        return self._log.can_undo()

    def can_redo(self) -> bool:
        return self._log.can_redo()

    def undo(self) -> bool:
        record = self._log.peek_undo()
        if record is None:
            return False
        if isinstance(record, MoveRecord):
            self._undo_move(record)
        elif isinstance(record, DealRecord):
            self._undo_deal(record)
        else:
            raise TypeError(f"unknown record: {record!r}")
        self._log.step_back()
        logger.debug("undid %s", type(record).__name__)
        return True

    def redo(self) -> bool:
        record = self._log.peek_redo()
        if record is None:
            return False
        if isinstance(record, MoveRecord):
            self._apply_move(record.from_col, record.count, record.to_col)
        elif isinstance(record, DealRecord):
            self._apply_deal()
        else:
            raise TypeError(f"unknown record: {record!r}")
        self._log.step_forward()
        logger.debug("redid %s", type(record).__name__)
        return True

    def _restore_collection(self, collection: Collection):
        ids = [card.id for card in collection.cards]
        for idx, run in enumerate(self._completed):
            if [card.id for card in run] == ids:
                break
        else:
            raise RuntimeError(f"history out of sync: run from column {collection.col} is not in completed")
        del self._completed[idx]
        if collection.flipped_card is not None:
            self._hide_top(collection.col, collection.flipped_card)
        self._tableau[collection.col].push_many(collection.cards)

    def _undo_move(self, record: MoveRecord):
        if record.collected is not None:
            self._restore_collection(record.collected)
        cards = self._tableau[record.to_col].pop_many(record.count)
        if record.flipped_card is not None:
            self._hide_top(record.from_col, record.flipped_card)
        self._tableau[record.from_col].push_many(cards)

    def _undo_deal(self, record: DealRecord):
        for collection in reversed(record.collections):
            self._restore_collection(collection)
        for col in range(len(self._tableau) - 1, -1, -1):
            card = self._tableau[col].pop_many(1)[0]
            self._stock.append(card.turned(False))

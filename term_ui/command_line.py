from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Callable, Optional

from spider_core.card import face_text
from spider_core.state import GameState
from term_ui import settings_store
from term_ui.adapter import describe, snapshot
from term_ui.view_model import BoardSnapshot

logger = logging.getLogger(__name__)

CELL = 5
HELP = "commands: mv <from> <to> [count] | deal | undo | redo | hint | quit"


def render(board: BoardSnapshot) -> str:
    lines = [
        f"Completed: {board.completed_count}    Stock: {board.stock_count}    Moves: {board.move_count}",
        "-" * 3 + "".join(str(i).rjust(CELL) for i in range(len(board.columns))),
    ]
    depth = max((len(col.cards) for col in board.columns), default=0)
    for row in range(depth):
        line = f"{row}:".ljust(3)
        for col in board.columns:
            if row >= len(col.cards):
                line += " " * CELL
                continue
            card = col.cards[row]
            line += face_text(card.suit, card.label, card.face_up).rjust(CELL)
        lines.append(line)
    return "\n".join(lines)


def _longest_legal_count(state: GameState, src: int, dest: int) -> Optional[int]:
    if not 0 <= src < state.columns:
        return None
    for count in range(state.pile(src).max_movable_run_length(), 0, -1):
        if state.can_move_stack(src, count, dest):
            return count
    return None


def execute(state: GameState, command: str) -> Optional[str]:
    """Apply one text command. Returns a message for the player, or None."""
    words = command.split()
    if not words:
        return None
    name = words[0]
    if name == "mv":
        try:
            src = int(words[1])
            dest = int(words[2])
            count = int(words[3]) if len(words) > 3 else _longest_legal_count(state, src, dest)
        except (IndexError, ValueError):
            return "Invalid index!"
        if count is None or not state.move_stack(src, count, dest):
            return "Cannot move!"
    elif name == "deal":
        if not state.deal_row():
            return "Cannot deal!"
    elif name == "undo":
        if not state.undo():
            return "Cannot undo!"
    elif name == "redo":
        if not state.redo():
            return "Cannot redo!"
    elif name == "hint":
        move = next(state.legal_moves(), None)
        if move is not None:
            src, count, dest = move
            return f"Try: mv {src} {dest} {count}"
        if state.can_deal_row():
            return "Try: deal"
        return "No moves left."
    else:
        return "Invalid command! " + HELP
    if state.moves:
        logger.debug("last action: %s", describe(state.moves[-1]))
    return None


def run(state: GameState, read: Callable[[], str] = input, write: Callable[[str], None] = print):
    write("Game started! " + HELP)
    write(render(snapshot(state)))
    while not state.is_won():
        try:
            command = read()
        except EOFError:
            return
        if command.strip() in ("quit", "exit"):
            return
        message = execute(state, command)
        if message:
            write(message)
        write(render(snapshot(state)))
    write("You win!")


def parse_args(argv=None) -> argparse.Namespace:
    defaults = settings_store.load_settings()
    parser = argparse.ArgumentParser(description="Spider Solitaire in the terminal.")
    parser.add_argument("--suits", type=int, choices=(1, 2, 4), default=int(defaults["num_suits"]), help="Suit count.")
    parser.add_argument("--decks", type=int, default=int(defaults["num_decks"]), help="Deck count.")
    parser.add_argument("--columns", type=int, default=int(defaults["columns"]), help="Tableau columns.")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed for a reproducible deal.")
    parser.add_argument("--save-defaults", action="store_true", help="Remember suits/decks/columns.")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    settings = {"columns": args.columns, "num_suits": args.suits, "num_decks": args.decks}
    config = settings_store.to_config(settings)
    try:
        config.validate()
    except ValueError as e:
        print(f"Invalid game options: {e}", file=sys.stderr)
        return 2
    if args.save_defaults:
        settings_store.save_settings(settings)

    rng = random.Random(args.seed).random
    run(GameState(config, rng))
    return 0


if __name__ == "__main__":
    sys.exit(main())

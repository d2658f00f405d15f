"""Console game loop: a human against the engine, or the engine against itself."""

import argparse
import random
from typing import Callable, Optional

from loa.config import CONFIG
from loa.core.board import Board
from loa.core.evaluator import Evaluator
from loa.core.move import Move
from loa.core.piece import DRAW, Piece
from loa.core.search import SearchEngine
from loa.utils.logging import setup_logging

MACHINE_SIDES = {
    "white": {Piece.WHITE},
    "black": {Piece.BLACK},
    "both": {Piece.WHITE, Piece.BLACK},
    "none": set(),
}


def result_message(winner: Optional[Piece]) -> str:
    if winner is None:
        return "Game abandoned."
    if winner is DRAW:
        return "Tie."
    return f"{winner.full_name} wins."


def _undo_to_human(board: Board, machines) -> bool:
    """Retract until a human is to move again. False if nothing to undo."""
    if board.moves_made() == 0:
        return False
    board.retract()
    while board.turn in machines and board.moves_made() > 0:
        board.retract()
    return True


def play(
    machine_side: str = "white",
    depth: Optional[int] = None,
    seed: Optional[int] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[object], None] = print,
    board: Optional[Board] = None,
) -> Optional[Piece]:
    """Play one game and return the winner (DRAW for a tie, None if abandoned)."""
    board = board or Board(move_limit=CONFIG.board.move_limit)
    machines = MACHINE_SIDES[machine_side]
    rng = random.Random(CONFIG.search.seed if seed is None else seed)
    engine = SearchEngine(
        Evaluator(rand_int=rng.randrange),
        depth=depth,
        reporter=lambda m: output_fn(f"Engine plays: {m}"),
    )

    while not board.game_over():
        output_fn(board)
        if not board.legal_moves():
            output_fn(f"{board.turn.full_name} has no legal moves.")
            return None

        if board.turn in machines:
            board.make_move(engine.get_move(board))
            continue

        text = input_fn(f"{board.turn.full_name} to move (e.g. a1-c3, undo, quit): ").strip().lower()
        if text == "quit":
            output_fn(result_message(None))
            return None
        if text == "undo":
            if not _undo_to_human(board, machines):
                output_fn("Nothing to undo.")
            continue
        try:
            move = Move.parse(text)
        except ValueError:
            output_fn("Invalid move format, try again.")
            continue
        if not board.is_legal_move(move):
            output_fn("Illegal move, try again.")
            continue
        board.make_move(move)

    output_fn(board)
    output_fn(result_message(board.winner()))
    return board.winner()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Lines of Action against the engine.")
    parser.add_argument("--depth", type=int, default=CONFIG.search.depth, help="search depth in plies")
    parser.add_argument("--machine", choices=sorted(MACHINE_SIDES), default=CONFIG.ui.machine_side,
                        help="which side(s) the engine plays")
    parser.add_argument("--seed", type=int, default=CONFIG.search.seed, help="seed for evaluation noise")
    parser.add_argument("--log-level", default=CONFIG.log_level)
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    play(machine_side=args.machine, depth=args.depth, seed=args.seed)


if __name__ == "__main__":
    main()

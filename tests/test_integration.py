"""
Integration test suite for the Lines of Action engine.

Tests components working together end-to-end:
- Full game simulations (engine vs engine)
- Engine facade (string moves, undo, results)
- Console game loop (scripted input, machine replies, undo, quit)
- Configuration loading from TOML
- Search info logging
"""

import random
from unittest.mock import patch

import pytest
from loguru import logger

from interface.cli import main, play, result_message
from loa.config import CONFIG, Config
from loa.core.board import Board
from loa.core.evaluator import Evaluator
from loa.core.move import Move
from loa.core.piece import DRAW, Piece
from loa.core.search import SearchEngine
from loa.main import Engine

WHITE, BLACK = Piece.WHITE, Piece.BLACK

WHITE_TO_CONNECT = """
    - - - - b - - b
    - - - - - - - -
    - - - - - - - -
    - - - - - - - b
    - - - - - - - -
    - - w - - - - -
    - - - - - - - -
    w w - - - - - -
"""

WHITE_BOXED_IN = """
    - - - - - b b w
    - - - - - - b b
    - - - - - b - b
    - - - - - - - -
    - - - - - - - -
    b - b - - - - -
    b b - - - - - -
    w b b - - - - -
"""


def scripted(lines):
    it = iter(lines)
    return lambda prompt: next(it)


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE: FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """Tests that the engine can play complete games."""

    def test_engine_vs_engine_completes(self):
        """Two engines play until the game ends; the move limit bounds it."""
        engine = SearchEngine(Evaluator(rand_int=random.Random(1).randrange), depth=1)
        board = Board()
        while not board.game_over():
            move = engine.get_move(board)
            assert board.is_legal_move(move), f"Illegal move {move} at ply {board.moves_made()}"
            board.make_move(move)
        assert board.moves_made() <= board.move_limit
        assert board.winner() in (WHITE, BLACK, DRAW)

    def test_game_can_be_unwound(self):
        """Every move of a finished game retracts back to the start."""
        engine = SearchEngine(Evaluator(rand_int=random.Random(2).randrange), depth=1)
        board = Board(move_limit=20)
        while not board.game_over():
            board.make_move(engine.get_move(board))
        while board.moves_made():
            board.retract()
        assert board == Board()

    def test_depth_two_opening(self):
        engine = SearchEngine(Evaluator(rand_int=random.Random(3).randrange), depth=2)
        board = Board()
        for _ in range(4):
            move = engine.get_move(board)
            assert move in board.legal_moves()
            board.make_move(move)
        assert board.moves_made() == 4

    def test_engine_takes_immediate_win(self):
        engine = SearchEngine(Evaluator(rand_int=random.Random(4).randrange), depth=2)
        board = Board.from_layout(WHITE_TO_CONNECT, WHITE)
        board.make_move(engine.get_move(board))
        assert board.winner() is WHITE


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE FACADE
# ════════════════════════════════════════════════════════════════════════════


class TestEngineWrapper:
    def setup_method(self):
        self.engine = Engine(depth=1, rand_int=lambda bound: 0)

    def test_make_and_undo(self):
        assert self.engine.make_move("b1-b3") is True
        assert self.engine.make_move("a2-c2") is True
        assert self.engine.board.moves_made() == 2
        assert self.engine.undo() is True
        assert self.engine.undo() is True
        assert self.engine.undo() is False
        assert self.engine.board == Board()

    def test_rejects_bad_input(self):
        assert self.engine.make_move("zz") is False
        assert self.engine.make_move("b1-b9") is False
        assert self.engine.make_move("b1-b2") is False  # wrong distance
        assert self.engine.make_move("a2-c2") is False  # white piece, black to move
        assert self.engine.board.moves_made() == 0

    def test_get_best_move(self):
        move_str, value = self.engine.get_best_move()
        assert self.engine.board.is_legal_move(Move.parse(move_str))
        assert isinstance(value, int)
        assert self.engine.make_move(move_str) is True

    def test_results(self):
        assert self.engine.result() is None
        self.engine.board = Board(move_limit=0)
        assert self.engine.is_game_over()
        assert self.engine.result() == "Tie."
        assert self.engine.make_move("b1-b3") is False
        assert self.engine.get_best_move()[0] is None

    def test_win_result(self):
        self.engine.board = Board.from_layout(WHITE_TO_CONNECT, WHITE)
        assert self.engine.make_move("c3-c2") is True
        assert self.engine.result() == "White wins."

    def test_print_board(self, capsys):
        self.engine.print_board()
        assert "Next move: Black" in capsys.readouterr().out


# ════════════════════════════════════════════════════════════════════════════
#  CONSOLE GAME LOOP
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def test_result_messages(self):
        assert result_message(WHITE) == "White wins."
        assert result_message(BLACK) == "Black wins."
        assert result_message(DRAW) == "Tie."
        assert result_message(None) == "Game abandoned."

    def test_human_input_errors(self):
        out = []
        board = Board()
        result = play(machine_side="none", input_fn=scripted(["b1-b3", "xyz", "b1-b2", "quit"]),
                      output_fn=out.append, board=board)
        assert result is None
        assert "Invalid move format, try again." in out
        assert "Illegal move, try again." in out
        assert out[-1] == "Game abandoned."
        assert board.moves_made() == 1

    def test_undo_with_nothing_to_undo(self):
        out = []
        play(machine_side="none", input_fn=scripted(["undo", "quit"]), output_fn=out.append)
        assert "Nothing to undo." in out

    def test_machine_replies_and_undo(self):
        out = []
        board = Board()
        play(machine_side="white", depth=1, seed=0,
             input_fn=scripted(["b1-b3", "undo", "quit"]), output_fn=out.append, board=board)
        assert any(str(line).startswith("Engine plays: ") for line in out)
        # Undo takes back the engine's reply and the human's move.
        assert board == Board()
        assert board.moves_made() == 0

    def test_human_wins(self):
        out = []
        board = Board.from_layout(WHITE_TO_CONNECT, WHITE)
        result = play(machine_side="none", input_fn=scripted(["b1-b2"]), output_fn=out.append, board=board)
        assert result is WHITE
        assert out[-1] == "White wins."

    def test_side_without_legal_moves_ends_game(self):
        out = []
        board = Board.from_layout(WHITE_BOXED_IN, WHITE)
        result = play(machine_side="white", depth=1, seed=0, input_fn=scripted([]),
                      output_fn=out.append, board=board)
        assert result is None
        assert out[-1] == "White has no legal moves."
        assert board.moves_made() == 0

    def test_machine_vs_machine(self):
        out = []
        result = play(machine_side="both", depth=1, seed=5, output_fn=out.append,
                      board=Board(move_limit=6))
        assert result in (WHITE, BLACK, DRAW)
        assert out[-1] == result_message(result)
        assert sum(str(line).startswith("Engine plays: ") for line in out) <= 6

    def test_main_parses_arguments(self):
        with patch("interface.cli.play") as mock_play, patch("interface.cli.setup_logging") as mock_log:
            main(["--depth", "1", "--machine", "none", "--seed", "3", "--log-level", "DEBUG"])
        mock_play.assert_called_once_with(machine_side="none", depth=1, seed=3)
        mock_log.assert_called_once_with("DEBUG")

    def test_main_rejects_unknown_side(self):
        with pytest.raises(SystemExit):
            main(["--machine", "purple"])


# ════════════════════════════════════════════════════════════════════════════
#  CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════


class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.search.depth == 2
        assert cfg.board.move_limit == 60
        assert cfg.eval.zone2_band == (20, 25, 30, 35, 40)
        assert cfg.eval.lower == 0.4 and cfg.eval.upper == 0.8

    def test_missing_file_gives_defaults(self, tmp_path):
        assert Config.load_from_toml(str(tmp_path / "nope.toml")) == Config()

    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'log_level = "DEBUG"\n'
            "[search]\ndepth = 3\nseed = 7\n"
            "[eval]\nzone1_band = [2, 2, 2, 2, 2]\nbogus = 1\n"
            "[board]\nmove_limit = 10\n"
            '[ui]\nmachine_side = "black"\n'
        )
        cfg = Config.load_from_toml(str(path))
        assert cfg.log_level == "DEBUG"
        assert cfg.search.depth == 3
        assert cfg.search.seed == 7
        assert cfg.eval.zone1_band == (2, 2, 2, 2, 2)
        assert not hasattr(cfg.eval, "bogus")
        assert cfg.board.move_limit == 10
        assert cfg.ui.machine_side == "black"

    def test_config_drives_evaluator(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[eval]\nedge_penalty = 7\n")
        cfg = Config.load_from_toml(str(path))
        ev = Evaluator(rand_int=lambda bound: 0, cfg=cfg.eval)
        assert ev.zone_points(Board(), WHITE) == -7 * 12

    def test_engine_uses_configured_depth(self):
        assert SearchEngine().max_depth == CONFIG.search.depth


# ════════════════════════════════════════════════════════════════════════════
#  LOGGING
# ════════════════════════════════════════════════════════════════════════════


class TestLogging:
    def test_search_emits_info_line(self):
        messages = []
        handler_id = logger.add(messages.append, level="INFO", format="{message}")
        try:
            SearchEngine(Evaluator(rand_int=lambda bound: 0), depth=1).search_best_move(Board())
        finally:
            logger.remove(handler_id)
        assert any(msg.startswith("info depth 1 score pts") for msg in messages)

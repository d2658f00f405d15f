"""
Evaluator Module
================

Static evaluation of Lines of Action positions. Scores are in points,
positive when the position favors White and negative when it favors Black.

Key Features:
    - Zone placement: pieces away from the edge of their color's scoring
      axis earn graduated bonuses over three concentric bands.
    - Region shape: consolidation into one large region is rewarded and
      fragmentation is penalized, using the board's cached region sizes.
    - Noise: most bonuses are drawn from small bands through an injectable
      random source, so the evaluation is not perfectly predictable.
    - Momentum: a score that improves on the previous evaluation (for the
      side being searched for) earns a secondary bonus. This makes the
      evaluator stateful; call ``reset()`` before each search.

License: MIT
"""

import random
from typing import Callable, Optional, Tuple

from loguru import logger

from loa.config import CONFIG, EvalConfig
from loa.core.board import Board
from loa.core.piece import Piece

# rand_int(bound) -> uniform int in [0, bound)
RandInt = Callable[[int], int]

# (primary axis, secondary axis) per color; each picks col or row of a square.
_AXES = {
    Piece.WHITE: (lambda s: s.col, lambda s: s.row),
    Piece.BLACK: (lambda s: s.row, lambda s: s.col),
}


class Evaluator:
    """
    Heuristic evaluator for Lines of Action positions.

    The only state carried between calls is ``previous``, the last score
    returned, which feeds the momentum bonus.
    """

    def __init__(self, rand_int: Optional[RandInt] = None, cfg: Optional[EvalConfig] = None) -> None:
        self.cfg = cfg or CONFIG.eval
        self.rand_int: RandInt = rand_int or random.Random(CONFIG.search.seed).randrange
        self.previous: Optional[int] = None

    def reset(self) -> None:
        """Forget the previous score; the next evaluation gets no momentum bonus."""
        self.previous = None
        logger.debug("Evaluator momentum reset")

    def _pick(self, band: Tuple[int, ...]) -> int:
        return band[self.rand_int(self.cfg.band_size)]

    def evaluate(self, board: Board, sense: int) -> int:
        """
        Return the score of BOARD. SENSE is +1 when searching for White and
        -1 when searching for Black; it only orients the momentum bonus.
        """
        winner = board.winner()
        if winner is not None:
            if winner is Piece.WHITE:
                return self.cfg.winning_value
            if winner is Piece.BLACK:
                return -self.cfg.winning_value
            return 0

        score = self.side_points(board, Piece.WHITE) - self.side_points(board, Piece.BLACK)
        score += self._momentum(score, sense)
        self.previous = score
        return score

    def side_points(self, board: Board, color: Piece) -> int:
        """Points for COLOR, higher is better for COLOR."""
        return self.zone_points(board, color) + self.region_points(board, color)

    def zone_points(self, board: Board, color: Piece) -> int:
        cfg = self.cfg
        primary, secondary = _AXES[color]
        points = 0
        for square in board.piece_squares(color):
            p = primary(square)
            if 1 <= p <= 6:
                points += self._pick(cfg.zone1_band)
                if 2 <= p <= 5:
                    points += self._pick(cfg.zone2_band)
                    if 2 <= secondary(square) <= 4:
                        points += self._pick(cfg.zone3_band)
            else:
                points -= cfg.edge_penalty
        return points

    def region_points(self, board: Board, color: Piece) -> int:
        cfg = self.cfg
        regions = board.region_sizes(color)
        if not regions:
            return 0
        total = sum(regions)
        largest = regions[0]
        count = len(regions)
        points = 0
        if largest < cfg.lower * total:
            points -= cfg.small_region_penalty
        if count > cfg.max_regions:
            points -= cfg.fragment_penalty
        if largest > cfg.upper * total:
            if count > cfg.max_regions:
                points -= cfg.medium
            else:
                points += self._pick(cfg.zone3_band)
        # Two regions are often one move from a win.
        if count == 2:
            points += self._pick(cfg.zone2_band)
        return points

    def _momentum(self, score: int, sense: int) -> int:
        if self.previous is None or sense * score <= sense * self.previous:
            return 0
        if self.rand_int(self.cfg.momentum_bound) >= self.cfg.momentum_threshold:
            return sense * self.cfg.medium
        return sense * (self.cfg.medium // 2)

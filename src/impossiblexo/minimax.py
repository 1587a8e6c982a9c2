"""Depth-limited minimax scorer with a board-keyed score cache."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .board import Board, Mark
from .cache import MinimaxCache

logger = logging.getLogger(__name__)

WIN, DRAW, LOSS = 1, 0, -1


@contextmanager
def hypothetical_mark(board: Board, index: int, mark: Mark) -> Iterator[None]:
    """Place ``mark`` at ``index`` for the duration of the block, then blank it."""
    board.make_mark(index, mark)
    try:
        yield
    finally:
        board.make_mark(index, Board.BLANK)


@dataclass
class Minimax:
    """Scores moves for ``max_mark`` (+1) against ``min_mark`` (-1).

    Scores are always from ``max_mark``'s point of view, and so is the cache:
    an engine must keep the same ``max_mark``/``min_mark`` for as long as its
    cache is in use. Both marks have to be assigned before scoring.

    Pruning is limited to the extremal case: once the side to move at a node
    has found its best possible score, the remaining siblings are skipped.
    """

    depth_limit: int = 7
    max_mark: Optional[Mark] = None
    min_mark: Optional[Mark] = None
    current_depth: int = 0
    cache: MinimaxCache = field(default_factory=MinimaxCache, repr=False)

    # ---- public API ----

    def scores(self, board: Board, mark: Mark) -> Dict[int, int]:
        """Score every move ``mark`` could make next, in ascending space order.

        Stops early once a move reaches the best score for ``mark``, so the
        result may not contain every available space.
        """
        self._check_marks()
        results: Dict[int, int] = {}
        for space in board.spaces_with_mark(Board.BLANK):
            with hypothetical_mark(board, space, mark):
                score = self.cache.get_score(board.spaces)
                if score is None:
                    score = self.score(board, mark)
            results[space] = score
            if self._is_best_for(mark, score):
                break
        logger.debug(
            "scored %d move(s) for %s at depth limit %d (cache size %d)",
            len(results),
            mark,
            self.depth_limit,
            len(self.cache),
        )
        return results

    def score(self, board: Board, mark: Mark) -> int:
        """Score the position reached after ``mark`` moved.

        The result is stored in the cache under the current board state.
        """
        self._check_marks()
        score = self._evaluate(board, mark)
        self.cache.put(board.spaces, score)
        return score

    # ---- core search ----

    def _evaluate(self, board: Board, mark: Mark) -> int:
        if board.winning_solution(self.max_mark):
            return WIN
        if board.winning_solution(self.min_mark):
            return LOSS
        available = board.spaces_with_mark(Board.BLANK)
        if not available:
            return DRAW
        if self.current_depth >= self.depth_limit:
            return DRAW

        to_move = self._opposing(mark)
        best: Optional[int] = None
        for space in available:
            with hypothetical_mark(board, space, to_move):
                score = self.cache.get_score(board.spaces)
                if score is None:
                    score = self._descend(board, to_move)
            best = score if best is None else self._aggregate(to_move, best, score)
            if self._is_best_for(to_move, best):
                break
        return best

    def _descend(self, board: Board, mark: Mark) -> int:
        self.current_depth += 1
        try:
            return self.score(board, mark)
        finally:
            self.current_depth -= 1

    # ---- helpers ----

    def _opposing(self, mark: Mark) -> Mark:
        return self.min_mark if mark == self.max_mark else self.max_mark

    def _aggregate(self, mark: Mark, best: int, score: int) -> int:
        if mark == self.max_mark:
            return max(best, score)
        return min(best, score)

    def _is_best_for(self, mark: Mark, score: int) -> bool:
        if mark == self.max_mark:
            return score == WIN
        if mark == self.min_mark:
            return score == LOSS
        return False

    def _check_marks(self) -> None:
        if self.max_mark is None or self.min_mark is None:
            raise RuntimeError("max_mark and min_mark must be set before scoring")

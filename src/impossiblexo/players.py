"""Player strategies: console human, random computer and minimax computer."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Tuple, Type

from .board import Board, Mark
from .minimax import Minimax

if TYPE_CHECKING:
    from .console import CommandLineConsole


class Player(ABC):
    """Base class; subclasses choose a space and mark it on the board."""

    name = "Player"

    def __init__(self, mark: Mark, opponent: Optional[Mark] = None) -> None:
        self.mark = mark
        self.opponent = opponent if opponent is not None else mark.opposite
        self.console: Optional["CommandLineConsole"] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mark={self.mark.value!r})"

    @abstractmethod
    def make_mark(self, board: Board) -> None:
        """Choose a space and mark it with this player's mark."""


class Human(Player):
    """Asks the console for a space until an available one is given."""

    name = "Human"

    def make_mark(self, board: Board) -> None:
        if self.console is None:
            raise RuntimeError("Human player needs a console to pick a space")
        while True:
            space = self.console.prompt_player_mark(self)
            if board.is_available_space(space):
                break
            self.console.display_unavailable_space(space)
        board.make_mark(space, self.mark)


class DumbComputer(Player):
    name = "Dumb Computer"

    def __init__(
        self,
        mark: Mark,
        opponent: Optional[Mark] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(mark, opponent)
        self.rng = rng or random.Random()

    def make_mark(self, board: Board) -> None:
        available = board.spaces_with_mark(Board.BLANK)
        if not available:
            raise ValueError("No available spaces left")
        board.make_mark(self.rng.choice(available), self.mark)


class ImpossibleComputer(Player):
    """Plays the highest-scoring minimax move for its own mark."""

    name = "Impossible Computer"

    def __init__(
        self, mark: Mark, opponent: Optional[Mark] = None, depth_limit: int = 7
    ) -> None:
        super().__init__(mark, opponent)
        self.minimax = Minimax(depth_limit)
        self.minimax.max_mark = self.mark
        self.minimax.min_mark = self.opponent

    def best_space(self, board: Board) -> int:
        space_scores = self.minimax.scores(board, self.mark)
        if not space_scores:
            raise ValueError("No available spaces left")
        # max() keeps the first of equal scores, i.e. the lowest space.
        space, _ = max(space_scores.items(), key=lambda item: item[1])
        return space

    def make_mark(self, board: Board) -> None:
        board.make_mark(self.best_space(board), self.mark)


PLAYER_TYPES: Tuple[Type[Player], ...] = (Human, DumbComputer, ImpossibleComputer)

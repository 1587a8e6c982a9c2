"""Turn loop tying a board, two players and a console together."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Type

from .board import Board, Mark
from .console import CommandLineConsole
from .players import PLAYER_TYPES, Human, ImpossibleComputer, Player

logger = logging.getLogger(__name__)


class Game:
    """Alternates turns between two players until someone wins or the board fills.

    ``players[0]`` is always the player to move; the list is rotated after
    every turn.
    """

    def __init__(
        self,
        console: Optional[CommandLineConsole] = None,
        depth_limit: int = 7,
        board: Optional[Board] = None,
        players: Optional[Sequence[Player]] = None,
    ) -> None:
        self.board = board if board is not None else Board()
        self.console = console
        self.depth_limit = depth_limit
        self.player_types: Tuple[Type[Player], ...] = PLAYER_TYPES
        self.players: List[Player] = list(players) if players else []

    # ---- console game ----

    def run(self) -> None:
        if self.console is None:
            raise RuntimeError("A console is required to run an interactive game")
        if not self.players:
            self.set_players()
        while not self.over():
            self.console.display_board(self.board)
            self.play_turn()
        self.console.display_game_results(self.board)

    def set_players(self) -> None:
        if self.console is None:
            raise RuntimeError("A console is required to choose players")
        first = Human(Mark.X)
        opponent_type = self.console.prompt_opponent_type(self.player_types)
        self.players = [first, self.build_player(opponent_type, Mark.O)]
        for player in self.players:
            player.console = self.console
        self.console.set_players(self.players)
        logger.info("new game: %s vs %s", *(p.name for p in self.players))

    def build_player(self, player_type: Type[Player], mark: Mark) -> Player:
        if issubclass(player_type, ImpossibleComputer):
            return player_type(mark, mark.opposite, depth_limit=self.depth_limit)
        return player_type(mark, mark.opposite)

    # ---- turns ----

    @property
    def current_player(self) -> Player:
        return self.players[0]

    def play_turn(self) -> int:
        """Let the player to move pick and mark its own space; returns the space."""
        if self.over():
            raise ValueError("Game already finished")
        player = self.current_player
        before = set(self.board.spaces_with_mark(Board.BLANK))
        player.make_mark(self.board)
        (space,) = before - set(self.board.spaces_with_mark(Board.BLANK))
        logger.debug("%s took space %d", player, space)
        self._rotate()
        return space

    def play(self, space: int) -> None:
        """Mark ``space`` for the player to move, on behalf of an outside driver."""
        if self.over():
            raise ValueError("Game already finished")
        if not self.board.is_available_space(space):
            raise ValueError(f"Space {space} is not available")
        self.board.make_mark(space, self.current_player.mark)
        self._rotate()

    def _rotate(self) -> None:
        self.players.append(self.players.pop(0))

    # ---- status ----

    def winner(self) -> Optional[Mark]:
        for player in self.players:
            if self.board.winning_solution(player.mark):
                return player.mark
        return None

    def over(self) -> bool:
        return self.winner() is not None or not self.board.spaces_with_mark(
            Board.BLANK
        )

    def drawn(self) -> bool:
        return self.winner() is None and self.board.is_full()

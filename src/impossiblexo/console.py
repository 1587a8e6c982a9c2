"""Plain-text terminal front end for ImpossibleXO."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, TextIO, Type

from .board import Board, Mark

if TYPE_CHECKING:
    from .players import Player


BLANK_CHARACTER = "_"


class CommandLineConsole:
    """Renders boards and reads choices; I/O is injectable for tests."""

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ) -> None:
        self.input_func = input_func
        self.output = output if output is not None else sys.stdout
        self.players: List["Player"] = []

    def set_players(self, players: Sequence["Player"]) -> None:
        self.players = list(players)

    # ---- rendering ----

    def convert_board_to_ascii(self, board: Board) -> List[str]:
        cells = [
            BLANK_CHARACTER if space == Mark.BLANK else space.value
            for space in board.spaces
        ]
        return ["|".join(row) for row in self._rows(cells, board.size)]

    def available_spaces_to_ascii(self, board: Board) -> List[str]:
        cells = [
            str(index + 1) if space == Mark.BLANK else " "
            for index, space in enumerate(board.spaces)
        ]
        return [" ".join(row) for row in self._rows(cells, board.size)]

    def display_board(self, board: Board) -> None:
        self._write("")
        for marks, numbers in zip(
            self.convert_board_to_ascii(board), self.available_spaces_to_ascii(board)
        ):
            self._write(f"  {marks}    {numbers}")
        self._write("")

    def display_unavailable_space(self, space: int) -> None:
        self._write(f"Space {space + 1} is not available, pick another.")

    def display_game_results(self, board: Board) -> None:
        self.display_board(board)
        for player in self.players:
            if board.winning_solution(player.mark):
                self._write(f"{player.mark.value} wins! ({player.name})")
                return
        self._write("It's a draw!")

    # ---- prompts ----

    def prompt_opponent_type(
        self, player_types: Sequence[Type["Player"]]
    ) -> Type["Player"]:
        self._write("Choose your opponent:")
        for number, player_type in enumerate(player_types, start=1):
            self._write(f"  {number}. {player_type.name}")
        while True:
            choice = self._read_number(f"Opponent [1-{len(player_types)}]: ")
            if choice is not None and 1 <= choice <= len(player_types):
                return player_types[choice - 1]
            self._write("Please choose one of the listed opponents.")

    def prompt_player_mark(self, player: "Player") -> int:
        while True:
            choice = self._read_number(f"{player.mark.value}, pick a space: ")
            if choice is not None:
                return choice - 1
            self._write("Please enter the number of a space.")

    # ---- helpers ----

    @staticmethod
    def _rows(cells: List[str], size: int) -> List[List[str]]:
        return [cells[i : i + size] for i in range(0, len(cells), size)]

    def _read_number(self, prompt: str) -> Optional[int]:
        raw = self.input_func(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            return None

    def _write(self, text: str) -> None:
        print(text, file=self.output)

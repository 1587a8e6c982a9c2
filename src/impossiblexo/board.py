"""Board state, marks and win detection for ImpossibleXO."""

from __future__ import annotations

from enum import Enum
from typing import List, Tuple


class Mark(str, Enum):
    """A cell value: blank or one of the two player marks."""

    BLANK = " "
    X = "X"
    O = "O"

    @property
    def opposite(self) -> "Mark":
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        return Mark.BLANK


def _winning_lines(size: int) -> Tuple[Tuple[int, ...], ...]:
    rows = [tuple(r * size + c for c in range(size)) for r in range(size)]
    cols = [tuple(r * size + c for r in range(size)) for c in range(size)]
    diagonals = [
        tuple(i * size + i for i in range(size)),
        tuple(i * size + (size - 1 - i) for i in range(size)),
    ]
    return tuple(rows + cols + diagonals)


class Board:
    """Square tic-tac-toe grid stored as a flat list of marks."""

    BLANK = Mark.BLANK

    def __init__(self, size: int = 3) -> None:
        if size < 3:
            raise ValueError(f"Board size must be at least 3, got {size}")
        self.size = size
        self.spaces: List[Mark] = [Mark.BLANK] * (size * size)
        self.winning_lines = _winning_lines(size)

    def __repr__(self) -> str:
        cells = "".join(mark.value for mark in self.spaces)
        return f"Board(size={self.size}, spaces={cells!r})"

    def spaces_with_mark(self, mark: Mark) -> List[int]:
        return [i for i, space in enumerate(self.spaces) if space == mark]

    def make_mark(self, index: int, mark: Mark) -> None:
        # Unconditional write; also used to reset a cell to BLANK.
        if not 0 <= index < len(self.spaces):
            raise IndexError(f"Space {index} is off the board")
        self.spaces[index] = mark

    def is_available_space(self, index: int) -> bool:
        return 0 <= index < len(self.spaces) and self.spaces[index] == Mark.BLANK

    def winning_solution(self, mark: Mark) -> bool:
        if mark == Mark.BLANK:
            return False
        return any(
            all(self.spaces[i] == mark for i in line) for line in self.winning_lines
        )

    def is_full(self) -> bool:
        return Mark.BLANK not in self.spaces

"""Memo table mapping exact board configurations to minimax scores."""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from .board import Mark

BoardKey = Tuple[Mark, ...]


class MinimaxCache:
    """Unbounded score cache; keys are tuple snapshots of the cell sequence.

    Not thread-safe. Entries are never evicted for the lifetime of the cache.
    """

    def __init__(self) -> None:
        self.map: Dict[BoardKey, int] = {}

    def __len__(self) -> int:
        return len(self.map)

    def __contains__(self, state: Sequence[Mark]) -> bool:
        return tuple(state) in self.map

    def get_score(self, state: Sequence[Mark]) -> Optional[int]:
        return self.map.get(tuple(state))

    def put(self, state: Sequence[Mark], score: int) -> None:
        self.map[tuple(state)] = score

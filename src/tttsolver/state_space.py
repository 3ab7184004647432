"""
The full indexed table of positions, ids 0..MAX_ID.

Positions refer to each other by id only; the table owns every record.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .game_basics import (
    MAX_ID,
    UNDECIDED,
    check_id,
    classify_outcome,
    decode,
    ply,
    successor_ids,
)

log = logging.getLogger(__name__)


@dataclass
class Position:
    id: int
    cells: Tuple[int, ...]
    next_player: int
    outcome: int
    expected_outcome: int
    successor_ids: Tuple[int, ...]
    predecessor_ids: List[int] = field(default_factory=list)

    @classmethod
    def from_id(cls, state_id: int) -> "Position":
        cells, next_player = decode(state_id)
        outcome = classify_outcome(cells)
        return cls(
            id=state_id,
            cells=cells,
            next_player=next_player,
            outcome=outcome,
            expected_outcome=outcome,
            successor_ids=successor_ids(cells, next_player),
        )

    @property
    def is_terminal(self) -> bool:
        return self.outcome != UNDECIDED

    @property
    def is_solved(self) -> bool:
        return self.expected_outcome != UNDECIDED

    @property
    def ply(self) -> int:
        return ply(self.cells)


class StateSpace:
    """Every position, indexed by id.

    Build with :meth:`build`, then :meth:`link_predecessors` before solving.
    """

    def __init__(self, positions: List[Position]):
        for i, p in enumerate(positions):
            if p.id != i:
                raise ValueError(f"Position at index {i} has id {p.id}")
        self._positions = positions
        self.linked = False

    @classmethod
    def build(cls) -> "StateSpace":
        positions = [Position.from_id(i) for i in range(MAX_ID + 1)]
        terminal = sum(1 for p in positions if p.is_terminal)
        log.info("Initialized %d positions (%d terminal)", len(positions), terminal)
        return cls(positions)

    def link_predecessors(self) -> int:
        """Append each position's id to its successors' predecessor lists.

        Returns the number of edges linked.
        """
        if self.linked:
            raise RuntimeError("Predecessor links already built")
        edges = 0
        for p in self._positions:
            for next_id in p.successor_ids:
                self._positions[next_id].predecessor_ids.append(p.id)
                edges += 1
        self.linked = True
        log.debug("Linked %d edges", edges)
        return edges

    def get_position(self, state_id: int) -> Position:
        check_id(state_id)
        return self._positions[state_id]

    def get_root(self) -> Position:
        return self._positions[0]

    def successors(self, state_id: int) -> List[Position]:
        return [self._positions[i] for i in self.get_position(state_id).successor_ids]

    def predecessors(self, state_id: int) -> List[Position]:
        return [self._positions[i] for i in self.get_position(state_id).predecessor_ids]

    def __getitem__(self, state_id: int) -> Position:
        return self.get_position(state_id)

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

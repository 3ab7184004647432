"""
Aggregate statistics over a solved table.

Counts are reported for the whole id range and for the subset reachable from
the empty board; impossible boards (e.g. both sides holding a line) only show
up in the former.
"""
from __future__ import annotations

from collections import deque
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .game_basics import NUM_CELLS, OUTCOME_NAMES, OUTCOMES, UNDECIDED
from .state_space import StateSpace

# column order for count arrays: Undecided, OWins, Draw, XWins
_COLUMNS = [UNDECIDED] + list(OUTCOMES)


def reachable_ids(space: StateSpace, start: int = 0) -> List[int]:
    """Ids reachable from ``start`` by legal moves, in BFS order."""
    seen = {space.get_position(start).id}
    order: List[int] = []
    q = deque([start])
    while q:
        s = q.popleft()
        order.append(s)
        for nxt in space[s].successor_ids:
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return order


def _values(space: StateSpace, ids: Optional[Iterable[int]], attr: str) -> np.ndarray:
    positions = space if ids is None else (space[i] for i in ids)
    # shift by one so UNDECIDED (-1) lands in column 0
    return np.fromiter((getattr(p, attr) + 1 for p in positions), dtype=np.int64)


def outcome_counts(space: StateSpace, ids: Optional[Iterable[int]] = None,
                   attr: str = 'expected_outcome') -> Dict[str, int]:
    counts = np.bincount(_values(space, ids, attr), minlength=len(_COLUMNS))
    return {OUTCOME_NAMES[o]: int(counts[o + 1]) for o in _COLUMNS}


def counts_by_ply(space: StateSpace, ids: Optional[Iterable[int]] = None,
                  attr: str = 'expected_outcome') -> np.ndarray:
    """Matrix of shape (10, 4): rows are ply 0..9, columns Undecided/OWins/Draw/XWins."""
    positions = list(space) if ids is None else [space[i] for i in ids]
    table = np.zeros((NUM_CELLS + 1, len(_COLUMNS)), dtype=np.int64)
    if not positions:
        return table
    plies = np.fromiter((p.ply for p in positions), dtype=np.int64)
    vals = np.fromiter((getattr(p, attr) + 1 for p in positions), dtype=np.int64)
    np.add.at(table, (plies, vals), 1)
    return table


def summarize(space: StateSpace) -> Dict[str, Any]:
    reach = reachable_ids(space)
    reach_terminal = [i for i in reach if space[i].is_terminal]
    return {
        'positions': len(space),
        'terminal': sum(1 for p in space if p.is_terminal),
        'expected': outcome_counts(space),
        'reachable': len(reach),
        'reachable_terminal': len(reach_terminal),
        'reachable_expected': outcome_counts(space, reach),
        'reachable_terminal_outcomes': outcome_counts(space, reach_terminal, attr='outcome'),
        'root_expected': OUTCOME_NAMES[space.get_root().expected_outcome],
    }

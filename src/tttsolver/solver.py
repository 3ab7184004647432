"""
Backward (retrograde) solver over the full position table.

Resolution policy for the side to move, given its successors' current values:
- Any successor already won by the mover -> win.
- Otherwise, any successor still undecided -> wait and retry later.
- Otherwise, any drawn successor -> draw.
- Otherwise every successor is won by the opponent -> loss.
"""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Set

from .game_basics import DRAW, O_WINS, PLAYER_O, UNDECIDED, X_WINS
from .state_space import StateSpace

log = logging.getLogger(__name__)


class SolverInvariantError(RuntimeError):
    """The position table is inconsistent; indicates a defect, not bad input."""


@dataclass
class SolveStats:
    positions: int = 0
    terminal: int = 0
    resolved: int = 0
    pops: int = 0
    elapsed_s: float = 0.0


def _resolve(space: StateSpace, state_id: int) -> int:
    pos = space[state_id]
    if not pos.successor_ids:
        raise SolverInvariantError(
            f"Position #{state_id} is not terminal, yet it has no successors."
        )
    winning = O_WINS if pos.next_player == PLAYER_O else X_WINS
    losing = X_WINS if winning == O_WINS else O_WINS
    has_undecided = False
    has_winning = False
    has_draw = False
    for next_id in pos.successor_ids:
        v = space[next_id].expected_outcome
        if v == UNDECIDED:
            has_undecided = True
        elif v == DRAW:
            has_draw = True
        elif v == winning:
            has_winning = True
    if has_winning:
        return winning
    if has_undecided:
        return UNDECIDED
    if has_draw:
        return DRAW
    return losing


def solve(space: StateSpace) -> SolveStats:
    """Assign every position its value under optimal play, in place.

    Links predecessors first if that has not been done yet. Raises
    :class:`SolverInvariantError` if the table cannot be fully resolved.
    """
    t0 = time.perf_counter()
    if not space.linked:
        space.link_predecessors()

    queue: Deque[int] = deque()
    queued: Set[int] = set()

    def push(state_id: int) -> bool:
        if state_id in queued:
            return False
        queued.add(state_id)
        queue.append(state_id)
        return True

    stats = SolveStats(positions=len(space))
    for pos in space:
        if pos.is_terminal:
            pos.expected_outcome = pos.outcome
            push(pos.id)
            stats.terminal += 1

    # undecided ids retried since the last resolution or new enqueue
    stale: Set[int] = set()
    while queue:
        state_id = queue.popleft()
        queued.discard(state_id)
        stats.pops += 1
        pos = space[state_id]
        if pos.expected_outcome == UNDECIDED:
            pos.expected_outcome = _resolve(space, state_id)
            if pos.expected_outcome != UNDECIDED:
                stats.resolved += 1
                stale.clear()
        if pos.expected_outcome == UNDECIDED:
            if state_id in stale:
                raise SolverInvariantError(
                    f"Solver stalled with {len(queue) + 1} positions queued and no progress "
                    f"(e.g. #{state_id})."
                )
            stale.add(state_id)
            push(state_id)
        else:
            for prev_id in pos.predecessor_ids:
                if space[prev_id].expected_outcome == UNDECIDED and push(prev_id):
                    stale.clear()
        if stats.pops % 100000 == 0:
            log.debug("pops=%d resolved=%d queued=%d", stats.pops, stats.resolved, len(queue))

    leftover = [p.id for p in space if p.expected_outcome == UNDECIDED]
    if leftover:
        raise SolverInvariantError(
            f"{len(leftover)} positions left undecided after solving (first: #{leftover[0]})."
        )
    stats.elapsed_s = time.perf_counter() - t0
    log.info(
        "Solved %d positions (%d terminal, %d propagated) in %d pops, %.2fs",
        stats.positions, stats.terminal, stats.resolved, stats.pops, stats.elapsed_s,
    )
    return stats


def solve_all() -> StateSpace:
    """Build, link and solve the whole table."""
    space = StateSpace.build()
    space.link_predecessors()
    solve(space)
    return space

"""
Text rendering of solved positions for the console.
"""
from __future__ import annotations

from typing import List

from .game_basics import CELL_GLYPHS, OUTCOME_NAMES, PLAYER_NAMES
from .state_space import Position, StateSpace


def render_row(position: Position, row: int) -> str:
    return ''.join(CELL_GLYPHS[c] for c in position.cells[row * 3:row * 3 + 3])


def render_position(position: Position) -> str:
    """Three board rows annotated with id, player to move and expected outcome.

    Example::

        O--  #13446
        -X-  Next player: O
        ---  Expected outcome: Draw
    """
    return "\n".join([
        f"{render_row(position, 0)}  #{position.id}",
        f"{render_row(position, 1)}  Next player: {PLAYER_NAMES[position.next_player]}",
        f"{render_row(position, 2)}  Expected outcome: {OUTCOME_NAMES[position.expected_outcome]}",
    ])


def render_tree(space: StateSpace, state_id: int = 0, depth: int = 1, indent: str = "    ") -> str:
    """Render a position and its successors down to ``depth`` moves, indented per level."""
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    lines: List[str] = []

    def walk(pos: Position, level: int) -> None:
        pad = indent * level
        lines.extend(pad + line for line in render_position(pos).split("\n"))
        if level >= depth:
            return
        for child in space.successors(pos.id):
            walk(child, level + 1)

    walk(space.get_position(state_id), 0)
    return "\n".join(lines)

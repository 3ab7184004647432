"""
Game basics: cell/player/outcome constants, the id codec, outcome checks, successors.

Notes:
- A board is a tuple of 9 cells, row-major: 0=empty, 1=O, 2=X. O always starts.
- A position is a board plus the player to move (0=O, 1=X).
- Position ids pack the board as a base-3 number (cell 0 most significant)
  and the player to move as the lowest bit: id = board * 2 + next_player.
"""
from typing import List, Sequence, Tuple

EMPTY, O, X = 0, 1, 2
PLAYER_O, PLAYER_X = 0, 1

UNDECIDED = -1
O_WINS = 0
DRAW = 1
X_WINS = 2

OUTCOMES = (O_WINS, DRAW, X_WINS)
OUTCOME_NAMES = {
    UNDECIDED: 'Undecided',
    O_WINS: 'OWins',
    DRAW: 'Draw',
    X_WINS: 'XWins',
}
PLAYER_NAMES = {PLAYER_O: 'O', PLAYER_X: 'X'}
CELL_GLYPHS = {EMPTY: '-', O: 'O', X: 'X'}
GLYPH_CELLS = {
    '-': EMPTY, '.': EMPTY, '0': EMPTY,
    'O': O, 'o': O, '1': O,
    'X': X, 'x': X, '2': X,
}

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]

NUM_CELLS = 9
MAX_BOARD_ID = 3 ** NUM_CELLS - 1
# Inclusive.
MAX_ID = MAX_BOARD_ID * 2 + 1
NUM_POSITIONS = MAX_ID + 1


def check_id(state_id: int) -> int:
    if not isinstance(state_id, int) or isinstance(state_id, bool):
        raise ValueError(f"Position id must be an int, got {state_id!r}")
    if state_id < 0 or state_id > MAX_ID:
        raise ValueError(f"Position id out of range [0, {MAX_ID}]: {state_id}")
    return state_id


def check_player(player: int) -> int:
    if player not in PLAYER_NAMES:
        raise ValueError(f"Unknown player: {player!r}")
    return player


def check_cells(cells: Sequence[int]) -> Tuple[int, ...]:
    cells_t = tuple(cells)
    if len(cells_t) != NUM_CELLS or any(c not in CELL_GLYPHS for c in cells_t):
        raise ValueError(f"Board must be {NUM_CELLS} cells of 0/1/2, got {cells_t!r}")
    return cells_t


def decode(state_id: int) -> Tuple[Tuple[int, ...], int]:
    """Return ``(cells, next_player)`` for a position id."""
    check_id(state_id)
    next_player = state_id % 2
    board = state_id // 2
    cells = [EMPTY] * NUM_CELLS
    for i in range(NUM_CELLS - 1, -1, -1):
        cells[i] = board % 3
        board //= 3
    return tuple(cells), next_player


def encode(cells: Sequence[int], next_player: int) -> int:
    """Inverse of :func:`decode`."""
    cells_t = check_cells(cells)
    check_player(next_player)
    board = 0
    for c in cells_t:
        board = board * 3 + c
    return board * 2 + next_player


def other_player(player: int) -> int:
    return PLAYER_X if player == PLAYER_O else PLAYER_O


def player_mark(player: int) -> int:
    return O if player == PLAYER_O else X


def classify_outcome(cells: Sequence[int]) -> int:
    # first matching line decides, even on boards where both sides completed one
    for a, b, c in WIN_PATTERNS:
        v = cells[a]
        if v != EMPTY and v == cells[b] and v == cells[c]:
            return O_WINS if v == O else X_WINS
    if EMPTY not in cells:
        return DRAW
    return UNDECIDED


def legal_moves(cells: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(cells) if v == EMPTY]


def apply_move(cells: Sequence[int], idx: int, player: int) -> Tuple[int, ...]:
    lst = list(cells)
    lst[idx] = player_mark(player)
    return tuple(lst)


def successor_ids(cells: Sequence[int], next_player: int) -> Tuple[int, ...]:
    """Ids reachable by one move of ``next_player``, in ascending cell order.

    Terminal boards have no successors.
    """
    if classify_outcome(cells) != UNDECIDED:
        return tuple()
    following = other_player(next_player)
    return tuple(
        encode(apply_move(cells, mv, next_player), following)
        for mv in legal_moves(cells)
    )


def ply(cells: Sequence[int]) -> int:
    return sum(1 for c in cells if c != EMPTY)


def serialize_board(cells: Sequence[int]) -> str:
    return ''.join(CELL_GLYPHS[c] for c in cells)


def parse_board(text: str) -> Tuple[int, ...]:
    raw = (text or '').strip()
    if len(raw) != NUM_CELLS or any(ch not in GLYPH_CELLS for ch in raw):
        raise ValueError(f"Invalid board string {text!r}. Must be 9 chars of -/O/X (or 0/1/2).")
    return tuple(GLYPH_CELLS[ch] for ch in raw)


def parse_player(text: str) -> int:
    raw = (text or '').strip().upper()
    for player, name in PLAYER_NAMES.items():
        if raw == name:
            return player
    raise ValueError(f"Invalid player {text!r}. Must be O or X.")

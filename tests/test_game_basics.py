import pytest

from tttsolver.game_basics import (
    DRAW,
    EMPTY,
    MAX_ID,
    NUM_POSITIONS,
    O,
    O_WINS,
    PLAYER_O,
    PLAYER_X,
    UNDECIDED,
    X,
    X_WINS,
    classify_outcome,
    decode,
    encode,
    legal_moves,
    parse_board,
    parse_player,
    serialize_board,
    successor_ids,
)


def test_max_id_matches_board_count():
    assert MAX_ID == 2 * (3 ** 9 - 1) + 1 == 39365
    assert NUM_POSITIONS == 39366


def test_round_trip_every_id():
    for i in range(MAX_ID + 1):
        cells, player = decode(i)
        assert encode(cells, player) == i


def test_decode_known_ids():
    assert decode(0) == ((EMPTY,) * 9, PLAYER_O)
    assert decode(1) == ((EMPTY,) * 9, PLAYER_X)
    # cell 8 is the least significant base-3 digit
    assert decode(2) == ((EMPTY,) * 8 + (O,), PLAYER_O)
    assert decode(4) == ((EMPTY,) * 8 + (X,), PLAYER_O)
    # cell 0 is the most significant
    assert decode(3 ** 8 * 2 + 1) == ((O,) + (EMPTY,) * 8, PLAYER_X)
    assert decode(MAX_ID) == ((X,) * 9, PLAYER_X)


@pytest.mark.parametrize("bad", [-1, MAX_ID + 1, 10 ** 9])
def test_decode_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        decode(bad)


def test_encode_rejects_bad_input():
    with pytest.raises(ValueError):
        encode((0,) * 8, PLAYER_O)
    with pytest.raises(ValueError):
        encode((0,) * 8 + (3,), PLAYER_O)
    with pytest.raises(ValueError):
        encode((0,) * 9, 2)


@pytest.mark.parametrize("board,expected", [
    ("OOO------", O_WINS),
    ("---XXX---", X_WINS),
    ("X--X--X--", X_WINS),
    ("O---O---O", O_WINS),
    ("--X-X-X--", X_WINS),
    ("OXOOXXXOO", DRAW),
    ("---------", UNDECIDED),
    ("OX-------", UNDECIDED),
    ("OOXXXOOX-", UNDECIDED),
])
def test_classify_outcome(board, expected):
    assert classify_outcome(parse_board(board)) == expected


def test_classify_double_line_uses_first_matched_line():
    # row 0 (checked first) is O, row 1 is X
    assert classify_outcome(parse_board("OOOXXX---")) == O_WINS
    assert classify_outcome(parse_board("XXXOOO---")) == X_WINS


def test_successors_ascending_cells_and_player_flip():
    cells = parse_board("O---X----")
    succ = successor_ids(cells, PLAYER_O)
    assert len(succ) == len(legal_moves(cells)) == 7
    expected = []
    for mv in legal_moves(cells):
        child = list(cells)
        child[mv] = O
        expected.append(encode(child, PLAYER_X))
    assert succ == tuple(expected)


def test_successors_empty_for_terminal_boards():
    assert successor_ids(parse_board("OOO------"), PLAYER_X) == ()
    assert successor_ids(parse_board("OXOOXXXOO"), PLAYER_O) == ()


def test_parse_and_serialize_board():
    assert parse_board("o.x012---") == (O, EMPTY, X, EMPTY, O, X, EMPTY, EMPTY, EMPTY)
    assert serialize_board(parse_board("OX-XO-X-O")) == "OX-XO-X-O"
    for bad in ("", "OOO", "OOO------x-", "ABCDEFGHI"):
        with pytest.raises(ValueError):
            parse_board(bad)


def test_parse_player():
    assert parse_player("o") == PLAYER_O
    assert parse_player("X") == PLAYER_X
    with pytest.raises(ValueError):
        parse_player("Z")

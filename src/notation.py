"""
text notation of a board, as used by the remote board protocol

    [[v3 v2 v1 v0] [v3 v2 v1 v0] [v3 v2 v1 v0] [v3 v2 v1 v0]]

row groups go from the highest row index down, which is the screen order
"""
import re

from game import SIZE, Board

_ALLOWED = re.compile(r"[\[\]0-9 \r\n]*")
_TOKEN = re.compile(r"\[|\]|\d+")


class NotationError(ValueError):
    """text that is not a valid board notation"""


def format_board(board):
    """board to notation"""
    groups = ("[" + " ".join(str(v) for v in row) + "]" for row in board.rows())
    return "[" + " ".join(groups) + "]"


def parse_board(text):
    """notation to board, newlines and carriage returns count as spaces"""
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    if not _ALLOWED.fullmatch(text):
        bad = next(c for c in text if not _ALLOWED.fullmatch(c))
        raise NotationError(f"Unexpected character {bad!r} in board notation")

    tokens = _TOKEN.findall(text)
    pos = 0

    def expect(token):
        nonlocal pos
        if pos >= len(tokens) or tokens[pos] != token:
            found = tokens[pos] if pos < len(tokens) else "end of input"
            raise NotationError(f"Expected {token!r}, found {found!r}")
        pos += 1

    rows = []
    expect("[")
    for _ in range(SIZE):
        expect("[")
        row = []
        for _ in range(SIZE):
            if pos >= len(tokens) or not tokens[pos].isdigit():
                found = tokens[pos] if pos < len(tokens) else "end of input"
                raise NotationError(f"Expected a number, found {found!r}")
            row.append(int(tokens[pos]))
            pos += 1
        expect("]")
        rows.append(row)
    expect("]")
    if pos != len(tokens):
        raise NotationError(f"Trailing input after board: {tokens[pos]!r}")

    try:
        return Board.from_rows(rows)
    except ValueError as e:
        raise NotationError(str(e)) from e

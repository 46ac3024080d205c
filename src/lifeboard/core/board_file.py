"""Board text format.

One line per grid row, one character per cell: ``#`` for alive and ``_``
for dead. Whitespace around each line is ignored. The first line may name
a border policy (``dead``, ``alive``, ``wrap`` or the aliases ``empty``,
``solid``, ``loop``) instead of holding a row. Blank lines at the end are
ignored. The grid must be square.

Example::

    wrap
    _#___
    __#__
    ###__
    _____
    _____
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .cell import BorderPolicy, Cell
from .errors import ParseError

logger = logging.getLogger(__name__)

ALIVE_CHAR = "#"
DEAD_CHAR = "_"

_CHAR_TO_CELL = {ALIVE_CHAR: Cell.ALIVE, DEAD_CHAR: Cell.DEAD}

ParsedBoard = Tuple[List[List[Cell]], Optional[BorderPolicy]]


def _parse_header(line: str) -> Optional[BorderPolicy]:
    try:
        return BorderPolicy.from_name(line)
    except ValueError:
        return None


def _parse_row(line: str, line_number: int) -> List[Cell]:
    row = []
    for char in line:
        cell = _CHAR_TO_CELL.get(char)
        if cell is None:
            raise ParseError(
                f"unrecognized character {char!r} (expected {ALIVE_CHAR!r} or {DEAD_CHAR!r})",
                line_number,
                line,
            )
        row.append(cell)
    return row


def parse_board_lines(lines: Iterable[str]) -> ParsedBoard:
    """Parse board rows from an iterable of text lines.

    Args:
        lines: Lines of board text, with or without line endings

    Returns:
        Tuple of (rows, border) where border is the header policy, or None
        when the text has no header line

    Raises:
        ParseError: If the text is malformed or the grid is not square
    """
    numbered = [(number, line.strip()) for number, line in enumerate(lines, start=1)]

    # Trailing blank lines are not part of the grid
    while numbered and not numbered[-1][1]:
        numbered.pop()

    border = None
    if numbered:
        border = _parse_header(numbered[0][1])
        if border is not None:
            numbered = numbered[1:]

    if not numbered:
        raise ParseError("no grid rows found", 0)

    rows: List[List[Cell]] = []
    width = len(numbered[0][1])
    for line_number, line in numbered:
        if not line:
            raise ParseError("blank line inside grid", line_number, line)
        if len(line) != width:
            raise ParseError(f"row has length {len(line)}, expected {width}", line_number, line)
        rows.append(_parse_row(line, line_number))

    if len(rows) != width:
        last_number, last_line = numbered[-1]
        raise ParseError(
            f"board has {len(rows)} rows of length {width}, expected a square grid",
            last_number,
            last_line,
        )

    return rows, border


def parse_board_text(text: str) -> ParsedBoard:
    """Parse board text held in a string. See `parse_board_lines`."""
    return parse_board_lines(text.splitlines())


def read_board_file(path: Union[str, Path]) -> ParsedBoard:
    """Read and parse a board file.

    Raises:
        ParseError: If the file content is malformed
        OSError: If the file cannot be opened or read
    """
    # Undecodable bytes become U+FFFD and are rejected as unrecognized characters
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        rows, border = parse_board_lines(f)

    logger.debug(
        "Read %dx%d board from %s (border: %s)",
        len(rows),
        len(rows),
        path,
        border.value if border is not None else "unset",
    )
    return rows, border


def format_board_text(rows: Sequence[Sequence[int]], border: Optional[BorderPolicy] = None) -> str:
    """Format rows of cell states as board text.

    Args:
        rows: Rows of cell states (truthy means alive)
        border: Optional policy to emit as a header line

    Returns:
        Board text ending in a newline
    """
    lines = []
    if border is not None:
        lines.append(border.value)
    for row in rows:
        lines.append("".join(ALIVE_CHAR if cell else DEAD_CHAR for cell in row))
    return "\n".join(lines) + "\n"

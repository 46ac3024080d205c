"""Exceptions raised by the board engine.

File access errors are not wrapped: ``OSError`` from opening or reading a
board file reaches the caller as-is.
"""


class BoardError(Exception):
    """Base class for board errors."""


class InvalidDimensions(BoardError, ValueError):
    """Cell matrix is empty, ragged or not square."""


class InvalidCellState(BoardError, ValueError):
    """Cell matrix holds a value that is neither alive nor dead."""


class ParseError(BoardError, ValueError):
    """Board text is malformed.

    Attributes:
        line_number: 1-based line number in the source text (0 when the
            text holds no grid at all)
        line: Content of the offending line
    """

    def __init__(self, message: str, line_number: int, line: str = "") -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
        self.line = line


class OutOfBounds(BoardError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(f"Coordinates ({row}, {col}) out of bounds for {size}x{size} board")
        self.row = row
        self.col = col
        self.size = size

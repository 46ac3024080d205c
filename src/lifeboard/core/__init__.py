"""Board engine: cell states, border policies, board text format and the board itself."""

from .cell import Cell, BorderPolicy
from .errors import BoardError, InvalidDimensions, InvalidCellState, ParseError, OutOfBounds
from .board import Board

__all__ = [
    "Cell",
    "BorderPolicy",
    "Board",
    "BoardError",
    "InvalidDimensions",
    "InvalidCellState",
    "ParseError",
    "OutOfBounds",
]

"""Conway's Game of Life board with configurable border behavior."""

__version__ = "0.1.0"

from .core.cell import Cell, BorderPolicy
from .core.board import Board
from .core.errors import BoardError, InvalidDimensions, InvalidCellState, ParseError, OutOfBounds

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

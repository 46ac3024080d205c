"""Game of Life board engine."""

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .board_file import format_board_text, parse_board_text, read_board_file
from .cell import BorderPolicy, Cell
from .errors import InvalidCellState, InvalidDimensions, OutOfBounds

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10

_NEIGHBOR_KERNEL = torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).reshape(1, 1, 3, 3)


def _to_array(cells: Any) -> np.ndarray:
    """Validate a square cell matrix and copy it into an int8 array."""
    if isinstance(cells, np.ndarray) and cells.ndim != 2:
        raise InvalidDimensions(f"Cell matrix must be two-dimensional, got {cells.ndim} dimensions")

    try:
        rows = [list(row) for row in cells]
    except TypeError:
        raise InvalidDimensions("Cell matrix must be a sequence of rows") from None

    if not rows:
        raise InvalidDimensions("Cell matrix is empty")

    size = len(rows)
    for index, row in enumerate(rows):
        if len(row) != size:
            raise InvalidDimensions(f"Row {index} has {len(row)} cells, expected {size} for a square board")
        for value in row:
            if isinstance(value, (list, tuple, np.ndarray)):
                raise InvalidDimensions(f"Cell matrix must be two-dimensional, row {index} holds a sequence")
            if value not in (0, 1):
                raise InvalidCellState(f"Invalid cell value {value!r} in row {index}")

    return np.array(rows, dtype=np.int8)


def neighbor_state(cells: np.ndarray, border: BorderPolicy, row: int, col: int) -> int:
    """Resolve the state of a neighbour position under a border policy.

    Args:
        cells: Square grid of 0/1 values
        border: Policy for positions outside the grid
        row: Row of the neighbour, possibly outside [0, N)
        col: Column of the neighbour, possibly outside [0, N)

    Returns:
        1 if the neighbour counts as alive, 0 otherwise
    """
    size = cells.shape[0]
    if border is BorderPolicy.WRAP:
        return int(cells[row % size, col % size])
    if 0 <= row < size and 0 <= col < size:
        return int(cells[row, col])
    return 1 if border is BorderPolicy.ALIVE else 0


def _iter_rows(cells: np.ndarray) -> Iterator[Tuple[Cell, ...]]:
    for row in cells:
        yield tuple(Cell(int(value)) for value in row)


def _iter_cells(cells: np.ndarray) -> Iterator[Tuple[Tuple[int, int], Cell]]:
    for (row, col), value in np.ndenumerate(cells):
        yield (int(row), int(col)), Cell(int(value))


class Board:
    """A square Game of Life board with a fixed border policy.

    The grid is stored as an N x N int8 numpy array indexed ``[row, col]``.
    The array is never modified in place: each step builds a new one and
    swaps it in, so readers never see a half-updated generation.
    """

    def __init__(self, cells: Any, border: BorderPolicy = BorderPolicy.DEAD) -> None:
        """Create a board from a cell matrix.

        Args:
            cells: N x N nested sequence or 2-D array of `Cell`, bool or 0/1
            border: Policy for neighbours beyond the grid edge

        Raises:
            InvalidDimensions: If the matrix is empty, ragged or not square
            InvalidCellState: If a value is neither alive nor dead
            TypeError: If border is not a BorderPolicy
        """
        if not isinstance(border, BorderPolicy):
            raise TypeError(f"border must be a BorderPolicy, got {type(border).__name__}")

        self._cells = _to_array(cells)
        self.size = self._cells.shape[0]
        self._border = border
        self._generation = 0

    @classmethod
    def empty(cls, size: int = DEFAULT_SIZE, border: BorderPolicy = BorderPolicy.DEAD) -> "Board":
        """Create an all-dead board of the given size."""
        if size < 1:
            raise InvalidDimensions(f"Board size must be positive, got {size}")
        return cls(np.zeros((size, size), dtype=np.int8), border)

    @classmethod
    def from_text(cls, text: str, border: Optional[BorderPolicy] = None) -> "Board":
        """Create a board from board text.

        Args:
            text: Board text (see `lifeboard.core.board_file`)
            border: Border policy; overrides any header line when given

        Raises:
            ParseError: If the text is malformed
        """
        rows, header_border = parse_board_text(text)
        return cls(rows, border or header_border or BorderPolicy.DEAD)

    @classmethod
    def from_file(cls, path: Union[str, Path], border: Optional[BorderPolicy] = None) -> "Board":
        """Create a board from a board file.

        Args:
            path: Path to the board file
            border: Border policy; overrides any header line when given

        Returns:
            New board at generation 0

        Raises:
            ParseError: If the file content is malformed
            OSError: If the file cannot be opened or read
        """
        rows, header_border = read_board_file(path)
        return cls(rows, border or header_border or BorderPolicy.DEAD)

    @property
    def border(self) -> BorderPolicy:
        """Border policy fixed at construction."""
        return self._border

    @property
    def generation(self) -> int:
        """Number of steps taken since construction."""
        return self._generation

    @property
    def population(self) -> int:
        """Number of living cells."""
        return int(np.count_nonzero(self._cells))

    def dimensions(self) -> int:
        """Side length N of the board."""
        return self.size

    def border_policy(self) -> BorderPolicy:
        """Border policy fixed at construction."""
        return self._border

    def get(self, row: int, col: int) -> Cell:
        """Get the state of a cell.

        Raises:
            OutOfBounds: If row or col is outside [0, N)
        """
        self._check_bounds(row, col)
        return Cell(int(self._cells[row, col]))

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfBounds(row, col, self.size)

    def neighbor_count(self, row: int, col: int) -> int:
        """Count living neighbours of a cell under the board's border policy.

        Args:
            row: Row coordinate
            col: Column coordinate

        Returns:
            Number of living neighbours (0-8)

        Raises:
            OutOfBounds: If the cell itself is outside the grid
        """
        self._check_bounds(row, col)

        count = 0
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                count += neighbor_state(self._cells, self._border, row + dr, col + dc)
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbours for all cells with a convolution.

        The grid is padded by one cell on each side according to the border
        policy: zeros for DEAD, ones for ALIVE and circular for WRAP.

        Returns:
            N x N int8 array of neighbour counts
        """
        grid = torch.from_numpy(self._cells.astype(np.float32)).reshape(1, 1, self.size, self.size)

        if self._border is BorderPolicy.WRAP:
            padded = F.pad(grid, (1, 1, 1, 1), mode="circular")
        else:
            fill = 1.0 if self._border is BorderPolicy.ALIVE else 0.0
            padded = F.pad(grid, (1, 1, 1, 1), mode="constant", value=fill)

        neighbors = F.conv2d(padded, _NEIGHBOR_KERNEL)
        return neighbors[0, 0].numpy().astype(np.int8)

    def step(self) -> None:
        """Advance the board by one generation.

        Live cells with 2 or 3 neighbours survive, dead cells with exactly 3
        neighbours are born, and every other cell is dead afterwards.
        """
        neighbor_counts = self.count_all_neighbors()
        alive = self._cells > 0

        survive = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))
        birth = ~alive & (neighbor_counts == 3)

        self._cells = (survive | birth).astype(np.int8)
        self._generation += 1

        logger.debug("Generation %d: population %d", self._generation, self.population)

    def advance(self, generations: int = 1) -> None:
        """Advance the board by several generations.

        Raises:
            ValueError: If generations is negative
        """
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}")
        for _ in range(generations):
            self.step()

    def rows(self) -> Iterator[Tuple[Cell, ...]]:
        """Iterate over rows of the current generation.

        The iterator keeps reading the generation that was current when it
        was created, even if the board steps in the meantime.
        """
        return _iter_rows(self._cells)

    def cells(self) -> Iterator[Tuple[Tuple[int, int], Cell]]:
        """Iterate over ``((row, col), cell)`` pairs in row-major order.

        Like `rows`, the iterator reads a snapshot of the current generation.
        """
        return _iter_cells(self._cells)

    def __iter__(self) -> Iterator[Tuple[Tuple[int, int], Cell]]:
        return self.cells()

    def to_list(self) -> List[List[Cell]]:
        """Convert the grid to nested lists of `Cell`."""
        return [list(row) for row in self.rows()]

    def to_text(self) -> str:
        """Render the grid in board-file text format, without a header line."""
        return format_board_text(self._cells.tolist())

    def copy(self) -> "Board":
        """Return an independent board with the same cells, policy and generation."""
        board = Board(self._cells, self._border)
        board._generation = self._generation
        return board

    def __eq__(self, other: object) -> bool:
        """Boards are equal when size, border policy and cells match."""
        if not isinstance(other, Board):
            return False
        return (
            self.size == other.size
            and self._border is other._border
            and np.array_equal(self._cells, other._cells)
        )

    def __str__(self) -> str:
        return "".join("".join(str(cell) for cell in row) + "\n" for row in self.rows())

    def __repr__(self) -> str:
        return (
            f"Board(size={self.size}, border={self._border.name}, "
            f"generation={self._generation}, population={self.population})"
        )

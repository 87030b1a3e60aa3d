from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

ROWS = 10
COLS = 10

Grid = List[List[str]]


class InvalidMove(ValueError):
    """Raised when a move violates the store's preconditions.

    The coordinator validates user input before touching the store, so this
    indicates a programming error rather than a bad submission.
    """


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    char: str
    by: str
    at: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def empty_grid(rows: int = ROWS, cols: int = COLS) -> Grid:
    return [['' for _ in range(cols)] for _ in range(rows)]


def in_bounds(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def replay(history: Iterable[Move], rows: int = ROWS, cols: int = COLS) -> Grid:
    """Rebuild a grid by applying moves in order; the last write to a cell wins."""
    grid = empty_grid(rows, cols)
    for move in history:
        grid[move.row][move.col] = move.char
    return grid


class GridStore:
    """Authoritative grid plus the append-only history of accepted moves."""

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        self.rows = rows
        self.cols = cols
        self._grid = empty_grid(rows, cols)
        self._history: List[Move] = []

    def __len__(self) -> int:
        return len(self._history)

    @property
    def last_at(self) -> Optional[int]:
        return self._history[-1].at if self._history else None

    def cell(self, row: int, col: int) -> str:
        return self._grid[row][col]

    def apply_move(self, row: int, col: int, char: str, by: str, at: int) -> Move:
        if not in_bounds(row, col, self.rows, self.cols):
            raise InvalidMove(f'({row}, {col}) is outside the {self.rows}x{self.cols} grid')
        if not char:
            raise InvalidMove('char must be non-empty')
        move = Move(row=row, col=col, char=char, by=by, at=at)
        self._grid[row][col] = char
        self._history.append(move)
        return move

    def history(self) -> List[Move]:
        return list(self._history)

    def snapshot(self) -> Dict[str, Any]:
        return {
            'grid': [list(r) for r in self._grid],
            'history': [m.to_dict() for m in self._history],
        }

"""Snake body: ordered cells from head to tail plus the move transform."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from .grid import Cell, Direction


class SnakeState:
    """Cells occupied by the snake, head first.

    ``step`` only computes where the head would go; whether that cell is
    legal is decided by the engine, which then commits it with ``advance``.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self._cells: deque[Cell] = deque(tuple(cell) for cell in cells)
        if not self._cells:
            raise ValueError("a snake needs at least one cell")
        if len(set(self._cells)) != len(self._cells):
            raise ValueError("snake cells must be distinct")

    @property
    def head(self) -> Cell:
        return self._cells[0]

    @property
    def cells(self) -> tuple[Cell, ...]:
        return tuple(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(tuple(self._cells))

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def step(self, direction: Direction) -> Cell:
        """Return the candidate head one cell ahead; no clamping or wrapping."""
        dx, dy = direction.vector
        x, y = self.head
        return (x + dx, y + dy)

    def collides(self, cell: Cell) -> bool:
        """True if ``cell`` hits the current (pre-move) body."""
        return cell in self._cells

    def advance(self, new_head: Cell, grow: bool = False) -> None:
        """Move onto ``new_head``; the tail stays put when growing."""
        self._cells.appendleft(new_head)
        if not grow:
            self._cells.pop()

    def __repr__(self) -> str:
        return f"<SnakeState length={len(self._cells)} head={self.head}>"

"""Prompt value: a single cell or a rectangular range of cells."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

CellValue = str | int | float | bool | None


@dataclass(frozen=True)
class Scalar:
    """A single spreadsheet cell.

    Attributes:
        value: The raw cell content
    """

    value: Any

    def map(self, fn: Callable[[Any], Any]) -> "Scalar":
        return Scalar(fn(self.value))

    def to_native(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Grid:
    """A rectangular two-dimensional range, rows of equal length.

    Attributes:
        rows: Cell values in row-major order
    """

    rows: tuple[tuple[Any, ...], ...]

    @property
    def shape(self) -> tuple[int, int]:
        """Return (row count, column count)."""
        if not self.rows:
            return (0, 0)
        return (len(self.rows), len(self.rows[0]))

    def cells(self):
        """Yield ((row, column), value) in row-major order."""
        for i, row in enumerate(self.rows):
            for j, value in enumerate(row):
                yield (i, j), value

    def map(self, fn: Callable[[Any], Any]) -> "Grid":
        return Grid(tuple(tuple(fn(value) for value in row) for row in self.rows))

    def to_native(self) -> list[list[Any]]:
        return [list(row) for row in self.rows]


PromptValue = Scalar | Grid


def resolve_prompt(raw: Any) -> PromptValue:
    """Resolve a raw formula argument into a Scalar or a Grid.

    Args:
        raw: A cell value, or a sequence of row sequences

    Returns:
        The tagged prompt value

    Raises:
        ValueError: If a sequence is not a rectangular list of rows
    """
    if isinstance(raw, (Scalar, Grid)):
        return raw

    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        return Scalar(raw)

    rows = []
    for row in raw:
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            raise ValueError("Range must be a sequence of rows")
        rows.append(tuple(row))

    if rows and any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("Range must be rectangular, all rows of equal length")

    return Grid(tuple(rows))

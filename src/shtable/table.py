"""In-memory table of text cells.

Row 0 of every table is the header. Each following row must carry exactly as
many cells as the header does; a malformed row is rejected before it is
linked into the table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING

from shtable.errors import (
    AllocationError,
    ColumnCountMismatchError,
    InvalidArgumentError,
)

if TYPE_CHECKING:
    from shtable.render import OutputSink
    from shtable.width import WidthMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """An immutable row of text cells.

    Attributes:
        cells: Cell values in column order.
    """

    cells: tuple[str, ...]

    @property
    def ncells(self) -> int:
        return len(self.cells)

    @classmethod
    def from_cells(cls, cells: Sequence[str] | None) -> Row:
        """Copy a sequence of cell values into a new row.

        Args:
            cells: Cell values in column order.

        Returns:
            The new row.

        Raises:
            InvalidArgumentError: If there are no cells or a cell is not text.
            AllocationError: If copying the cells runs out of memory.
        """
        if isinstance(cells, str | bytes):
            raise InvalidArgumentError("Table row must be a sequence of cells, not a string")
        if cells is None:
            raise InvalidArgumentError("Table row cannot be empty")

        try:
            values = tuple(cells)
        except MemoryError as e:
            raise AllocationError("Out of memory copying table row") from e

        if not values:
            raise InvalidArgumentError("Table row cannot be empty")

        for index, cell in enumerate(values):
            if not isinstance(cell, str):
                raise InvalidArgumentError(
                    "Table cell must be text",
                    column=index,
                    type=type(cell).__name__,
                )

        try:
            return cls(cells=values)
        except MemoryError as e:
            raise AllocationError("Out of memory copying table row", ncells=len(values)) from e


class Table:
    """A header row followed by any number of data rows.

    Example::

        with Table(["Id", "Name"]) as table:
            table.append_row(["1", "fedora28"])
            table.print()
    """

    def __init__(self, column_names: Sequence[str] | None) -> None:
        """Create a table with the given column names as its header.

        Args:
            column_names: Header cells, one per column.

        Raises:
            InvalidArgumentError: If no column names are given.
        """
        self._rows: list[Row] = [Row.from_cells(column_names)]
        self._freed = False

    def __repr__(self) -> str:
        if self._freed:
            return "Table(<freed>)"
        return f"Table(columns={list(self.header.cells)!r}, nrows={self.nrows})"

    def __enter__(self) -> Table:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.free()

    def _ensure_live(self) -> None:
        if self._freed:
            raise InvalidArgumentError("Table has been freed")

    @property
    def freed(self) -> bool:
        return self._freed

    @property
    def header(self) -> Row:
        self._ensure_live()
        return self._rows[0]

    @property
    def rows(self) -> tuple[Row, ...]:
        """All rows, header first."""
        self._ensure_live()
        return tuple(self._rows)

    @property
    def data_rows(self) -> tuple[Row, ...]:
        self._ensure_live()
        return tuple(self._rows[1:])

    @property
    def nrows(self) -> int:
        """Number of rows including the header."""
        return len(self._rows)

    @property
    def ncols(self) -> int:
        return self.header.ncells

    def append_row(self, cells: Sequence[str] | None) -> None:
        """Append a data row.

        Args:
            cells: Cell values, one per header column.

        Raises:
            InvalidArgumentError: If the row is empty or the table was freed.
            ColumnCountMismatchError: If the cell count differs from the header.
            AllocationError: If copying the cells runs out of memory.
        """
        self._ensure_live()
        row = Row.from_cells(cells)

        if row.ncells != self.ncols:
            raise ColumnCountMismatchError(expected=self.ncols, actual=row.ncells)

        self._rows.append(row)

    def extend_rows(self, rows: Iterable[Sequence[str]]) -> None:
        """Append several data rows, stopping at the first invalid one."""
        for cells in rows:
            self.append_row(cells)

    def free(self) -> None:
        """Release every row. Calling it again does nothing."""
        if self._freed:
            return
        logger.debug("Freeing table with %d rows", len(self._rows))
        self._rows.clear()
        self._freed = True

    def render(
        self,
        print_header: bool = True,
        sink: OutputSink | None = None,
        measurer: WidthMeasurer | None = None,
    ) -> str | None:
        """Render the table. See :func:`shtable.render.render`."""
        from shtable.render import render

        return render(self, print_header, sink=sink, measurer=measurer)

    def to_string(self, header: bool = True, measurer: WidthMeasurer | None = None) -> str:
        from shtable.render import print_to_string

        return print_to_string(self, header=header, measurer=measurer)

    def print(
        self,
        quiet: bool = False,
        sink: OutputSink | None = None,
        measurer: WidthMeasurer | None = None,
    ) -> None:
        from shtable.render import print_to_stdout

        print_to_stdout(self, quiet=quiet, sink=sink, measurer=measurer)


def new_table(column_names: Sequence[str] | None) -> Table:
    """Convenience function to create a table from its column names."""
    return Table(column_names)


def free_table(table: Table | None) -> None:
    """Release a table. ``None`` is accepted and ignored."""
    if table is None:
        return
    table.free()

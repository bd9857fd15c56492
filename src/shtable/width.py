"""Column width measurement.

Widths are display widths, the number of terminal columns a string occupies:
wide CJK and emoji glyphs count as 2, combining marks as 0. Text that cannot
be represented in the active locale encoding is measured by its byte length
instead, the same fallback a single-byte terminal would need.
"""

from __future__ import annotations

import locale
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rich.cells import cell_len

from shtable.errors import InternalError

if TYPE_CHECKING:
    from shtable.table import Table

logger = logging.getLogger(__name__)


def byte_length(text: str) -> int:
    """Length of text in bytes when encoded as UTF-8.

    Undecodable input bytes carried as escape surrogates count as one byte.
    """
    try:
        return len(text.encode("utf-8", errors="surrogateescape"))
    except UnicodeEncodeError:
        return len(text.encode("utf-8", errors="surrogatepass"))


@runtime_checkable
class WidthMeasurer(Protocol):
    """Anything that can tell how many terminal columns a string occupies."""

    def measure(self, text: str) -> int: ...


class LocaleWidthMeasurer:
    """Measure display width under a character encoding.

    Args:
        encoding: Codeset to check text against. Defaults to the encoding of
            the process locale, looked up on every measurement.
    """

    def __init__(self, encoding: str | None = None) -> None:
        self._encoding = encoding

    def __repr__(self) -> str:
        return f"LocaleWidthMeasurer(encoding={self._encoding!r})"

    @property
    def encoding(self) -> str:
        return self._encoding or locale.getpreferredencoding(False)

    def measure(self, text: str) -> int:
        encoding = self.encoding
        try:
            text.encode(encoding)
        except (UnicodeEncodeError, LookupError):
            logger.debug("Cannot represent %r in %s, using byte length", text, encoding)
            return byte_length(text)
        return cell_len(text)


class ByteWidthMeasurer:
    """Measure every string by its byte length."""

    def measure(self, text: str) -> int:
        return byte_length(text)


@dataclass(frozen=True)
class ColumnWidths:
    """Widths measured for one render.

    Attributes:
        cells: Width of every cell, indexed by row then column. Rows that were
            not measured hold zeros.
        maxima: Widest measured cell of each column.
    """

    cells: tuple[tuple[int, ...], ...]
    maxima: tuple[int, ...]

    def padding(self, row: int, column: int) -> int:
        """Spaces to emit after a cell so the next column lines up."""
        return self.maxima[column] - self.cells[row][column] + 2

    @property
    def divider_width(self) -> int:
        return sum(width + 3 for width in self.maxima)


def compute_widths(
    table: Table,
    include_header: bool,
    measurer: WidthMeasurer | None = None,
) -> ColumnWidths:
    """Measure every cell of a table and the widest cell of each column.

    Args:
        table: Table to measure.
        include_header: Whether the header row takes part in the measurement.
        measurer: Width measurer; defaults to the process locale.

    Returns:
        Per-cell widths and per-column maxima.

    Raises:
        InternalError: If the measurer reports a negative width for a
            non-empty string.
    """
    if measurer is None:
        measurer = LocaleWidthMeasurer()

    ncols = table.ncols
    rows = table.rows
    cells = [[0] * ncols for _ in rows]
    maxima = [0] * ncols

    first = 0 if include_header else 1
    for i in range(first, len(rows)):
        for j, text in enumerate(rows[i].cells):
            width = measurer.measure(text)
            if width < 0:
                if text:
                    raise InternalError(
                        "Invalid display width for table cell",
                        text=text,
                        width=width,
                    )
                width = 0
            cells[i][j] = width
            if width > maxima[j]:
                maxima[j] = width

    return ColumnWidths(
        cells=tuple(tuple(row) for row in cells),
        maxima=tuple(maxima),
    )

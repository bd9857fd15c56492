"""Table rendering to an output sink or to a string."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from rich.console import Console

from shtable.width import ColumnWidths, compute_widths

if TYPE_CHECKING:
    from shtable.table import Row, Table
    from shtable.width import WidthMeasurer

logger = logging.getLogger(__name__)


@runtime_checkable
class OutputSink(Protocol):
    """Receives rendered text fragments in order.

    Text streams such as ``sys.stdout`` or ``io.StringIO`` qualify.
    """

    def write(self, text: str, /) -> Any: ...


class ConsoleSink:
    """Write raw text to the output file of a rich console.

    Text reaches the console file unchanged: no markup, wrapping or
    cropping to the terminal width is applied. Characters the file encoding
    cannot represent are written as replacement characters.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def write(self, text: str, /) -> None:
        file = self.console.file
        try:
            file.write(text)
        except UnicodeEncodeError:
            encoding = getattr(file, "encoding", None) or "ascii"
            logger.debug("Cannot write %r as %s, replacing characters", text, encoding)
            file.write(text.encode(encoding, errors="replace").decode(encoding))


class StringBuffer:
    """Growable text buffer used for buffered rendering."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)

    def add_str(self, text: str) -> None:
        self._parts.append(text)

    def add_format(self, template: str, *args: Any) -> None:
        """Append ``template % args``."""
        self._parts.append(template % args)

    def add_char(self, char: str, count: int = 1) -> None:
        self._parts.append(char * count)

    def content_and_reset(self) -> str:
        """Return everything appended so far and empty the buffer."""
        content = "".join(self._parts)
        self._parts = []
        return content

    write = add_str


def _write_row(sink: OutputSink, row: Row, widths: ColumnWidths, index: int) -> None:
    for column, cell in enumerate(row.cells):
        sink.write(f" {cell}")
        sink.write(" " * widths.padding(index, column))
    sink.write("\n")


def render(
    table: Table,
    print_header: bool,
    sink: OutputSink | None = None,
    measurer: WidthMeasurer | None = None,
) -> str | None:
    """Render a table.

    The header and the dashed divider under it are printed together or not
    at all. Data rows are always printed. Column widths are measured anew on
    every call.

    Args:
        table: Table to render.
        print_header: Whether to print the header row and divider.
        sink: Destination for streaming output. When omitted the output is
            collected and returned instead.
        measurer: Width measurer; defaults to the process locale.

    Returns:
        The rendered table when no sink was given, otherwise None.
    """
    widths = compute_widths(table, print_header, measurer)

    buffer: StringBuffer | None = None
    if sink is None:
        buffer = StringBuffer()
        sink = buffer

    rows = table.rows
    if print_header:
        _write_row(sink, rows[0], widths, 0)
        sink.write("-" * widths.divider_width)
        sink.write("\n")

    for index in range(1, len(rows)):
        _write_row(sink, rows[index], widths, index)

    logger.debug(
        "Rendered %d data rows in %d columns (header=%s)",
        len(rows) - 1,
        table.ncols,
        print_header,
    )

    if buffer is not None:
        return buffer.content_and_reset()
    return None


def print_to_string(
    table: Table,
    header: bool = True,
    measurer: WidthMeasurer | None = None,
) -> str:
    """Render a table and return it as a string."""
    return render(table, header, measurer=measurer) or ""


def print_to_stdout(
    table: Table,
    quiet: bool = False,
    sink: OutputSink | None = None,
    measurer: WidthMeasurer | None = None,
) -> None:
    """Print a table to standard output.

    Args:
        table: Table to print.
        quiet: Leave out the header and divider.
        sink: Alternative destination, mainly for tests.
        measurer: Width measurer; defaults to the process locale.
    """
    if sink is None:
        sink = ConsoleSink()
    render(table, not quiet, sink=sink, measurer=measurer)

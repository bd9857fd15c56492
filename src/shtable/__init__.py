"""shtable - aligned tables for terminal output.

Provides:
- A small in-memory table of text cells with a header row
- Column widths measured in terminal display columns (wide glyphs count twice)
- Rendering to a stream or to a string
"""

from shtable.config import RenderConfig, load_config
from shtable.errors import (
    AllocationError,
    ColumnCountMismatchError,
    ConfigurationError,
    InternalError,
    InvalidArgumentError,
    ShTableError,
)
from shtable.render import (
    ConsoleSink,
    OutputSink,
    StringBuffer,
    print_to_stdout,
    print_to_string,
    render,
)
from shtable.table import Row, Table, free_table, new_table
from shtable.width import (
    ByteWidthMeasurer,
    ColumnWidths,
    LocaleWidthMeasurer,
    WidthMeasurer,
    compute_widths,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Table",
    "Row",
    "new_table",
    "free_table",
    # Widths
    "ColumnWidths",
    "WidthMeasurer",
    "LocaleWidthMeasurer",
    "ByteWidthMeasurer",
    "compute_widths",
    # Rendering
    "OutputSink",
    "ConsoleSink",
    "StringBuffer",
    "render",
    "print_to_string",
    "print_to_stdout",
    # Config
    "RenderConfig",
    "load_config",
    # Errors
    "ShTableError",
    "InvalidArgumentError",
    "ColumnCountMismatchError",
    "AllocationError",
    "InternalError",
    "ConfigurationError",
]

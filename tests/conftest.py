"""Shared test fixtures for shtable tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from dotenv import load_dotenv

from shtable.table import Table
from shtable.width import LocaleWidthMeasurer

# Load .env from project root (doesn't override existing env vars)
load_dotenv(Path(__file__).parent.parent / ".env")


@pytest.fixture
def utf8_measurer() -> LocaleWidthMeasurer:
    """Measurer that behaves as under a UTF-8 locale."""
    return LocaleWidthMeasurer("utf-8")


@pytest.fixture
def ascii_measurer() -> LocaleWidthMeasurer:
    """Measurer that behaves as under the C locale."""
    return LocaleWidthMeasurer("ascii")


@pytest.fixture
def domain_table() -> Table:
    """Three-column table with two running domains."""
    table = Table(["Id", "Name", "State"])
    table.append_row(["1", "fedora28", "running"])
    table.append_row(["2", "rhel7.5", "running"])
    return table


@pytest.fixture
def unicode_table() -> Table:
    """Table mixing CJK, Cyrillic, emoji and ASCII cells."""
    table = Table(["Id", "名稱", "государство"])
    table.append_row(["1", "fedora28", "running"])
    table.append_row(["2", "🙊🙉🙈rhel7.5🙆🙆🙅", "running"])
    return table


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A shtable.yaml with non-default settings."""
    path = tmp_path / "shtable.yaml"
    path.write_text("""\
header: true
quiet: false
encoding: utf-8
delimiter: ";"
""")
    return path

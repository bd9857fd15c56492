"""Tests for column width measurement."""

from __future__ import annotations

import pytest

from shtable.errors import InternalError
from shtable.table import Table
from shtable.width import (
    ByteWidthMeasurer,
    ColumnWidths,
    LocaleWidthMeasurer,
    WidthMeasurer,
    byte_length,
    compute_widths,
)


class FixedMeasurer:
    """Measurer returning the same width for every string."""

    def __init__(self, width: int) -> None:
        self.width = width
        self.calls: list[str] = []

    def measure(self, text: str) -> int:
        self.calls.append(text)
        return self.width


class TestLocaleWidthMeasurer:
    """Tests for LocaleWidthMeasurer."""

    def test_ascii_text(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        assert utf8_measurer.measure("fedora28") == 8

    def test_wide_glyphs_count_twice(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        assert utf8_measurer.measure("名稱") == 4
        assert utf8_measurer.measure("🙊🙉🙈rhel7.5🙆🙆🙅") == 19

    def test_narrow_non_ascii(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        assert utf8_measurer.measure("государство") == 11

    def test_combining_mark_has_no_width(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        assert utf8_measurer.measure("e\u0301") == 1

    def test_empty_string(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        assert utf8_measurer.measure("") == 0

    def test_unrepresentable_text_uses_byte_length(
        self, ascii_measurer: LocaleWidthMeasurer
    ) -> None:
        """Under a single-byte locale multi-byte text falls back to its byte count."""
        assert ascii_measurer.measure("名稱") == 6
        assert ascii_measurer.measure("running") == 7

    def test_escaped_bytes_count_once(self, utf8_measurer: LocaleWidthMeasurer) -> None:
        """Undecodable input bytes fall back to their raw byte count."""
        assert utf8_measurer.measure("caf\udce9") == 4

    def test_unknown_encoding_uses_byte_length(self) -> None:
        measurer = LocaleWidthMeasurer("no-such-codeset")
        assert measurer.measure("名稱") == 6

    def test_default_encoding_follows_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "shtable.width.locale.getpreferredencoding", lambda do_setlocale=True: "ascii"
        )
        measurer = LocaleWidthMeasurer()
        assert measurer.encoding == "ascii"
        assert measurer.measure("名稱") == 6

    def test_satisfies_protocol(self) -> None:
        assert isinstance(LocaleWidthMeasurer(), WidthMeasurer)
        assert isinstance(ByteWidthMeasurer(), WidthMeasurer)


def test_byte_length() -> None:
    assert byte_length("abc") == 3
    assert byte_length("名") == 3
    assert byte_length("caf\udce9") == 4
    assert byte_length("\ud800") == 3
    assert ByteWidthMeasurer().measure("🙊") == 4


class TestComputeWidths:
    """Tests for compute_widths."""

    def test_with_header(self, domain_table: Table, utf8_measurer: LocaleWidthMeasurer) -> None:
        widths = compute_widths(domain_table, True, utf8_measurer)
        assert widths.maxima == (2, 8, 7)
        assert widths.cells[0] == (2, 4, 5)
        assert widths.cells[2] == (1, 7, 7)
        assert widths.divider_width == 26

    def test_without_header(
        self, domain_table: Table, utf8_measurer: LocaleWidthMeasurer
    ) -> None:
        """The header row is not measured and its slot stays zero."""
        widths = compute_widths(domain_table, False, utf8_measurer)
        assert widths.maxima == (1, 8, 7)
        assert widths.cells[0] == (0, 0, 0)

    def test_header_only_without_header_measures_nothing(self) -> None:
        measurer = FixedMeasurer(5)
        widths = compute_widths(Table(["Id", "Name"]), False, measurer)
        assert widths.maxima == (0, 0)
        assert measurer.calls == []

    def test_padding(self, domain_table: Table, utf8_measurer: LocaleWidthMeasurer) -> None:
        widths = compute_widths(domain_table, True, utf8_measurer)
        assert widths.padding(2, 1) == 3
        assert widths.padding(0, 0) == 2

    def test_wide_glyphs_widen_column(
        self, unicode_table: Table, utf8_measurer: LocaleWidthMeasurer
    ) -> None:
        widths = compute_widths(unicode_table, True, utf8_measurer)
        assert widths.maxima == (2, 19, 11)
        assert widths.divider_width == 41

    def test_negative_width_is_internal_error(self) -> None:
        with pytest.raises(InternalError):
            compute_widths(Table(["Id"]), True, FixedMeasurer(-1))

    def test_negative_width_for_empty_cell_counts_as_zero(self) -> None:
        widths = compute_widths(Table([""]), True, FixedMeasurer(-1))
        assert widths.maxima == (0,)

    def test_measured_every_call(self, domain_table: Table) -> None:
        """Widths are not cached between calls."""
        measurer = FixedMeasurer(1)
        compute_widths(domain_table, True, measurer)
        compute_widths(domain_table, True, measurer)
        assert len(measurer.calls) == 18

    def test_result_is_immutable(self, domain_table: Table) -> None:
        widths = compute_widths(domain_table, True, ByteWidthMeasurer())
        assert isinstance(widths, ColumnWidths)
        with pytest.raises(AttributeError):
            widths.maxima = (0, 0, 0)  # type: ignore[misc]

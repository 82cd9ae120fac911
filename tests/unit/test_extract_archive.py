"""Tests for the extract_archive activity.

Covers:
- iter_zip_entries: entry order, directories, raw bytes, size limit
- extract_all: KML routing, non-KML entries ignored, per-entry failure
  isolation with warnings, NoValidContentError when nothing is extracted
- Non-ZIP input rejection
- Entry text encoding taken from the XML declaration (Latin-1, UTF-8 BOM)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from polygon_labeler.activities.extract_archive import (
    NO_VALID_KML_MESSAGE,
    ArchiveEntry,
    extract_all,
    iter_zip_entries,
)
from polygon_labeler.core.exceptions import (
    EntryTooLargeError,
    FormatError,
    NoValidContentError,
)

if TYPE_CHECKING:
    from datetime import date


def _entry(name: str, text: str = "", *, is_dir: bool = False) -> ArchiveEntry:
    return ArchiveEntry(name=name, is_dir=is_dir, read=lambda: text.encode("utf-8"))


def _failing_entry(name: str, exc: Exception) -> ArchiveEntry:
    def _read() -> bytes:
        raise exc

    return ArchiveEntry(name=name, is_dir=False, read=_read)


# ===========================================================================
# iter_zip_entries
# ===========================================================================


class TestIterZipEntries:
    """ZIP members exposed as ArchiveEntry objects."""

    def test_entries_in_archive_order(self, make_zip) -> None:
        data = make_zip({"b.kml": "x", "a.txt": "y", "dir/": ""})
        entries = list(iter_zip_entries(data))
        assert [e.name for e in entries] == ["b.kml", "a.txt", "dir/"]
        assert [e.is_dir for e in entries] == [False, False, True]

    def test_read_returns_raw_bytes(self, make_zip) -> None:
        raw = "<name>Rápida</name>".encode("latin-1")
        data = make_zip({"a.kml": raw})
        (entry,) = iter_zip_entries(data)
        assert entry.read() == raw

    def test_not_a_zip(self) -> None:
        with pytest.raises(FormatError, match="not a valid ZIP"):
            list(iter_zip_entries(b"definitely not a zip"))

    def test_empty_bytes(self) -> None:
        with pytest.raises(FormatError):
            list(iter_zip_entries(b""))

    def test_entry_too_large_on_read(self, make_zip) -> None:
        data = make_zip({"big.kml": "x" * 100})
        (entry,) = iter_zip_entries(data, max_entry_bytes=10)
        with pytest.raises(EntryTooLargeError) as exc_info:
            entry.read()
        assert exc_info.value.code == "ENTRY_TOO_LARGE"


class TestArchiveEntry:
    """KML detection on entry names."""

    @pytest.mark.parametrize("name", ["a.kml", "dir/A.KML", "x.Kml"])
    def test_kml_names(self, name: str) -> None:
        assert _entry(name).is_kml

    @pytest.mark.parametrize("name", ["a.kmz", "a.kml.txt", "readme.md", "kml"])
    def test_non_kml_names(self, name: str) -> None:
        assert not _entry(name).is_kml

    def test_directory_never_kml(self) -> None:
        assert not _entry("folder.kml/", is_dir=True).is_kml


# ===========================================================================
# extract_all
# ===========================================================================


class TestExtractAll:
    """Aggregation of KML entries."""

    def test_single_kml(self, single_polygon_kml: str, today: date) -> None:
        result = extract_all([_entry("loja0042.kml", single_polygon_kml)], today=today)
        assert len(result.records) == 1
        assert result.records[0].formatted_name == "Pol_Eco_0042_05012024"
        assert result.warnings == []

    def test_branch_number_from_entry_name(self, single_polygon_kml: str, today: date) -> None:
        """Each entry's own name supplies its branch number."""
        entries = [
            _entry("loja11.kml", single_polygon_kml),
            _entry("loja22.kml", single_polygon_kml),
        ]
        result = extract_all(entries, today=today, source_filename="lote99.zip")
        assert [r.formatted_name for r in result.records] == [
            "Pol_Eco_11_05012024",
            "Pol_Eco_22_05012024",
        ]

    def test_records_concatenated_in_entry_order(
        self, single_polygon_kml: str, multi_placemark_kml: str, today: date
    ) -> None:
        entries = [_entry("2.kml", multi_placemark_kml), _entry("1.kml", single_polygon_kml)]
        result = extract_all(entries, today=today)
        assert [r.id for r in result.records] == [
            "polygon-0-0",
            "polygon-0-1",
            "polygon-1-0",
            "polygon-0-0",
        ]

    def test_non_kml_entries_ignored(self, single_polygon_kml: str, today: date) -> None:
        entries = [
            _entry("notes.txt", "not kml at all"),
            _entry("folder/", is_dir=True),
            _entry("1.kml", single_polygon_kml),
        ]
        result = extract_all(entries, today=today)
        assert len(result.records) == 1
        assert result.warnings == []

    def test_corrupt_entry_isolated(
        self,
        single_polygon_kml: str,
        corrupt_kml: str,
        today: date,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        entries = [_entry("good.kml", single_polygon_kml), _entry("bad.kml", corrupt_kml)]
        with caplog.at_level("WARNING", logger="polygon_labeler.activities.extract_archive"):
            result = extract_all(entries, today=today, source_filename="upload.zip")

        assert len(result.records) == 1
        assert len(result.warnings) == 1
        assert result.warnings[0].entry_name == "bad.kml"
        assert "not valid XML" in result.warnings[0].message
        assert "bad.kml" in caplog.text

    def test_read_failure_isolated(self, single_polygon_kml: str, today: date) -> None:
        entries = [
            _failing_entry("broken.kml", OSError("crc mismatch")),
            _entry("ok.kml", single_polygon_kml),
        ]
        result = extract_all(entries, today=today)
        assert len(result.records) == 1
        assert result.warnings[0].entry_name == "broken.kml"
        assert result.warnings[0].message == "crc mismatch"

    def test_kml_without_polygons_is_not_a_warning(
        self, single_polygon_kml: str, today: date
    ) -> None:
        empty = '<kml xmlns="http://www.opengis.net/kml/2.2"><Document/></kml>'
        entries = [_entry("empty.kml", empty), _entry("ok.kml", single_polygon_kml)]
        result = extract_all(entries, today=today)
        assert len(result.records) == 1
        assert result.warnings == []

    def test_no_entries(self, today: date) -> None:
        with pytest.raises(NoValidContentError) as exc_info:
            extract_all([], today=today)
        assert exc_info.value.message == NO_VALID_KML_MESSAGE

    def test_only_non_kml_entries(self, today: date) -> None:
        with pytest.raises(NoValidContentError):
            extract_all([_entry("a.txt", "x"), _entry("b.geojson", "{}")], today=today)

    def test_all_entries_fail(self, corrupt_kml: str, today: date) -> None:
        with pytest.raises(NoValidContentError):
            extract_all([_entry("a.kml", corrupt_kml), _entry("b.kml", "")], today=today)


class TestZipIntegration:
    """iter_zip_entries feeding extract_all end to end."""

    def test_zip_with_good_and_bad_entries(
        self, make_zip, single_polygon_kml: str, corrupt_kml: str, today: date
    ) -> None:
        data = make_zip(
            {
                "kml/": "",
                "kml/loja0042.kml": single_polygon_kml,
                "kml/broken.kml": corrupt_kml,
                "README.txt": "ignore me",
            }
        )
        result = extract_all(iter_zip_entries(data), today=today)
        assert len(result.records) == 1
        assert [w.entry_name for w in result.warnings] == ["kml/broken.kml"]

    def test_oversized_entry_becomes_warning(
        self, make_zip, single_polygon_kml: str, today: date
    ) -> None:
        huge = "<kml>" + " " * 5000 + "</kml>"
        data = make_zip({"small.kml": single_polygon_kml, "huge.kml": huge})
        result = extract_all(
            iter_zip_entries(data, max_entry_bytes=len(single_polygon_kml.encode()) + 1),
            today=today,
        )
        assert len(result.records) == 1
        assert result.warnings[0].entry_name == "huge.kml"
        assert "byte limit" in result.warnings[0].message


# ===========================================================================
# Entry encodings
# ===========================================================================

LATIN1_KML = """<?xml version="1.0" encoding="ISO-8859-1"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>Entrega Rápida</name>
      <Polygon><outerBoundaryIs><LinearRing>
        <coordinates>0,0 1,0 1,1 0,0</coordinates>
      </LinearRing></outerBoundaryIs></Polygon>
    </Placemark>
  </Document>
</kml>
"""


class TestEntryEncoding:
    """Each entry is decoded according to its own XML declaration."""

    def test_latin1_entry_parsed(self, make_zip, today: date) -> None:
        utf8_copy = LATIN1_KML.replace("ISO-8859-1", "UTF-8")
        data = make_zip(
            {
                "loja12.kml": LATIN1_KML.encode("latin-1"),
                "loja13.kml": utf8_copy.encode("utf-8"),
            }
        )
        result = extract_all(iter_zip_entries(data), today=today)

        assert result.warnings == []
        assert [r.original_name for r in result.records] == ["Entrega Rápida", "Entrega Rápida"]
        assert [r.formatted_name for r in result.records] == [
            "Pol_Rap_12_05012024",
            "Pol_Rap_13_05012024",
        ]

    def test_utf8_bom_entry_parsed(self, make_zip, single_polygon_kml: str, today: date) -> None:
        data = make_zip({"1.kml": b"\xef\xbb\xbf" + single_polygon_kml.encode("utf-8")})
        result = extract_all(iter_zip_entries(data), today=today)
        assert len(result.records) == 1

    def test_undeclared_latin1_becomes_warning(
        self, make_zip, single_polygon_kml: str, today: date
    ) -> None:
        """Without a declaration the entry must be UTF-8."""
        undeclared = LATIN1_KML.split("\n", 1)[1].encode("latin-1")
        data = make_zip({"bad.kml": undeclared, "ok.kml": single_polygon_kml})
        result = extract_all(iter_zip_entries(data), today=today)
        assert len(result.records) == 1
        assert [w.entry_name for w in result.warnings] == ["bad.kml"]

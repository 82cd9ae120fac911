"""Tests for the PolygonRecord / ProcessResult data models.

Covers:
- to_dict shape
- Immutability and derived properties
"""

from __future__ import annotations

import dataclasses

import pytest

from polygon_labeler.models.polygon_record import EntryWarning, PolygonRecord, ProcessResult


def _record() -> PolygonRecord:
    return PolygonRecord(
        id="polygon-3",
        formatted_name="Pol_Rap_12_05012024",
        coordinates=[(1.5, 2.5), (3.0, 4.0), (1.5, 2.5)],
        original_name="Rápida",
    )


class TestPolygonRecord:
    """Record serialisation."""

    def test_to_dict(self) -> None:
        assert _record().to_dict() == {
            "id": "polygon-3",
            "formatted_name": "Pol_Rap_12_05012024",
            "coordinates": [[1.5, 2.5], [3.0, 4.0], [1.5, 2.5]],
            "original_name": "Rápida",
        }

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _record().id = "other"  # type: ignore[misc]


class TestProcessResult:
    """Per-file result container."""

    def test_count(self) -> None:
        result = ProcessResult(file_name="a.json", records=[_record(), _record()])
        assert result.count == 2
        assert result.warnings == []

    def test_warning_to_dict(self) -> None:
        warning = EntryWarning(entry_name="x.kml", message="boom")
        assert warning.to_dict() == {"entry_name": "x.kml", "message": "boom"}

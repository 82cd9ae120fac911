"""Archive extraction activity.

Routes every ``.kml`` entry of an uploaded ZIP archive to the KML parser
and aggregates the results.

Entries are processed one at a time in the archive's own order and
handed to the parser as raw bytes; the XML declaration picks the text
encoding (UTF-8 when absent).  A failure in one entry (unreadable bytes,
broken XML, entry too large) is logged, recorded as an ``EntryWarning``
and does not stop the remaining entries.  Only when no entry yields a
polygon does the batch fail, with ``NoValidContentError``.
"""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from polygon_labeler.activities.parse_kml import parse_kml_text
from polygon_labeler.core.config import DEFAULT_MAX_ENTRY_BYTES
from polygon_labeler.core.constants import KML_EXTENSION
from polygon_labeler.core.exceptions import EntryTooLargeError, FormatError, NoValidContentError
from polygon_labeler.models.polygon_record import EntryWarning, PolygonRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from datetime import date

logger = logging.getLogger("polygon_labeler.activities.extract_archive")

NO_VALID_KML_MESSAGE = (
    "No valid KML file was found in the ZIP archive, or the KML files "
    "contain no valid polygons."
)


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One member of an archive, decompressed lazily.

    Attributes:
        name: Path of the entry inside the archive.
        is_dir: Whether the entry is a directory marker.
        read: Decompresses the entry and returns its raw bytes.
    """

    name: str
    is_dir: bool
    read: Callable[[], bytes]

    @property
    def is_kml(self) -> bool:
        return not self.is_dir and self.name.lower().endswith(KML_EXTENSION)


@dataclass(frozen=True, slots=True)
class ArchiveExtraction:
    """Aggregate result of ``extract_all``.

    Attributes:
        records: Polygons from every readable KML entry, in entry order.
        warnings: One warning per KML entry that failed.
    """

    records: list[PolygonRecord] = field(default_factory=list)
    warnings: list[EntryWarning] = field(default_factory=list)


def extract_all(
    entries: Iterable[ArchiveEntry],
    *,
    today: date,
    source_filename: str = "",
) -> ArchiveExtraction:
    """Run the KML parser over every ``.kml`` entry and collect the results.

    Non-KML entries and directories are ignored without a warning.

    Args:
        entries: Archive members, in archive order.
        today: Date stamped into every label.
        source_filename: Archive name, for log context only.

    Returns:
        Records and per-entry warnings.

    Raises:
        NoValidContentError: If no entry produced a polygon.
    """
    records: list[PolygonRecord] = []
    warnings: list[EntryWarning] = []
    kml_entries = 0

    for entry in entries:
        if not entry.is_kml:
            continue
        kml_entries += 1

        try:
            entry_records = parse_kml_text(entry.read(), entry.name, today=today)
        except Exception as exc:
            logger.warning(
                "Skipping KML entry %s in %s: %s",
                entry.name,
                source_filename or "<archive>",
                exc,
            )
            warnings.append(EntryWarning(entry_name=entry.name, message=str(exc)))
            continue

        records.extend(entry_records)

    logger.info(
        "Archive extracted | archive=%s | kml_entries=%d | failed=%d | polygons=%d",
        source_filename or "<archive>",
        kml_entries,
        len(warnings),
        len(records),
    )

    if not records:
        raise NoValidContentError(NO_VALID_KML_MESSAGE)

    return ArchiveExtraction(records=records, warnings=warnings)


def iter_zip_entries(
    data: bytes,
    *,
    max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES,
) -> Iterator[ArchiveEntry]:
    """Yield the members of a ZIP archive as ``ArchiveEntry`` objects.

    Entry bodies are decompressed only when ``read()`` is called and are
    returned as bytes, so the KML parser can honour each document's own
    encoding declaration.

    Args:
        data: The archive bytes.
        max_entry_bytes: Largest uncompressed entry ``read()`` accepts.

    Raises:
        FormatError: If *data* is not a readable ZIP archive (raised on
            first iteration).
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        msg = f"File is not a valid ZIP archive: {exc}"
        raise FormatError(msg) from exc

    with archive:
        for info in archive.infolist():
            yield ArchiveEntry(
                name=info.filename,
                is_dir=info.is_dir(),
                read=_entry_reader(archive, info, max_entry_bytes),
            )


def _entry_reader(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    max_entry_bytes: int,
) -> Callable[[], bytes]:
    def _read() -> bytes:
        if info.file_size > max_entry_bytes:
            msg = (
                f"Entry {info.filename!r} is {info.file_size} bytes uncompressed, "
                f"above the {max_entry_bytes} byte limit"
            )
            raise EntryTooLargeError(msg)
        return archive.read(info)

    return _read

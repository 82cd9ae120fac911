"""File pipeline: one upload in, labelled polygons out.

Coordinates the steps for a single uploaded file:

1. Detect the file type from its extension (``.json`` or ``.zip``, any case).
   Unknown types fail before any parsing.
2. Enforce the upload size limit.
3. Run the GeoJSON extractor, or walk the archive's KML entries.
4. Fail with ``NoValidContentError`` if nothing was extracted.

Nothing is persisted; each call is independent and its output depends
only on the input bytes, the filename and the clock.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from polygon_labeler.activities.extract_archive import extract_all, iter_zip_entries
from polygon_labeler.activities.parse_geojson import parse_geojson
from polygon_labeler.core.config import LabelerConfig
from polygon_labeler.core.constants import GEOJSON_EXTENSION, SUPPORTED_UPLOAD_EXTENSIONS
from polygon_labeler.core.exceptions import (
    FormatError,
    NoValidContentError,
    UnsupportedTypeError,
    UploadTooLargeError,
)
from polygon_labeler.models.polygon_record import ProcessResult
from polygon_labeler.utils.helpers import make_clock

if TYPE_CHECKING:
    from polygon_labeler.utils.helpers import Clock

logger = logging.getLogger("polygon_labeler.orchestrators.file_pipeline")

UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type. Use .json or .zip files."
NO_POLYGONS_MESSAGE = "No valid polygon was found in the file."


def process_file(
    file_name: str,
    content: bytes,
    *,
    clock: Clock | None = None,
    config: LabelerConfig | None = None,
) -> ProcessResult:
    """Extract labelled polygons from one uploaded file.

    Args:
        file_name: Upload name; selects the extractor and supplies the
            branch number.
        content: Raw upload bytes.
        clock: Returns the date stamped into labels.  Defaults to the
            local calendar date in ``config.label_timezone``.
        config: Limits and time zone.  Defaults to ``LabelerConfig()``.

    Returns:
        The records (and archive warnings) for the file.

    Raises:
        UnsupportedTypeError: If the extension is not ``.json`` or ``.zip``.
        UploadTooLargeError: If *content* exceeds ``max_upload_bytes``.
        FormatError: If the file does not have the expected structure.
        NoValidContentError: If the file yields zero polygons.
    """
    cfg = config or LabelerConfig()
    lowered = file_name.lower()

    if not lowered.endswith(SUPPORTED_UPLOAD_EXTENSIONS):
        raise UnsupportedTypeError(UNSUPPORTED_TYPE_MESSAGE)

    if len(content) > cfg.max_upload_bytes:
        msg = (
            f"File {file_name!r} is {len(content)} bytes, above the "
            f"{cfg.max_upload_bytes} byte upload limit"
        )
        raise UploadTooLargeError(msg)

    today = (clock or make_clock(cfg.label_timezone))()

    logger.info(
        "Processing file | file=%s | size=%d | date=%s",
        file_name,
        len(content),
        today.isoformat(),
    )

    if lowered.endswith(GEOJSON_EXTENSION):
        result = ProcessResult(
            file_name=file_name,
            records=parse_geojson(_decode_text(content, file_name), file_name, today=today),
        )
    else:
        extraction = extract_all(
            iter_zip_entries(content, max_entry_bytes=cfg.max_entry_bytes),
            today=today,
            source_filename=file_name,
        )
        result = ProcessResult(
            file_name=file_name,
            records=extraction.records,
            warnings=extraction.warnings,
        )

    if not result.records:
        raise NoValidContentError(NO_POLYGONS_MESSAGE)

    logger.info(
        "File processed | file=%s | polygons=%d | warnings=%d",
        file_name,
        result.count,
        len(result.warnings),
    )
    return result


def _decode_text(content: bytes, file_name: str) -> str:
    """Decode an uploaded text file as UTF-8 (a leading BOM is dropped).

    Raises:
        FormatError: If the bytes are not UTF-8.
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        msg = f"File {file_name!r} is not UTF-8 encoded text: {exc}"
        raise FormatError(msg) from exc

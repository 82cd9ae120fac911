"""Thin HTTP boundary helpers for the Azure Functions entry point.

Centralises the transport concerns so that ``function_app.py`` contains
only the trigger binding and handoff:

- **parse_upload_request**: pulls the upload's filename and options out
  of query parameters / headers and validates them.
- **build_success_payload**: renders a ``ProcessResult`` as the JSON
  body the presentation layer consumes.
- **error_status**: maps a ``PipelineError`` to an HTTP status code.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from polygon_labeler.activities.geometry_metrics import compute_centroid, compute_mean_radius_km
from polygon_labeler.core.exceptions import ContractError, UploadTooLargeError
from polygon_labeler.utils.coordinate_text import (
    format_coordinates_for_copy,
    preview_coordinates,
    summarise_count,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from polygon_labeler.core.config import LabelerConfig
    from polygon_labeler.core.exceptions import PipelineError
    from polygon_labeler.models.polygon_record import ProcessResult

logger = logging.getLogger("polygon_labeler.core.ingress")

FILENAME_PARAM = "filename"
FILENAME_HEADER = "x-file-name"
METRICS_PARAM = "include_metrics"
CORRELATION_HEADER = "x-correlation-id"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class UploadRequest:
    """Validated upload request.

    Attributes:
        file_name: Name of the uploaded file (never empty).
        content: Raw upload bytes.
        include_metrics: Whether to add centroid / mean radius per polygon.
        correlation_id: Caller-supplied request id, echoed in errors.
    """

    file_name: str
    content: bytes
    include_metrics: bool = False
    correlation_id: str = ""


def parse_upload_request(
    params: Mapping[str, str],
    headers: Mapping[str, str],
    body: bytes,
) -> UploadRequest:
    """Build an ``UploadRequest`` from query parameters, headers and body.

    The filename comes from the ``filename`` query parameter, else the
    ``X-File-Name`` header.

    Raises:
        ContractError: If no filename was given or the body is empty.
    """
    lowered_headers = {k.lower(): v for k, v in headers.items()}
    file_name = (params.get(FILENAME_PARAM) or lowered_headers.get(FILENAME_HEADER) or "").strip()
    correlation_id = lowered_headers.get(CORRELATION_HEADER, "")

    if not file_name:
        msg = f"Missing upload filename: pass ?{FILENAME_PARAM}= or the X-File-Name header"
        raise ContractError(
            msg, stage="ingress", code="MISSING_FILENAME", correlation_id=correlation_id
        )

    if not body:
        msg = f"Upload {file_name!r} has an empty body"
        raise ContractError(
            msg, stage="ingress", code="EMPTY_UPLOAD", correlation_id=correlation_id
        )

    include_metrics = params.get(METRICS_PARAM, "").strip().lower() in _TRUE_VALUES

    logger.debug(
        "Upload request parsed | file=%s | size=%d | metrics=%s | correlation_id=%s",
        file_name,
        len(body),
        include_metrics,
        correlation_id,
    )

    return UploadRequest(
        file_name=file_name,
        content=body,
        include_metrics=include_metrics,
        correlation_id=correlation_id,
    )


def build_success_payload(
    result: ProcessResult,
    config: LabelerConfig,
    *,
    include_metrics: bool = False,
) -> dict[str, Any]:
    """Render a ``ProcessResult`` as a JSON-ready response body."""
    polygons: list[dict[str, Any]] = []
    for record in result.records:
        item: dict[str, Any] = record.to_dict()
        item["coordinates_text"] = format_coordinates_for_copy(
            record.coordinates, precision=config.copy_precision
        )
        item["coordinates_preview"] = preview_coordinates(
            record.coordinates, precision=config.preview_precision
        )
        if include_metrics:
            item["centroid"] = list(compute_centroid(record.coordinates))
            item["mean_radius_km"] = compute_mean_radius_km(record.coordinates)
        polygons.append(item)

    return {
        "file_name": result.file_name,
        "count": result.count,
        "summary": summarise_count(result.count),
        "polygons": polygons,
        "warnings": [w.to_dict() for w in result.warnings],
    }


def error_status(error: PipelineError) -> int:
    """Return the HTTP status code for a pipeline error."""
    if isinstance(error, UploadTooLargeError):
        return 413
    return 400

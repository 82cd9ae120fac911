"""Azure Functions entry point for the Polygon Labeler.

This module registers the HTTP functions using the Python v2 programming
model.

All business logic lives in the polygon_labeler package. This file is
purely the wiring layer between Azure Functions bindings and application
code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from polygon_labeler.core.config import LabelerConfig
from polygon_labeler.core.exceptions import PipelineError
from polygon_labeler.core.ingress import (
    CORRELATION_HEADER,
    build_success_payload,
    error_status,
    parse_upload_request,
)
from polygon_labeler.orchestrators.file_pipeline import process_file

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("polygon_labeler.function_app")

# Fail fast on bad settings: a misconfigured app refuses to start.
CONFIG = LabelerConfig.from_env()


def _json_response(body: dict[str, object], status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json",
        charset="utf-8",
    )


# ---------------------------------------------------------------------------
# HTTP: Upload → Labelled polygons
# ---------------------------------------------------------------------------


@app.function_name("process_upload")
@app.route(route="polygons", methods=["POST"])
def process_upload(req: func.HttpRequest) -> func.HttpResponse:
    """Extract labelled polygons from an uploaded ``.json`` or ``.zip`` file.

    Request:
        ``POST /api/polygons?filename=<name>[&include_metrics=true]`` with
        the raw file as the body.  ``X-File-Name`` may replace the query
        parameter; ``X-Correlation-Id`` is echoed in error payloads.

    Responses:
        200 with ``{file_name, count, summary, polygons, warnings}``;
        400 / 413 with ``{"error": {...}}`` for any pipeline error.
    """
    try:
        upload = parse_upload_request(req.params, req.headers, req.get_body())
        result = process_file(upload.file_name, upload.content, config=CONFIG)
        body = build_success_payload(result, CONFIG, include_metrics=upload.include_metrics)
    except PipelineError as exc:
        if not exc.correlation_id:
            exc.correlation_id = req.headers.get(CORRELATION_HEADER, "")
        logger.warning(
            "Upload rejected | code=%s | stage=%s | message=%s",
            exc.code,
            exc.stage,
            exc.message,
        )
        return _json_response({"error": exc.to_error_dict()}, error_status(exc))

    logger.info(
        "Upload processed | file=%s | polygons=%d | warnings=%d",
        result.file_name,
        result.count,
        len(result.warnings),
    )
    return _json_response(body, 200)


# ---------------------------------------------------------------------------
# HTTP: Health check
# ---------------------------------------------------------------------------


@app.function_name("health")
@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Liveness probe."""
    return _json_response({"status": "ok"}, 200)

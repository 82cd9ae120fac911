"""Unified exception taxonomy for the polygon labelling pipeline.

Every domain exception inherits from ``PipelineError`` and carries
structured context fields so that the HTTP boundary can turn any failure
into a stable error payload and a user-facing message.

Taxonomy categories
-------------------
- ``ValidationError``: input/domain violations, never retryable.
- ``ContractError``:   request/payload shape violations at the boundary.

A bare ``PipelineError`` reports ``transient`` or ``permanent`` from its
``retryable`` flag.

Domain errors
-------------
- ``FormatError``:          the upload does not have the expected structure
  (GeoJSON without ``type``/``features``, XML that cannot be parsed,
  bytes that are not a ZIP archive).
- ``NoValidContentError``:  the upload parsed, but produced zero polygons.
- ``UnsupportedTypeError``: the filename extension is not recognised.
- ``InvalidInputError``:    a geometry metric was asked for an empty ring.
- ``EntryTooLargeError``:   a single archive entry exceeds the size limit.
- ``UploadTooLargeError``:  the upload itself exceeds the size limit.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for HTTP responses and logging.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"parse"``, ``"extract_archive"``).
        code: Machine-readable error code (e.g. ``"INVALID_FORMAT"``).
        retryable: Whether the caller may retry the same request.
        correlation_id: Request correlation identifier.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(PipelineError):
    """Request or payload shape violation at the boundary. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Domain errors
# ---------------------------------------------------------------------------


class FormatError(ValidationError):
    """Raised when an upload does not match the expected structural shape."""

    default_stage = "parse"
    default_code = "INVALID_FORMAT"


class NoValidContentError(ValidationError):
    """Raised when an upload parsed but yielded zero usable polygons."""

    default_stage = "extract"
    default_code = "NO_VALID_CONTENT"


class UnsupportedTypeError(ValidationError):
    """Raised when the upload's filename extension is not recognised."""

    default_stage = "dispatch"
    default_code = "UNSUPPORTED_FILE_TYPE"


class InvalidInputError(ValidationError):
    """Raised when a geometry metric receives unusable coordinates."""

    default_stage = "geometry_metrics"
    default_code = "INVALID_INPUT"


class EntryTooLargeError(ValidationError):
    """Raised when a single archive entry exceeds the uncompressed size limit."""

    default_stage = "extract_archive"
    default_code = "ENTRY_TOO_LARGE"


class UploadTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    default_stage = "ingress"
    default_code = "UPLOAD_TOO_LARGE"

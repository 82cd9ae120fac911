"""Pipeline configuration loaded from environment variables.

All configuration values have sensible defaults.  Azure Functions app
settings (or ``local.settings.json`` for local dev) are the source of
truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so bad configuration is caught at startup rather than
    on the first upload.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from polygon_labeler.core.exceptions import PipelineError
from polygon_labeler.utils.coordinate_text import DEFAULT_COPY_PRECISION, DEFAULT_PREVIEW_PRECISION

DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024
DEFAULT_MAX_ENTRY_BYTES = 50 * 1024 * 1024
MAX_PRECISION = 15


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        self.message = message
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class LabelerConfig:
    """Immutable labeller configuration.

    Loaded once at function startup and passed to the file pipeline.

    Attributes:
        max_upload_bytes: Largest accepted upload (GeoJSON or ZIP), in bytes.
        max_entry_bytes: Largest accepted uncompressed KML entry inside a ZIP.
        label_timezone: IANA zone used for the label date stamp; empty means
            the process's local time zone.
        copy_precision: Decimal places in the copy-ready coordinate text.
        preview_precision: Decimal places in the short coordinate preview.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES
    label_timezone: str = ""
    copy_precision: int = DEFAULT_COPY_PRECISION
    preview_precision: int = DEFAULT_PREVIEW_PRECISION

    @classmethod
    def from_env(cls) -> LabelerConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or the time
                zone name is unknown.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``MAX_UPLOAD_BYTES=abc``).
        """
        config = cls(
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))),
            max_entry_bytes=int(os.getenv("MAX_ENTRY_BYTES", str(DEFAULT_MAX_ENTRY_BYTES))),
            label_timezone=os.getenv("LABEL_TIMEZONE", "").strip(),
            copy_precision=int(os.getenv("COPY_PRECISION", str(DEFAULT_COPY_PRECISION))),
            preview_precision=int(os.getenv("PREVIEW_PRECISION", str(DEFAULT_PREVIEW_PRECISION))),
        )
        _validate(config)
        return config


def _validate(config: LabelerConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_upload_bytes <= 0:
        raise ConfigValidationError(
            "MAX_UPLOAD_BYTES",
            config.max_upload_bytes,
            "must be > 0 (bytes)",
        )

    if config.max_entry_bytes <= 0:
        raise ConfigValidationError(
            "MAX_ENTRY_BYTES",
            config.max_entry_bytes,
            "must be > 0 (bytes)",
        )

    if not 0 <= config.copy_precision <= MAX_PRECISION:
        raise ConfigValidationError(
            "COPY_PRECISION",
            config.copy_precision,
            f"must be between 0 and {MAX_PRECISION} (decimal places)",
        )

    if not 0 <= config.preview_precision <= MAX_PRECISION:
        raise ConfigValidationError(
            "PREVIEW_PRECISION",
            config.preview_precision,
            f"must be between 0 and {MAX_PRECISION} (decimal places)",
        )

    if config.label_timezone:
        try:
            ZoneInfo(config.label_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigValidationError(
                "LABEL_TIMEZONE",
                config.label_timezone,
                "must be an IANA time zone name (e.g. America/Sao_Paulo) or empty",
            ) from exc

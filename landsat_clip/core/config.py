"""Pipeline configuration loaded from environment variables.

Per-run inputs (directories, mask, datasets) come from the command line
and live in ``ClipRequest``; the knobs here describe conventions that
rarely change between runs: the mask inflation margin and the Landsat
metadata naming scheme.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, before any file is touched.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Any

from landsat_clip.core.constants import (
    DEFAULT_MARGIN_M,
    METADATA_SUFFIX,
    RASTER_EXTENSION,
    SCENE_ID_LENGTH,
)
from landsat_clip.core.exceptions import PipelineError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


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
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ClipSettings:
    """Immutable pipeline settings.

    Loaded once at startup and threaded through the pipeline.

    Attributes:
        margin_m: Distance added on every side of the mask extent.
        metadata_prefix_length: Number of leading filename characters
            that form the scene identifier.
        metadata_suffix: Appended to the scene identifier to name the
            metadata file.
        raster_extension: Only files with exactly this extension are clipped.
        log_level: Root logging level name.
    """

    margin_m: float = DEFAULT_MARGIN_M
    metadata_prefix_length: int = SCENE_ID_LENGTH
    metadata_suffix: str = METADATA_SUFFIX
    raster_extension: str = RASTER_EXTENSION
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ClipSettings:
        """Load and validate settings from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a numeric
                variable cannot be parsed.
        """
        config = cls(
            margin_m=_env_number("CLIP_MARGIN_M", float, DEFAULT_MARGIN_M),
            metadata_prefix_length=_env_number(
                "CLIP_METADATA_PREFIX_LENGTH", int, SCENE_ID_LENGTH
            ),
            metadata_suffix=os.getenv("CLIP_METADATA_SUFFIX", METADATA_SUFFIX),
            raster_extension=os.getenv("CLIP_RASTER_EXTENSION", RASTER_EXTENSION),
            log_level=os.getenv("CLIP_LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config

    @property
    def logging_level(self) -> int:
        """Numeric ``logging`` level for ``log_level``."""
        return logging.getLevelName(self.log_level)


def _env_number(key: str, kind: type, default: Any) -> Any:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigValidationError(key, raw, f"must be a {kind.__name__}") from exc


def _validate(config: ClipSettings) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not math.isfinite(config.margin_m):
        raise ConfigValidationError(
            "CLIP_MARGIN_M",
            config.margin_m,
            "must be a finite number (map units)",
        )

    if config.margin_m < 0:
        raise ConfigValidationError(
            "CLIP_MARGIN_M",
            config.margin_m,
            "must be >= 0 (map units)",
        )

    if config.metadata_prefix_length <= 0:
        raise ConfigValidationError(
            "CLIP_METADATA_PREFIX_LENGTH",
            config.metadata_prefix_length,
            "must be > 0 (characters)",
        )

    if not config.metadata_suffix:
        raise ConfigValidationError(
            "CLIP_METADATA_SUFFIX",
            config.metadata_suffix,
            "must not be empty",
        )

    if not config.raster_extension.startswith("."):
        raise ConfigValidationError(
            "CLIP_RASTER_EXTENSION",
            config.raster_extension,
            "must start with '.'",
        )

    if config.log_level not in _LOG_LEVELS:
        raise ConfigValidationError(
            "CLIP_LOG_LEVEL",
            config.log_level,
            f"must be one of {', '.join(_LOG_LEVELS)}",
        )

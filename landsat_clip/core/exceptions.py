"""Unified pipeline exception taxonomy.

Every domain exception inherits from ``PipelineError`` and carries a
``stage`` and a machine-readable ``code`` so the CLI and the run record
report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError`` — bad user input (flags, CRS strings).
- ``PermanentError``  — unrecoverable domain failures (missing paths,
  unreadable mask, malformed metadata, raster engine failure).

Nothing in the pipeline is retried: every error is terminal for the run
unless keep-going mode records it and moves on to the next file.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and the run record.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"validate_args"``, ``"clip"``).
        code: Machine-readable error code (e.g. ``"CLIP_FAILED"``).
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
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Input validation failure."""


class PermanentError(PipelineError):
    """Unrecoverable domain failure."""


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------


class ArgumentError(ValidationError):
    """Missing or invalid required argument, or a failed conversion."""

    default_stage = "validate_args"
    default_code = "INVALID_ARGUMENT"


class CRSError(ValidationError):
    """CRS string is not of the form ``EPSG:<int>``."""

    default_stage = "resolve_crs"
    default_code = "INVALID_CRS"


class PathError(PermanentError):
    """A required directory or file does not exist.

    Attributes:
        path: The offending path.
    """

    default_stage = "validate_args"
    default_code = "PATH_NOT_FOUND"

    def __init__(self, message: str = "", *, path: str = "", **kwargs: str) -> None:
        self.path = path
        super().__init__(message, **kwargs)


class MetadataNotFoundError(PathError):
    """Scene metadata file is missing or cannot be opened."""

    default_stage = "read_metadata"
    default_code = "METADATA_NOT_FOUND"


class MetadataError(PermanentError):
    """Scene metadata file exists but cannot be parsed."""

    default_stage = "read_metadata"
    default_code = "METADATA_PARSE_FAILED"


class ExtentError(PermanentError):
    """Mask layer cannot be read or has no usable geometry."""

    default_stage = "compute_extent"
    default_code = "EXTENT_FAILED"


class ClipError(PermanentError):
    """The raster engine failed to clip a file."""

    default_stage = "clip"
    default_code = "CLIP_FAILED"

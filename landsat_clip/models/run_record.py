"""Pydantic audit record of one clipping run.

The record is the "flight recorder" for a run: what was requested, which
extent and CRS were used, which files were written and what went wrong.
``--report`` writes it as JSON next to the outputs.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

# Schema version for forward compatibility
SCHEMA_VERSION = "clip-run-v1"


class ClippedBand(BaseModel):
    """One successfully clipped band file.

    Attributes:
        dataset: Dataset name whose filter matched the file.
        input_path: Source GeoTIFF.
        output_path: Clipped GeoTIFF.
        epsg: EPSG code the output was tagged with.
        metadata_path: Scene metadata that supplied the CRS, if any.
    """

    dataset: str
    input_path: str
    output_path: str
    epsg: int
    metadata_path: str = ""


class ClipRunRecord(BaseModel):
    """Top-level record of a pipeline run.

    Attributes:
        schema_version: Schema identifier.
        started_at: Run start (ISO 8601, UTC).
        finished_at: Run end (ISO 8601, UTC), empty while running.
        duration_s: Wall-clock duration in seconds.
        input_directory: Scanned directory.
        output_directory: Destination directory.
        mask_path: Vector mask used for the extent.
        datasets: Dataset names in processing order.
        bounding_box: Inflated ``[min_x, min_y, max_x, max_y]``.
        initial_crs: CRS supplied on the command line.
        final_crs: Running CRS after the last processed file.
        status: ``"running"``, ``"success"``, ``"partial"`` or ``"failed"``.
        outputs: Clipped band files, in processing order.
        skipped: Band files skipped for having the wrong extension.
        errors: Structured error dicts (see ``PipelineError.to_error_dict``).
    """

    schema_version: str = Field(default=SCHEMA_VERSION, alias="$schema")
    started_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    finished_at: str = ""
    duration_s: float = 0.0
    input_directory: str = ""
    output_directory: str = ""
    mask_path: str = ""
    datasets: list[str] = Field(default_factory=list)
    bounding_box: list[float] = Field(default_factory=list)
    initial_crs: str = ""
    final_crs: str = ""
    status: str = "running"
    outputs: list[ClippedBand] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    errors: list[dict[str, Any]] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def finish(self, duration_s: float) -> None:
        """Stamp the end time and derive ``status`` from outputs and errors."""
        self.finished_at = datetime.now(UTC).isoformat()
        self.duration_s = round(duration_s, 3)
        if not self.errors:
            self.status = "success"
        elif self.outputs:
            self.status = "partial"
        else:
            self.status = "failed"

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a JSON string using the ``$schema`` alias."""
        return self.model_dump_json(indent=indent, by_alias=True)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict."""
        return self.model_dump(by_alias=True)  # type: ignore[return-value]

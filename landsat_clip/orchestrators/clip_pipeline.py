"""Clip pipeline orchestrator.

Coordinates one run over an input directory:

1. Validate arguments: required fields, existing directories, datasets
2. Compute extent: read the mask once and inflate it
3. Scan directory: sorted listing for a reproducible order
4. Process files: for every dataset, for every file:
   pattern filter → band filter → extension filter → metadata lookup →
   sticky CRS resolution → EPSG parse → clip

Failure policy:
    Fail-fast by default: the first ``PipelineError`` stops the run and
    propagates.  Outputs already written stay on disk and nothing is
    retried.  With ``keep_going`` set, errors raised while processing an
    individual file are recorded in the run record and the loop moves on;
    errors in steps 1-3 always abort.

The running CRS is a local accumulator of ``run()``: each file's
resolution starts from the CRS the previous file ended with.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import TYPE_CHECKING

from landsat_clip.core.config import ClipSettings
from landsat_clip.core.constants import BAND_SEPARATOR
from landsat_clip.core.exceptions import ArgumentError, ClipError, PathError, PipelineError
from landsat_clip.engines.rasterio_engine import FionaExtentReader, RasterioClipEngine
from landsat_clip.models.run_record import ClippedBand, ClipRunRecord
from landsat_clip.processing.crs import require_epsg, resolve_crs
from landsat_clip.processing.extent import inflate, read_mask_extent
from landsat_clip.processing.metadata import read_scene_metadata
from landsat_clip.utils.paths import (
    directory_exists,
    join_dir,
    list_directory,
    matches_pattern,
    split_path,
)

if TYPE_CHECKING:
    from landsat_clip.engines.base import RasterClipEngine, VectorExtentReader
    from landsat_clip.models.bbox import BoundingBox
    from landsat_clip.models.request import ClipRequest

logger = logging.getLogger("landsat_clip.orchestrators.clip_pipeline")


class PipelineState(enum.Enum):
    """Lifecycle state of a pipeline run."""

    INIT = "init"
    VALIDATE_ARGS = "validate_args"
    COMPUTE_EXTENT = "compute_extent"
    SCAN_DIRECTORY = "scan_directory"
    PROCESS_FILES = "process_files"
    DONE = "done"
    FAILED = "failed"


class ClipPipeline:
    """Runs one clipping request against an input directory.

    Example usage::

        pipeline = ClipPipeline(request, settings=ClipSettings.from_env())
        record = pipeline.run()
    """

    def __init__(
        self,
        request: ClipRequest,
        *,
        settings: ClipSettings | None = None,
        clip_engine: RasterClipEngine | None = None,
        extent_reader: VectorExtentReader | None = None,
    ) -> None:
        self.request = request
        self.settings = settings or ClipSettings()
        self.clip_engine = clip_engine or RasterioClipEngine()
        self.extent_reader = extent_reader or FionaExtentReader()
        self.state = PipelineState.INIT
        self.record: ClipRunRecord | None = None

    def run(self) -> ClipRunRecord:
        """Execute the run.

        Returns:
            The run record.  Its ``status`` is ``"success"`` unless
            keep-going mode recorded per-file errors.

        Raises:
            PipelineError: On the first hard error (any error in fail-fast
                mode, setup errors in keep-going mode).
        """
        request = self.request
        start_time = time.monotonic()
        record = ClipRunRecord(
            input_directory=request.input_directory,
            output_directory=request.output_directory,
            mask_path=request.mask_path,
            initial_crs=request.default_crs,
            final_crs=request.default_crs,
        )
        self.record = record

        try:
            self._transition(PipelineState.VALIDATE_ARGS)
            datasets = self._validate()
            record.datasets = datasets

            self._transition(PipelineState.COMPUTE_EXTENT)
            bbox = inflate(
                read_mask_extent(request.mask_path, self.extent_reader),
                self.settings.margin_m,
            )
            record.bounding_box = bbox.to_list()
            logger.info(
                "Extent | minX=%.15f | minY=%.15f | maxX=%.15f | maxY=%.15f",
                bbox.min_x,
                bbox.min_y,
                bbox.max_x,
                bbox.max_y,
            )

            self._transition(PipelineState.SCAN_DIRECTORY)
            filenames = self._scan()

            self._transition(PipelineState.PROCESS_FILES)
            running_crs = request.default_crs
            for dataset in datasets:
                logger.info("Processing dataset | dataset=%s", dataset)
                for filename in filenames:
                    running_crs = self._process_file(dataset, filename, bbox, running_crs, record)
                    record.final_crs = running_crs

        except PipelineError as exc:
            self._transition(PipelineState.FAILED)
            record.errors.append(exc.to_error_dict())
            record.finish(time.monotonic() - start_time)
            logger.error(
                "Pipeline failed | stage=%s | code=%s | error=%s",
                exc.stage,
                exc.code,
                exc.message,
            )
            raise

        record.finish(time.monotonic() - start_time)
        self._transition(PipelineState.DONE)
        logger.info(
            "Pipeline completed | status=%s | clipped=%d | errors=%d | duration=%.2fs",
            record.status,
            len(record.outputs),
            len(record.errors),
            record.duration_s,
        )
        return record

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _validate(self) -> list[str]:
        """Check required fields and directories; return dataset names.

        Raises:
            ArgumentError: If a required field is empty or no dataset
                name remains after splitting.
            PathError: If the input or output directory does not exist.
        """
        request = self.request
        required = (
            ("Input directory path (--idir)", request.input_directory),
            ("Output directory path (--odir)", request.output_directory),
            ("Source CRS (--source_crs)", request.default_crs),
            ("Mask (--mask)", request.mask_path),
            ("Datasets (--datasets)", request.datasets),
        )
        for label, value in required:
            if not value:
                msg = f"{label} is required."
                raise ArgumentError(msg)

        for label, directory in (
            ("Input", request.input_directory),
            ("Output", request.output_directory),
        ):
            if not directory_exists(directory):
                msg = f"{label} directory not found: {directory}"
                raise PathError(msg, path=directory)

        datasets = request.dataset_names
        if not datasets:
            msg = f"No datasets provided in {request.datasets!r}"
            raise ArgumentError(msg)

        logger.info(
            "Run parameters | idir=%s | odir=%s | source_crs=%s | mask=%s | "
            "datasets=%s | pattern=%s | label=%s | keep_going=%s",
            request.input_directory,
            request.output_directory,
            request.default_crs,
            request.mask_path,
            " ".join(datasets),
            request.filename_pattern,
            request.output_label,
            request.keep_going,
        )
        return datasets

    def _scan(self) -> list[str]:
        try:
            filenames = list_directory(self.request.input_directory)
        except OSError as exc:
            msg = f"Cannot list input directory: {self.request.input_directory} ({exc})"
            raise PathError(msg, path=self.request.input_directory, stage="scan_directory") from exc
        logger.info("Directory scanned | entries=%d", len(filenames))
        return filenames

    def _process_file(
        self,
        dataset: str,
        filename: str,
        bbox: BoundingBox,
        running_crs: str,
        record: ClipRunRecord,
    ) -> str:
        """Filter, resolve and clip one file.

        Returns:
            The running CRS after this file.
        """
        request = self.request

        if not matches_pattern(filename, request.filename_pattern):
            return running_crs
        if not matches_pattern(filename, BAND_SEPARATOR + dataset):
            return running_crs

        parts = split_path(filename)
        logger.debug(
            "Input filename | file=%s | directory=%s | basename=%s | stem=%s | extension=%s",
            filename,
            parts.directory,
            parts.basename,
            parts.stem,
            parts.extension,
        )

        if parts.extension != self.settings.raster_extension:
            logger.info(
                "Skipping file | file=%s | reason=%r extension expected",
                filename,
                self.settings.raster_extension,
            )
            record.skipped.append(filename)
            return running_crs

        try:
            metadata_path, running_crs = self._resolve_file_crs(filename, running_crs)
            epsg = require_epsg(running_crs)

            in_file = join_dir(request.input_directory, parts.stem + parts.extension)
            out_file = join_dir(
                request.output_directory,
                parts.stem + request.output_label + parts.extension,
            )
            logger.info(
                "Clipping | dataset=%s | in=%s | out=%s | epsg=%d",
                dataset,
                in_file,
                out_file,
                epsg,
            )

            if not self.clip_engine.clip(in_file, out_file, bbox, epsg):
                msg = f"Failed to clip: {filename}"
                raise ClipError(msg)

        except PipelineError as exc:
            if not request.keep_going:
                raise
            record.errors.append({**exc.to_error_dict(), "file": filename})
            logger.error(
                "File failed, continuing | file=%s | code=%s | error=%s",
                filename,
                exc.code,
                exc.message,
            )
            return running_crs

        record.outputs.append(
            ClippedBand(
                dataset=dataset,
                input_path=in_file,
                output_path=out_file,
                epsg=epsg,
                metadata_path=metadata_path,
            )
        )
        return running_crs

    def _resolve_file_crs(self, filename: str, running_crs: str) -> tuple[str, str]:
        """Apply scene metadata (if any) to the running CRS.

        Returns:
            ``(metadata_path, running_crs)``; the path is empty when no
            usable metadata was found.

        Raises:
            MetadataError: If the metadata file has a malformed zone.
        """
        found = read_scene_metadata(
            self.request.input_directory,
            filename,
            prefix_length=self.settings.metadata_prefix_length,
            suffix=self.settings.metadata_suffix,
        )
        if found is None:
            logger.warning(
                "Metadata not found or extraction failed | file=%s | using source CRS=%s",
                filename,
                running_crs,
            )
            return "", running_crs

        metadata_path, metadata = found
        logger.info(
            "Metadata | path=%s | projection=%s | zone=%d",
            metadata_path,
            metadata.projection_name,
            metadata.utm_zone,
        )
        return metadata_path, resolve_crs(running_crs, metadata)

    def _transition(self, state: PipelineState) -> None:
        logger.debug("Pipeline state | %s -> %s", self.state.value, state.value)
        self.state = state

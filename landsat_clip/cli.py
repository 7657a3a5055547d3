"""Command-line interface for the Landsat band clipper.

All business logic lives in the ``landsat_clip`` package; this module is
purely the wiring between ``argparse`` and ``ClipPipeline``.

Exit codes: 0 on success, 1 on any argument, path, metadata, extent,
CRS or clip failure (and on a keep-going run that recorded errors).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from landsat_clip import __version__
from landsat_clip.core.config import ClipSettings, ConfigValidationError
from landsat_clip.core.exceptions import ArgumentError, PipelineError
from landsat_clip.models.request import ClipRequest
from landsat_clip.orchestrators.clip_pipeline import ClipPipeline

if TYPE_CHECKING:
    from landsat_clip.models.run_record import ClipRunRecord

logger = logging.getLogger("landsat_clip.cli")

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    # Required flags are checked by the pipeline so that a missing one
    # exits 1 with a named error.
    parser = _ArgumentParser(
        prog="landsat-clip",
        description="Clip TIF file bands from a single Landsat scene.",
    )
    parser.add_argument("-i", "--idir", metavar="DIR", help="Input directory to scan *.tif files")
    parser.add_argument("-o", "--odir", metavar="DIR", help="Output directory to write *.tif files")
    parser.add_argument(
        "-c",
        "--source_crs",
        metavar="STR",
        help='Source coordinate reference system (e.g. "EPSG:32615")',
    )
    parser.add_argument("-m", "--mask", metavar="FILE", help="Mask file (*.shp)")
    parser.add_argument("-d", "--datasets", metavar="LIST", help="List of datasets (comma separated)")
    parser.add_argument("-p", "--pattern", metavar="STR", default="", help="Pattern to filter files to process")
    parser.add_argument("-n", "--label", metavar="STR", default="", help="Label for output files")
    parser.add_argument("-g", "--debug", action="store_true", help="Debug logging")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Record per-file errors and continue instead of stopping at the first one",
    )
    parser.add_argument("--report", metavar="FILE", help="Write the run record as JSON to FILE")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ClipSettings.from_env()
    except ConfigValidationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.logging_level,
        format=LOG_FORMAT,
    )

    request = ClipRequest.from_args(args)
    pipeline = ClipPipeline(request, settings=settings)

    try:
        record = pipeline.run()
    except PipelineError as exc:
        print(f"ERROR: {exc.message}", file=sys.stderr)
        if isinstance(exc, ArgumentError):
            parser.print_usage(sys.stderr)
        if args.report and pipeline.record is not None:
            _write_report(args.report, pipeline.record)
        return EXIT_FAILURE

    if args.report and not _write_report(args.report, record):
        return EXIT_FAILURE

    if record.status != "success":
        print(
            f"ERROR: {len(record.errors)} file(s) failed, {len(record.outputs)} clipped.",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    logger.info("Clipped %d file(s)", len(record.outputs))
    return EXIT_SUCCESS


def _write_report(path: str, record: ClipRunRecord) -> bool:
    try:
        Path(path).write_text(record.to_json(), encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot write report | path=%s | error=%s", path, exc)
        return False
    logger.info("Run record written | path=%s", path)
    return True


if __name__ == "__main__":
    sys.exit(main())

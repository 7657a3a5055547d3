"""Per-run clip request assembled from command-line arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from landsat_clip.utils.paths import split_by_commas

if TYPE_CHECKING:
    import argparse


@dataclass(frozen=True, slots=True)
class ClipRequest:
    """Immutable description of one clipping run.

    Required fields are not validated here; ``ClipPipeline`` checks them
    so that a missing flag surfaces as an ``ArgumentError``.

    Attributes:
        input_directory: Directory scanned for band files and metadata.
        output_directory: Directory receiving the clipped files.
        default_crs: Starting CRS, ``EPSG:<int>``.
        mask_path: Single-feature vector mask.
        datasets: Comma-separated dataset (band) names.
        filename_pattern: Optional substring every processed file must contain.
        output_label: Inserted between stem and extension of output names.
        keep_going: Record per-file errors and continue instead of aborting.
    """

    input_directory: str = ""
    output_directory: str = ""
    default_crs: str = ""
    mask_path: str = ""
    datasets: str = ""
    filename_pattern: str = ""
    output_label: str = ""
    keep_going: bool = False

    @property
    def dataset_names(self) -> list[str]:
        """Dataset names in declared order (duplicates kept)."""
        return split_by_commas(self.datasets)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ClipRequest:
        """Build a request from parsed CLI arguments."""
        return cls(
            input_directory=args.idir or "",
            output_directory=args.odir or "",
            default_crs=args.source_crs or "",
            mask_path=args.mask or "",
            datasets=args.datasets or "",
            filename_pattern=args.pattern or "",
            output_label=args.label or "",
            keep_going=bool(args.keep_going),
        )

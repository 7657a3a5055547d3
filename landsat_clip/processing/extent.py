"""Mask extent computation.

The mask is expected to hold exactly one polygon feature; only the first
feature of the first layer is read.  Its envelope is inflated by a fixed
margin in the mask's own map units, so the mask must already be in the
projected CRS of the scenes (metres for UTM).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from landsat_clip.core.constants import DEFAULT_MARGIN_M
from landsat_clip.models.bbox import BoundingBox

if TYPE_CHECKING:
    from landsat_clip.engines.base import VectorExtentReader

logger = logging.getLogger("landsat_clip.processing.extent")


def read_mask_extent(mask_path: str, reader: VectorExtentReader | None = None) -> BoundingBox:
    """Envelope of the first feature of *mask_path*.

    Args:
        mask_path: Vector dataset (shapefile, GeoPackage, GeoJSON, ...).
        reader: Envelope reader; defaults to the fiona-backed reader.

    Returns:
        The tight (uninflated) bounding box.

    Raises:
        ExtentError: If the mask cannot be opened or has no layer,
            feature or geometry.
    """
    if reader is None:
        from landsat_clip.engines.rasterio_engine import FionaExtentReader

        reader = FionaExtentReader()

    xmin, xmax, ymin, ymax = reader.read_first_feature_envelope(mask_path)
    bbox = BoundingBox(min_x=xmin, min_y=ymin, max_x=xmax, max_y=ymax)
    logger.info(
        "Mask envelope | path=%s | xmin=%.6f | ymin=%.6f | xmax=%.6f | ymax=%.6f",
        mask_path,
        xmin,
        ymin,
        xmax,
        ymax,
    )
    return bbox


def inflate(bbox: BoundingBox, margin: float = DEFAULT_MARGIN_M) -> BoundingBox:
    """Grow *bbox* by *margin* on every side."""
    return BoundingBox(
        min_x=bbox.min_x - margin,
        min_y=bbox.min_y - margin,
        max_x=bbox.max_x + margin,
        max_y=bbox.max_y + margin,
    )

"""Abstract engine interfaces.

Defines the two capabilities the pipeline needs from a geospatial I/O
stack.  The pipeline never knows which concrete engine is behind them,
so tests drive it with in-memory fakes.

- ``RasterClipEngine.clip`` — crop a raster to a window and tag its CRS.
- ``VectorExtentReader.read_first_feature_envelope`` — envelope of the
  first feature of a vector mask.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from landsat_clip.models.bbox import BoundingBox


class RasterClipEngine(abc.ABC):
    """Crops a raster to a bounding box and assigns a CRS.

    Example usage::

        engine = RasterioClipEngine()
        if not engine.clip("in/B4.tif", "out/B4_clip.tif", bbox, 32615):
            raise ClipError(...)
    """

    @abc.abstractmethod
    def clip(self, in_path: str, out_path: str, bbox: BoundingBox, epsg: int) -> bool:
        """Write the part of *in_path* inside *bbox* to *out_path*.

        The window is taken in ``bbox.projwin`` order (upper-left x,
        upper-left y, lower-right x, lower-right y).  The output is tagged
        with *epsg*; pixels are not resampled.

        Args:
            in_path: Source raster, opened read-only.
            out_path: Destination raster (overwritten).
            bbox: Window in the source raster's map units.
            epsg: EPSG code assigned to the output.

        Returns:
            ``True`` on success, ``False`` on any failure (unreadable
            input, invalid EPSG, empty window, write failure).
        """


class VectorExtentReader(abc.ABC):
    """Reads the envelope of the first feature of a vector dataset."""

    @abc.abstractmethod
    def read_first_feature_envelope(self, path: str) -> tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` of the first feature's geometry.

        Only the first feature of the first layer is considered.

        Raises:
            ExtentError: If the dataset cannot be opened, has no layer,
                no feature, or the first feature has no geometry.
        """

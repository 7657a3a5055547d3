"""rasterio / fiona implementations of the engine interfaces.

``RasterioClipEngine`` reproduces a ``gdal_translate -projwin ... -a_srs``
call: the source is windowed to the bounding box, the output keeps the
source pixels and profile, and the CRS is *assigned* (not warped).
Windows that fall partially outside the raster are filled with nodata;
windows entirely outside are a failure.

``FionaExtentReader`` reads the first feature of the first layer and
computes its envelope with shapely.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from landsat_clip.core.exceptions import ExtentError
from landsat_clip.engines.base import RasterClipEngine, VectorExtentReader

if TYPE_CHECKING:
    from landsat_clip.models.bbox import BoundingBox

logger = logging.getLogger("landsat_clip.engines.rasterio_engine")

# Creation options that describe the source layout, not the clipped output
_LAYOUT_KEYS = ("tiled", "blockxsize", "blockysize")

# Fraction of a pixel absorbed before flooring a window offset
_OFFSET_TOLERANCE = 0.001


class RasterioClipEngine(RasterClipEngine):
    """Window crop + CRS assignment with rasterio."""

    def clip(self, in_path: str, out_path: str, bbox: BoundingBox, epsg: int) -> bool:
        import rasterio
        from rasterio.crs import CRS
        from rasterio.errors import RasterioError

        try:
            dst_crs = CRS.from_epsg(epsg)

            with rasterio.open(in_path) as src:
                window = _projwin_to_window(bbox, src)
                if window is None:
                    logger.warning(
                        "Clip window outside raster | in=%s | projwin=%s",
                        in_path,
                        bbox.projwin,
                    )
                    return False

                inside = (
                    window.col_off >= 0
                    and window.row_off >= 0
                    and window.col_off + window.width <= src.width
                    and window.row_off + window.height <= src.height
                )
                if inside:
                    data = src.read(window=window)
                else:
                    fill = src.nodata if src.nodata is not None else 0
                    data = src.read(window=window, boundless=True, fill_value=fill)

                profile = _output_profile(src.profile, data, src.window_transform(window), dst_crs)

            with rasterio.open(out_path, "w", **profile) as dst:
                dst.write(data)

        except (RasterioError, OSError, ValueError) as exc:
            logger.warning(
                "Clip failed | in=%s | out=%s | epsg=%d | error=%s",
                in_path,
                out_path,
                epsg,
                exc,
            )
            return False

        logger.debug(
            "Clip written | out=%s | size=%dx%d | epsg=%d",
            out_path,
            profile["width"],
            profile["height"],
            epsg,
        )
        return True


class FionaExtentReader(VectorExtentReader):
    """First-feature envelope with fiona + shapely."""

    def read_first_feature_envelope(self, path: str) -> tuple[float, float, float, float]:
        import fiona
        from fiona.errors import FionaError
        from shapely.geometry import shape

        try:
            layers = fiona.listlayers(path)
        except (FionaError, OSError, ValueError) as exc:
            msg = f"Cannot read mask: {path} ({exc})"
            raise ExtentError(msg) from exc

        if not layers:
            msg = f"Expected a single layer in mask: {path}"
            raise ExtentError(msg)
        if len(layers) > 1:
            logger.warning(
                "Mask has %d layers, using the first | path=%s | layer=%s",
                len(layers),
                path,
                layers[0],
            )

        try:
            with fiona.open(path, layer=layers[0]) as collection:
                logger.debug("Mask layer | path=%s | crs=%s", path, collection.crs)
                feature = next(iter(collection), None)
        except (FionaError, OSError, ValueError) as exc:
            msg = f"Cannot read mask: {path} ({exc})"
            raise ExtentError(msg) from exc

        if feature is None:
            msg = f"No features in mask: {path}"
            raise ExtentError(msg)

        geometry = feature.geometry
        if geometry is None:
            msg = f"No geometry in mask: {path}"
            raise ExtentError(msg)

        geom = shape(geometry)
        if geom.is_empty:
            msg = f"No geometry in mask: {path} (empty)"
            raise ExtentError(msg)

        min_x, min_y, max_x, max_y = geom.bounds
        return (min_x, max_x, min_y, max_y)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _projwin_to_window(bbox: BoundingBox, src: Any) -> Any:
    """Pixel window for ``bbox.projwin``, snapped to whole pixels.

    Offsets are floored with a 0.001 pixel tolerance and sizes rounded
    half up, matching nearest-neighbour ``gdal_translate -projwin``.

    Returns:
        A ``rasterio.windows.Window``, or ``None`` when the window is
        empty or does not overlap the raster.
    """
    from rasterio.windows import Window, from_bounds

    ulx, uly, lrx, lry = bbox.projwin
    exact = from_bounds(ulx, lry, lrx, uly, transform=src.transform)

    col_start = math.floor(exact.col_off + _OFFSET_TOLERANCE)
    row_start = math.floor(exact.row_off + _OFFSET_TOLERANCE)
    col_stop = col_start + math.floor(exact.width + 0.5)
    row_stop = row_start + math.floor(exact.height + 0.5)

    if col_stop <= col_start or row_stop <= row_start:
        return None
    if col_stop <= 0 or row_stop <= 0 or col_start >= src.width or row_start >= src.height:
        return None

    return Window(col_start, row_start, col_stop - col_start, row_stop - row_start)


def _output_profile(
    source_profile: dict[str, Any],
    data: Any,
    transform: Any,
    crs: Any,
) -> dict[str, Any]:
    profile = dict(source_profile)
    for key in _LAYOUT_KEYS:
        profile.pop(key, None)
    profile.update(
        driver="GTiff",
        count=data.shape[0],
        height=data.shape[1],
        width=data.shape[2],
        transform=transform,
        crs=crs,
    )
    return profile

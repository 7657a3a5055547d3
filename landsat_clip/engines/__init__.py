"""Geospatial engine adapters.

The pipeline talks only to the abstract interfaces in ``base``; the
rasterio/fiona implementations live in ``rasterio_engine``.
"""

from landsat_clip.engines.base import RasterClipEngine, VectorExtentReader
from landsat_clip.engines.rasterio_engine import FionaExtentReader, RasterioClipEngine

__all__ = [
    "FionaExtentReader",
    "RasterClipEngine",
    "RasterioClipEngine",
    "VectorExtentReader",
]

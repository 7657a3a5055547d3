"""Shared pipeline constants — single source of truth.

Centralises the Landsat naming conventions, EPSG arithmetic and margin
defaults used by the metadata resolver, CRS reconciler and pipeline.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# CRS strings and EPSG codes
# ---------------------------------------------------------------------------

EPSG_PREFIX: str = "EPSG:"
"""Literal prefix every CRS string must carry."""

INVALID_EPSG: int = -1
"""Sentinel returned when a CRS string cannot be resolved to an EPSG code."""

UTM_NORTH_EPSG_BASE: int = 32600
UTM_SOUTH_EPSG_BASE: int = 32700
MIN_UTM_ZONE: int = 1
MAX_UTM_ZONE: int = 60

# ---------------------------------------------------------------------------
# Landsat Collection-2 scene naming
# ---------------------------------------------------------------------------

SCENE_ID_LENGTH: int = 40
"""Length of a scene identifier, e.g. ``LC08_L2SP_021047_20250923_20251001_02_T1``."""

METADATA_SUFFIX: str = "_MTL.txt"

MAP_PROJECTION_KEY: str = "MAP_PROJECTION"
UTM_ZONE_KEY: str = "UTM_ZONE"

# ---------------------------------------------------------------------------
# Clipping
# ---------------------------------------------------------------------------

RASTER_EXTENSION: str = ".tif"

DEFAULT_MARGIN_M: float = 31.0
"""Mask extent inflation, in map units (metres for UTM scenes)."""

BAND_SEPARATOR: str = "_"
"""Prefix joined to a dataset name to build the band filename filter."""

DATASET_SEPARATOR: str = ","

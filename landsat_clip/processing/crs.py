"""CRS reconciliation between the user default and scene metadata.

The running CRS is *sticky*: once a scene's metadata yields a different
UTM zone, that zone's EPSG string replaces the running CRS for every
later file of the run, including files that have no metadata at all.
``resolve_crs`` is a pure step function; the pipeline threads its return
value into the next call::

    running = request.default_crs
    for name in files:
        running = resolve_crs(running, metadata_for(name))
"""

from __future__ import annotations

import logging
import re

from landsat_clip.core.constants import EPSG_PREFIX, INVALID_EPSG
from landsat_clip.core.exceptions import CRSError
from landsat_clip.models.scene import SceneMetadata
from landsat_clip.processing.metadata import epsg_from_utm_zone

logger = logging.getLogger("landsat_clip.processing.crs")

_INTEGER = re.compile(r"[+-]?\d+")


def resolve_crs(current_crs: str, metadata: SceneMetadata | None) -> str:
    """Return the CRS to use for this file and every later one.

    Args:
        current_crs: Running CRS carried over from the previous file
            (the user default for the first file).
        metadata: Parsed scene metadata, or ``None`` when not found.

    Returns:
        The zone-derived ``EPSG:`` string when *metadata* is complete,
        yields a valid zone and differs from *current_crs*; otherwise
        *current_crs* unchanged.
    """
    if metadata is None or not metadata.is_complete:
        return current_crs

    scene_crs = epsg_from_utm_zone(metadata.utm_zone)
    if scene_crs and scene_crs != current_crs:
        logger.info(
            "Updating CRS | from=%s | to=%s | projection=%s | zone=%d",
            current_crs,
            scene_crs,
            metadata.projection_name,
            metadata.utm_zone,
        )
        return scene_crs
    return current_crs


def parse_epsg(crs: str) -> int:
    """Parse ``"EPSG:<int>"`` into its integer code.

    Returns:
        The code, or ``INVALID_EPSG`` (-1) when the prefix is missing or
        the remainder is not an integer.
    """
    if not crs.startswith(EPSG_PREFIX):
        return INVALID_EPSG

    remainder = crs[len(EPSG_PREFIX) :].strip()
    if not _INTEGER.fullmatch(remainder):
        return INVALID_EPSG
    return int(remainder)


def require_epsg(crs: str) -> int:
    """Like ``parse_epsg`` but raise instead of returning the sentinel.

    Raises:
        CRSError: If *crs* cannot be resolved to an EPSG code.
    """
    code = parse_epsg(crs)
    if code == INVALID_EPSG:
        msg = f"Failed to get EPSG code from CRS {crs!r} (expected 'EPSG:<int>')"
        raise CRSError(msg)
    return code

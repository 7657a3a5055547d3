"""Scene metadata resolution.

Every Landsat Collection-2 band file starts with its 40-character scene
identifier, e.g.::

    LC08_L2SP_021047_20250923_20251001_02_T1_SR_B4.TIF
    LC08_L2SP_021047_20250923_20251001_02_T1_MTL.txt

The metadata file is found by truncating the band filename to that
prefix and appending ``_MTL.txt``.  Filenames shorter than the prefix are
used whole.  From the metadata only two keys are read::

    MAP_PROJECTION = "UTM"
    UTM_ZONE = 15

All Landsat scenes are delivered in northern-hemisphere UTM zones, so
the pipeline never asks for the southern EPSG range.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from landsat_clip.core.constants import (
    EPSG_PREFIX,
    MAP_PROJECTION_KEY,
    MAX_UTM_ZONE,
    METADATA_SUFFIX,
    MIN_UTM_ZONE,
    SCENE_ID_LENGTH,
    UTM_NORTH_EPSG_BASE,
    UTM_SOUTH_EPSG_BASE,
    UTM_ZONE_KEY,
)
from landsat_clip.core.exceptions import MetadataError, MetadataNotFoundError
from landsat_clip.models.scene import SceneMetadata
from landsat_clip.utils.paths import join_dir

logger = logging.getLogger("landsat_clip.processing.metadata")

# Leading integer; trailing characters are ignored
_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def locate_metadata_file(
    directory: str,
    tif_filename: str,
    *,
    prefix_length: int = SCENE_ID_LENGTH,
    suffix: str = METADATA_SUFFIX,
) -> str | None:
    """Return the companion metadata path of *tif_filename*, if it exists.

    Args:
        directory: Directory holding the band and metadata files.
        tif_filename: Band filename (no directory).
        prefix_length: Leading characters forming the scene identifier.
        suffix: Appended to the scene identifier.

    Returns:
        The metadata path, or ``None`` when no such file exists.
    """
    scene_id = tif_filename[:prefix_length]
    candidate = join_dir(directory, scene_id + suffix)
    if not Path(candidate).is_file():
        return None
    return candidate


def extract_projection_info(path: str) -> SceneMetadata:
    """Parse ``MAP_PROJECTION`` and ``UTM_ZONE`` from a metadata file.

    Scanning stops as soon as both values are found.  Keys that never
    appear keep their zero value.

    Raises:
        MetadataNotFoundError: If the file cannot be opened.
        MetadataError: If the ``UTM_ZONE`` value does not start with an integer.
    """
    projection = ""
    zone = 0

    try:
        lines = Path(path).read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        msg = f"Failed to open metadata file: {path}"
        raise MetadataNotFoundError(msg, path=path) from exc

    for raw_line in lines:
        line = raw_line.strip()

        if MAP_PROJECTION_KEY in line:
            projection = _strip_value(_value_after_equals(line))

        if UTM_ZONE_KEY in line:
            zone = _parse_zone(_value_after_equals(line), path)

        if projection and zone != 0:
            break

    return SceneMetadata(projection_name=projection, utm_zone=zone)


def epsg_from_utm_zone(zone: int, southern: bool = False) -> str:
    """Build a UTM ``EPSG:`` string, or ``""`` for zones outside 1-60.

    Examples:
        >>> epsg_from_utm_zone(15)
        'EPSG:32615'
        >>> epsg_from_utm_zone(15, southern=True)
        'EPSG:32715'
    """
    if zone < MIN_UTM_ZONE or zone > MAX_UTM_ZONE:
        return ""
    base = UTM_SOUTH_EPSG_BASE if southern else UTM_NORTH_EPSG_BASE
    return f"{EPSG_PREFIX}{base + zone}"


def read_scene_metadata(
    directory: str,
    tif_filename: str,
    *,
    prefix_length: int = SCENE_ID_LENGTH,
    suffix: str = METADATA_SUFFIX,
) -> tuple[str, SceneMetadata] | None:
    """Locate and parse the metadata of *tif_filename*.

    Returns:
        ``(metadata_path, metadata)`` when a file was found and both keys
        were parsed, otherwise ``None``.

    Raises:
        MetadataError: If the file exists but its zone is malformed.
    """
    path = locate_metadata_file(
        directory, tif_filename, prefix_length=prefix_length, suffix=suffix
    )
    if path is None:
        return None

    try:
        metadata = extract_projection_info(path)
    except MetadataNotFoundError as exc:
        logger.warning("%s", exc)
        return None

    if not metadata.is_complete:
        logger.debug(
            "Incomplete metadata | path=%s | projection=%r | zone=%d",
            path,
            metadata.projection_name,
            metadata.utm_zone,
        )
        return None

    return path, metadata


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _value_after_equals(line: str) -> str:
    """Right-hand side of the first ``=``; the whole line if there is none."""
    _key, sep, value = line.partition("=")
    return value if sep else line


def _parse_zone(value: str, path: str) -> int:
    """Integer prefix of *value*, e.g. ``"15"`` for ``" 15abc"``.

    Raises:
        MetadataError: If *value* does not start with an integer.
    """
    match = _LEADING_INTEGER.match(value)
    if match is None:
        msg = f"Malformed {UTM_ZONE_KEY} value {value.strip()!r} in {path}"
        raise MetadataError(msg)
    return int(match.group(1))


def _strip_value(value: str) -> str:
    """Trim whitespace, then one leading and one trailing double quote."""
    value = value.strip(" \t")
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value

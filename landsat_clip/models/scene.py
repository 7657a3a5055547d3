"""Projection information parsed from a Landsat ``_MTL.txt`` file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SceneMetadata:
    """Map projection declared by a scene's metadata file.

    The zero value (empty projection, zone 0) means nothing was parsed.

    Attributes:
        projection_name: Value of ``MAP_PROJECTION`` without quotes (e.g. ``"UTM"``).
        utm_zone: Value of ``UTM_ZONE``.
    """

    projection_name: str = ""
    utm_zone: int = 0

    @property
    def is_complete(self) -> bool:
        """True when both the projection and the zone were found."""
        return bool(self.projection_name) and self.utm_zone != 0

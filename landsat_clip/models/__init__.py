"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- ClipRequest: Per-run command-line inputs
- BoundingBox: Inflated mask extent shared by every clip
- SceneMetadata: Projection info parsed from a scene's ``_MTL.txt``
- ClipRunRecord: Audit record of one pipeline run
"""

from landsat_clip.models.bbox import BoundingBox
from landsat_clip.models.request import ClipRequest
from landsat_clip.models.run_record import ClippedBand, ClipRunRecord
from landsat_clip.models.scene import SceneMetadata

__all__ = [
    "BoundingBox",
    "ClipRequest",
    "ClipRunRecord",
    "ClippedBand",
    "SceneMetadata",
]

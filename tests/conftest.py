"""Shared pytest fixtures for the landsat_clip test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from landsat_clip.core.exceptions import ExtentError
from landsat_clip.engines.base import RasterClipEngine, VectorExtentReader
from landsat_clip.models.bbox import BoundingBox

# ---------------------------------------------------------------------------
# Landsat naming
# ---------------------------------------------------------------------------

#: 40-character Collection-2 scene identifier.
SCENE_ID = "LC08_L2SP_021047_20250923_20251001_02_T1"

MTL_TEMPLATE = """GROUP = LANDSAT_METADATA_FILE
  GROUP = PROJECTION_ATTRIBUTES
    MAP_PROJECTION = "{projection}"
    DATUM = "WGS84"
    ELLIPSOID = "WGS84"
    UTM_ZONE = {zone}
    GRID_CELL_SIZE_REFLECTIVE = 30.00
  END_GROUP = PROJECTION_ATTRIBUTES
END_GROUP = LANDSAT_METADATA_FILE
END
"""


# ---------------------------------------------------------------------------
# Fake engines
# ---------------------------------------------------------------------------


class FakeClipEngine(RasterClipEngine):
    """Records every clip call; fails for basenames listed in ``fail_on``."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str, BoundingBox, int]] = []
        self.fail_on = fail_on or set()

    def clip(self, in_path: str, out_path: str, bbox: BoundingBox, epsg: int) -> bool:
        self.calls.append((in_path, out_path, bbox, epsg))
        return Path(in_path).name not in self.fail_on

    @property
    def epsgs(self) -> list[int]:
        return [call[3] for call in self.calls]

    @property
    def inputs(self) -> list[str]:
        return [Path(call[0]).name for call in self.calls]


class FakeExtentReader(VectorExtentReader):
    """Returns a fixed ``(xmin, xmax, ymin, ymax)`` or raises ``error``."""

    def __init__(
        self,
        envelope: tuple[float, float, float, float] = (100.0, 200.0, 100.0, 200.0),
        error: Exception | None = None,
    ) -> None:
        self.envelope = envelope
        self.error = error
        self.paths: list[str] = []

    def read_first_feature_envelope(self, path: str) -> tuple[float, float, float, float]:
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.envelope


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clip_engine() -> FakeClipEngine:
    """A clip engine that succeeds for every file."""
    return FakeClipEngine()


@pytest.fixture()
def failing_clip_engine() -> Callable[..., FakeClipEngine]:
    """Factory for a clip engine failing on the given basenames."""

    def _make(*names: str) -> FakeClipEngine:
        return FakeClipEngine(fail_on=set(names))

    return _make


@pytest.fixture()
def extent_reader() -> FakeExtentReader:
    """An extent reader returning the (100,100)-(200,200) envelope."""
    return FakeExtentReader()


@pytest.fixture()
def broken_extent_reader() -> FakeExtentReader:
    """An extent reader whose mask has no features."""
    return FakeExtentReader(error=ExtentError("No features in mask: mask.shp"))


@pytest.fixture()
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scenes"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "clipped"
    path.mkdir()
    return path


@pytest.fixture()
def touch(input_dir: Path) -> Callable[..., list[str]]:
    """Create empty files in the input directory and return their names."""

    def _touch(*names: str) -> list[str]:
        for name in names:
            (input_dir / name).write_bytes(b"")
        return list(names)

    return _touch


@pytest.fixture()
def write_mtl(input_dir: Path) -> Callable[..., Path]:
    """Write a ``<scene_id>_MTL.txt`` file into the input directory."""

    def _write(
        scene_id: str = SCENE_ID,
        *,
        zone: object = 15,
        projection: str = "UTM",
        text: str | None = None,
    ) -> Path:
        path = input_dir / f"{scene_id}_MTL.txt"
        body = text if text is not None else MTL_TEMPLATE.format(projection=projection, zone=zone)
        path.write_text(body, encoding="utf-8")
        return path

    return _write

"""Tests for scene metadata location and parsing."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from landsat_clip.core.exceptions import MetadataError, MetadataNotFoundError
from landsat_clip.models.scene import SceneMetadata
from landsat_clip.processing.metadata import (
    epsg_from_utm_zone,
    extract_projection_info,
    locate_metadata_file,
    read_scene_metadata,
)

SCENE_ID = "LC08_L2SP_021047_20250923_20251001_02_T1"
BAND = f"{SCENE_ID}_SR_B4.tif"

# ---------------------------------------------------------------------------
# locate_metadata_file
# ---------------------------------------------------------------------------


class TestLocateMetadataFile:
    """Scene-prefix truncation and existence check."""

    def test_found(self, input_dir: Path, write_mtl: Callable[..., Path]) -> None:
        write_mtl()
        path = locate_metadata_file(str(input_dir), BAND)
        assert path == f"{input_dir}/{SCENE_ID}_MTL.txt"

    def test_directory_with_trailing_slash(self, input_dir: Path, write_mtl: Callable[..., Path]) -> None:
        write_mtl()
        path = locate_metadata_file(f"{input_dir}/", BAND)
        assert path == f"{input_dir}/{SCENE_ID}_MTL.txt"

    def test_not_found(self, input_dir: Path) -> None:
        assert locate_metadata_file(str(input_dir), BAND) is None

    def test_short_filename_used_whole(self, input_dir: Path) -> None:
        (input_dir / "short.tif_MTL.txt").write_text("UTM_ZONE = 15\n")
        path = locate_metadata_file(str(input_dir), "short.tif")
        assert path == f"{input_dir}/short.tif_MTL.txt"

    def test_directory_named_like_metadata_is_ignored(self, input_dir: Path) -> None:
        (input_dir / f"{SCENE_ID}_MTL.txt").mkdir()
        assert locate_metadata_file(str(input_dir), BAND) is None

    def test_custom_prefix_and_suffix(self, input_dir: Path) -> None:
        (input_dir / "ABCD.meta").write_text("")
        path = locate_metadata_file(str(input_dir), "ABCD_EFG.tif", prefix_length=4, suffix=".meta")
        assert path == f"{input_dir}/ABCD.meta"


# ---------------------------------------------------------------------------
# extract_projection_info
# ---------------------------------------------------------------------------


class TestExtractProjectionInfo:
    """Line-oriented key scanning."""

    def test_standard_file(self, write_mtl: Callable[..., Path]) -> None:
        path = write_mtl(zone=15)
        assert extract_projection_info(str(path)) == SceneMetadata(projection_name="UTM", utm_zone=15)

    def test_quotes_and_whitespace_stripped(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text('\t  MAP_PROJECTION =   "UTM"  \n  UTM_ZONE =  33 \n')
        info = extract_projection_info(str(path))
        assert info.projection_name == "UTM"
        assert info.utm_zone == 33

    def test_unquoted_projection(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text("MAP_PROJECTION = PS\nUTM_ZONE = 1\n")
        assert extract_projection_info(str(path)).projection_name == "PS"

    def test_missing_keys_keep_zero_values(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text("GROUP = LANDSAT_METADATA_FILE\nEND\n")
        assert extract_projection_info(str(path)) == SceneMetadata()

    def test_malformed_zone_raises(self, write_mtl: Callable[..., Path]) -> None:
        path = write_mtl(zone="abc")
        with pytest.raises(MetadataError, match="UTM_ZONE"):
            extract_projection_info(str(path))

    @pytest.mark.parametrize(
        ("raw", "zone"),
        [("1_5", 1), ("15abc", 15), ("+33", 33), ("-7", -7), ("15.0", 15)],
    )
    def test_zone_uses_leading_integer(self, tmp_path: Path, raw: str, zone: int) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text(f'MAP_PROJECTION = "UTM"\nUTM_ZONE = {raw}\n')
        assert extract_projection_info(str(path)).utm_zone == zone

    def test_zone_without_leading_digits_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text("UTM_ZONE = _15\n")
        with pytest.raises(MetadataError, match="_15"):
            extract_projection_info(str(path))

    def test_stops_after_both_values(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text('MAP_PROJECTION = "UTM"\nUTM_ZONE = 15\nUTM_ZONE = garbage\n')
        assert extract_projection_info(str(path)).utm_zone == 15

    def test_later_occurrence_overrides_before_completion(self, tmp_path: Path) -> None:
        path = tmp_path / "m_MTL.txt"
        path.write_text('MAP_PROJECTION = "PS"\nMAP_PROJECTION = "UTM"\nUTM_ZONE = 15\n')
        assert extract_projection_info(str(path)).projection_name == "UTM"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(MetadataNotFoundError) as exc_info:
            extract_projection_info(str(tmp_path / "missing_MTL.txt"))
        assert exc_info.value.path.endswith("missing_MTL.txt")


# ---------------------------------------------------------------------------
# epsg_from_utm_zone
# ---------------------------------------------------------------------------


class TestEpsgFromUtmZone:
    """UTM zone to EPSG string mapping."""

    @pytest.mark.parametrize(
        ("zone", "expected"),
        [(1, "EPSG:32601"), (15, "EPSG:32615"), (60, "EPSG:32660")],
    )
    def test_northern(self, zone: int, expected: str) -> None:
        assert epsg_from_utm_zone(zone) == expected

    def test_southern(self) -> None:
        assert epsg_from_utm_zone(23, southern=True) == "EPSG:32723"

    @pytest.mark.parametrize("zone", [0, -1, 61, 100])
    def test_out_of_range(self, zone: int) -> None:
        assert epsg_from_utm_zone(zone) == ""


# ---------------------------------------------------------------------------
# read_scene_metadata
# ---------------------------------------------------------------------------


class TestReadSceneMetadata:
    """Combined locate and parse."""

    def test_complete(self, input_dir: Path, write_mtl: Callable[..., Path]) -> None:
        mtl = write_mtl(zone=15)
        found = read_scene_metadata(str(input_dir), BAND)
        assert found is not None
        path, metadata = found
        assert path == f"{input_dir}/{mtl.name}"
        assert metadata.utm_zone == 15

    def test_absent(self, input_dir: Path) -> None:
        assert read_scene_metadata(str(input_dir), BAND) is None

    def test_incomplete(self, input_dir: Path, write_mtl: Callable[..., Path]) -> None:
        write_mtl(text="MAP_PROJECTION = \"UTM\"\n")
        assert read_scene_metadata(str(input_dir), BAND) is None

    def test_malformed_zone_propagates(self, input_dir: Path, write_mtl: Callable[..., Path]) -> None:
        write_mtl(zone="x15")
        with pytest.raises(MetadataError):
            read_scene_metadata(str(input_dir), BAND)

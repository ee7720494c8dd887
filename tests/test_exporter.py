"""Tests for sheet PNG I/O and the ManifestExporter."""

import json

import numpy as np
import pytest

from orrery import __version__
from orrery.assembler import SpriteSheet
from orrery.bodies.base import BodyKind
from orrery.io.exporter import (
    ManifestExporter,
    ManifestMetadata,
    ManifestRecord,
    count_sprites,
    load_sheet,
    save_sheet,
    sprite_filename,
    sprite_key,
)


@pytest.fixture
def sheet():
    pixels = np.zeros((6, 18, 4), dtype=np.uint8)
    pixels[..., 0] = np.arange(18, dtype=np.uint8)[None, :]
    pixels[..., 3] = 255
    return SpriteSheet(pixels, 6, 6, 3)


class TestNaming:
    """Tests for manifest keys and file names."""

    def test_typed_keys(self):
        assert sprite_key(BodyKind.PLANET, "terran", 0) == "terran_000"
        assert sprite_key("gas-giant", "ringed_giant", 12) == "ringed_giant_012"

    def test_numbered_keys(self):
        assert sprite_key(BodyKind.MOON, "icy", 4) == "004"
        assert sprite_key("asteroid", "rocky", 11) == "011"
        assert sprite_key("comet", "default", 0) == "000"

    def test_filenames(self):
        assert sprite_filename("planet", "terran", 0) == "planet_terran_000.png"
        assert sprite_filename("moon", "icy", 4) == "moon_004.png"
        assert sprite_filename("black_hole", "stellar", 1) == "black_hole_stellar_001.png"


class TestSheetIO:
    """Tests for PNG round trips."""

    def test_save_and_load(self, sheet, tmp_path):
        path = save_sheet(sheet, tmp_path / "nested" / "moon_000.png")
        assert path.exists()
        loaded = load_sheet(path, 6)
        assert loaded.frame_count == 3
        assert np.array_equal(loaded.pixels, sheet.pixels)


class TestManifestExporter:
    """Tests for manifest serialization."""

    def test_build_manifest_structure(self, sheet):
        exporter = ManifestExporter()
        records = {"moons": {"000": ManifestRecord.for_sheet("moons/moon_000.png", sheet)}}
        manifest = exporter.build_manifest(records)

        assert manifest["version"] == __version__
        assert manifest["schema_version"] == "1.0"
        assert "generated" in manifest
        assert manifest["sprites"]["moons"]["000"] == {
            "file": "moons/moon_000.png",
            "frames": 3,
            "width": 18,
            "height": 6,
        }

    def test_metadata_override(self):
        meta = ManifestMetadata(generated="2026-01-01T00:00:00+00:00", description="test")
        manifest = ManifestExporter().build_manifest({}, meta)
        assert manifest["generated"] == "2026-01-01T00:00:00+00:00"
        assert manifest["description"] == "test"
        assert manifest["sprites"] == {}

    def test_merge_keeps_old_entries(self):
        old = {"version": "0.0.1", "sprites": {"moons": {"000": {"file": "a"}}, "stars": {"G_000": {"file": "s"}}}}
        new = {"version": "4.0.0", "sprites": {"moons": {"000": {"file": "b"}, "001": {"file": "c"}}}}
        merged = ManifestExporter.merge(old, new)
        assert merged["version"] == "4.0.0"
        assert merged["sprites"]["moons"] == {"000": {"file": "b"}, "001": {"file": "c"}}
        assert merged["sprites"]["stars"] == {"G_000": {"file": "s"}}

    def test_export_json(self, sheet, tmp_path):
        exporter = ManifestExporter()
        records = {"comets": {"000": ManifestRecord.for_sheet("comets/comet_000.png", sheet)}}
        path = exporter.export_json(records, tmp_path / "manifest.json")

        with open(path) as f:
            data = json.load(f)
        assert data["sprites"]["comets"]["000"]["frames"] == 3
        assert ManifestExporter.load(path) == data

    def test_export_json_merge(self, sheet, tmp_path):
        exporter = ManifestExporter()
        previous = {"sprites": {"stars": {"G_000": {"file": "stars/star_G_000.png"}}}}
        records = {"moons": {"000": ManifestRecord.for_sheet("moons/moon_000.png", sheet)}}
        path = exporter.export_json(records, tmp_path / "manifest.json", merge_with=previous)
        data = ManifestExporter.load(path)
        assert set(data["sprites"]) == {"moons", "stars"}

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            ManifestExporter.load(path)

    def test_load_rejects_invalid_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            ManifestExporter.load(path)

    def test_count_sprites(self):
        manifest = {"sprites": {"moons": {"000": {}, "001": {}}, "stars": {"G_000": {}}}}
        assert count_sprites(manifest) == 3
        assert count_sprites(manifest, ["moons"]) == 2
        assert count_sprites(manifest, ["comets"]) == 0

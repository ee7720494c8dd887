"""Tests for palette data and colour picking."""

import numpy as np
import pytest

from orrery.bodies.base import VARIANTS, BodyKind
from orrery.core.palettes import (
    DEFAULT_PALETTES,
    Palette,
    PaletteTable,
    hex_to_rgb,
    pick,
    pick_index,
    speckle_position,
)


class TestPick:
    """Tests for ramp index selection."""

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#7a7a7a") == (122, 122, 122)
        assert hex_to_rgb("FF8800") == (255, 136, 0)
        with pytest.raises(ValueError):
            hex_to_rgb("#fff")

    @pytest.mark.parametrize("t, expected", [
        (0.0, 0),
        (0.24, 0),
        (0.25, 1),
        (0.5, 2),
        (0.99, 3),
        (1.0, 4),
        (-3.0, 0),
        (7.0, 4),
    ])
    def test_pick_index_clamps(self, t, expected):
        assert int(pick_index(t, 5)) == expected

    def test_pick_nan_is_first(self):
        assert int(pick_index(np.nan, 3)) == 0

    def test_pick_shapes(self):
        ramp = [(0, 0, 0), (100, 100, 100), (200, 200, 200)]
        colors = pick(ramp, np.array([0.0, 0.5, 1.0]))
        assert colors.shape == (3, 3)
        assert colors[:, 0].tolist() == [0.0, 100.0, 200.0]

    def test_empty_ramp_rejected(self):
        with pytest.raises(ValueError):
            pick_index(0.5, 0)

    def test_speckle_position_range(self):
        values = speckle_position(np.linspace(-1.0, 1.0, 21))
        assert values.min() == 0.0
        assert values.max() == 1.0
        assert speckle_position(0.0) == pytest.approx(0.5)


class TestPalette:
    """Tests for ramp lookup."""

    def test_ramp_preference_order(self):
        palette = Palette("p", {"snow": ["#ffffff"], "ice": ["#e0f0ff"]})
        assert palette.ramp("ice", "snow") == ((224, 240, 255),)
        assert palette.ramp("glacier", "snow") == ((255, 255, 255),)

    def test_ramp_default(self):
        palette = Palette("p", {"surface": ["#000000"]})
        assert palette.ramp("lava", default=["#ff0000"]) == ((255, 0, 0),)
        with pytest.raises(KeyError):
            palette.ramp("lava")

    def test_first_and_contains(self):
        palette = Palette("p", {"rock": ["#010203"], "dust": ["#040506"]})
        assert palette.first() == ((1, 2, 3),)
        assert "dust" in palette
        assert "lava" not in palette

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            Palette("empty", {})


class TestPaletteTable:
    """Tests for the built-in palette table."""

    @pytest.mark.parametrize("kind", [k for k in BodyKind if k is not BodyKind.PLANET])
    def test_every_variant_has_a_palette(self, kind):
        for variant in VARIANTS[kind]:
            assert DEFAULT_PALETTES.has(kind, variant), f"{kind.value}/{variant}"

    def test_planet_types_without_palette_use_rocky(self):
        missing = [v for v in VARIANTS[BodyKind.PLANET] if not DEFAULT_PALETTES.has("planet", v)]
        assert set(missing) == {"eyeball", "tidally_locked", "radioactive", "super_earth"}
        for variant in missing:
            assert DEFAULT_PALETTES.get("planet", variant).name == "rocky"

    def test_unknown_variant_falls_back(self):
        palette = DEFAULT_PALETTES.get(BodyKind.MOON, "no_such_moon")
        assert palette.name == "rocky_gray"

    def test_unknown_kind_raises(self):
        with pytest.raises(KeyError):
            DEFAULT_PALETTES.get("nebula", "x")

    def test_missing_default_rejected(self):
        with pytest.raises(ValueError):
            PaletteTable({"moon": {"a": {"surface": ["#000000"]}}}, {"moon": "b"})

    def test_star_palettes_have_all_roles(self):
        for variant in VARIANTS[BodyKind.STAR]:
            palette = DEFAULT_PALETTES.get(BodyKind.STAR, variant)
            for role in ("core", "mid", "edge", "corona", "cme"):
                assert role in palette

    def test_only_volcanic_moon_has_lava(self):
        with_lava = [v for v in VARIANTS[BodyKind.MOON] if "lava" in DEFAULT_PALETTES.get("moon", v)]
        assert with_lava == ["volcanic"]

    def test_ringed_giant_has_rings(self):
        assert "rings" in DEFAULT_PALETTES.get(BodyKind.GAS_GIANT, "ringed_giant")
        assert "rings" not in DEFAULT_PALETTES.get(BodyKind.GAS_GIANT, "jovian_tan")

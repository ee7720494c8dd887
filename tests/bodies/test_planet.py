"""Tests for the rocky/terran planet renderer."""

import numpy as np
import pytest

from orrery.bodies.base import BodyKind, BodySpec
from orrery.bodies.planet import PlanetRenderer


def make_spec(variant, frame_size=120, pixel_size=2):
    return BodySpec(kind=BodyKind.PLANET, variant=variant, seed=99, frame_count=4, frame_size=frame_size, pixel_size=pixel_size)


def winners(renderer):
    fields = renderer.surface_fields(renderer.sampler.sample(0.0))
    return fields, renderer.chain.resolve(fields, fields["z"].shape[0])


class TestPlanetFeatures:
    """Tests for per-type feature selection."""

    @pytest.mark.parametrize("variant, clouds, ice, cities, volcanoes, water", [
        ("terran", True, True, True, False, True),
        ("ocean", True, False, False, False, True),
        ("lava", False, False, False, True, False),
        ("frozen", False, True, False, False, False),
        ("super_earth", False, False, True, False, False),
        ("desert", False, False, False, False, False),
    ])
    def test_flags(self, variant, clouds, ice, cities, volcanoes, water):
        renderer = PlanetRenderer(make_spec(variant, frame_size=32))
        assert renderer.has_clouds is clouds
        assert renderer.has_ice_caps is ice
        assert renderer.has_cities is cities
        assert renderer.has_volcanoes is volcanoes
        assert renderer.has_water is water

    def test_terran_chain_order(self):
        names = PlanetRenderer(make_spec("terran", frame_size=32)).chain.names
        assert names[:4] == ("clouds", "ice_cap", "city_lights", "crater")
        assert names[-1] == "grassland"
        assert names.index("deep_ocean") < names.index("beach") < names.index("forest")

    def test_dry_chain_ends_in_terrain(self):
        names = PlanetRenderer(make_spec("rocky", frame_size=32)).chain.names
        assert names == ("crater", "mountain", "terrain")

    def test_unpaletted_type_renders_with_fallback(self):
        renderer = PlanetRenderer(make_spec("eyeball", frame_size=32))
        assert renderer.palette.name == "rocky"
        assert renderer.render_frame(0)[16, 16, 3] == 255


class TestPlanetSurface:
    """Tests for classification with constant noise."""

    def test_low_water_is_deep_ocean_at_equator(self, constant_noise):
        renderer = PlanetRenderer(make_spec("terran"), noise=constant_noise(-0.5))
        fields, won = winners(renderer)
        equator = np.abs(fields["ny"]) < 0.5
        assert np.all(won[equator] == renderer.chain.index("deep_ocean"))

    def test_ice_caps_cover_poles(self, constant_noise):
        renderer = PlanetRenderer(make_spec("terran"), noise=constant_noise(-0.5))
        fields, won = winners(renderer)
        poles = np.abs(fields["ny"]) > 0.9
        assert poles.any()
        assert np.all(won[poles] == renderer.chain.index("ice_cap"))

    def test_ridged_peaks_become_mountains(self, constant_noise):
        renderer = PlanetRenderer(make_spec("rocky"), noise=constant_noise(0.0))
        _, won = winners(renderer)
        assert np.all(won == renderer.chain.index("mountain"))

    def test_flat_rocky_is_terrain(self, constant_noise):
        renderer = PlanetRenderer(make_spec("rocky"), noise=constant_noise(0.9))
        _, won = winners(renderer)
        assert np.all(won == renderer.chain.index("terrain"))

    def test_volcanoes(self, constant_noise):
        renderer = PlanetRenderer(make_spec("volcanic"), noise=constant_noise(0.9))
        fields, won = winners(renderer)
        assert np.all(fields["volcano_height"] > 0.3)
        assert np.all(won == renderer.chain.index("volcano"))

    def test_city_lights(self, constant_noise):
        renderer = PlanetRenderer(make_spec("super_earth"), noise=constant_noise(0.8))
        _, won = winners(renderer)
        assert np.all(won == renderer.chain.index("city_lights"))

    def test_ocean_colour(self, constant_noise):
        renderer = PlanetRenderer(make_spec("terran"), noise=constant_noise(-0.5))
        r, g, b, a = renderer.render_frame(0)[60, 60].tolist()
        # Deepest-first ocean ramp, #001a4d, darkened slightly by the limb model
        assert r == 0
        assert 20 <= g <= 26
        assert 70 <= b <= 77
        assert a == 255


class TestAtmosphere:
    """Tests for the atmospheric halo."""

    def test_terran_has_halo(self):
        frame = PlanetRenderer(make_spec("terran")).render_frame(0)
        assert frame[60, 114, 3] > 0
        assert frame[0, 0, 3] == 0

    def test_rocky_has_no_halo(self):
        frame = PlanetRenderer(make_spec("rocky")).render_frame(0)
        assert frame[60, 114, 3] == 0

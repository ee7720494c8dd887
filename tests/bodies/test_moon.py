"""Tests for the moon renderer."""

import numpy as np
import pytest

from orrery.bodies.base import BodyKind, BodySpec
from orrery.bodies.moon import MoonConfig, MoonRenderer, crater_depth
from orrery.core.noise import SampleFrequencyStack


@pytest.fixture
def moon_spec():
    return BodySpec(kind=BodyKind.MOON, variant="rocky_gray", seed=12345, frame_count=24, frame_size=256, pixel_size=3)


def override_fields(monkeypatch, **values):
    """Patch every stack so the named fields come back as constants."""
    original = SampleFrequencyStack.sample

    def sample(self, noise, x, y, z, spin=0.0):
        out = original(self, noise, x, y, z, spin)
        for name, value in values.items():
            if name in out:
                out[name] = np.full(np.shape(x), value)
        return out

    monkeypatch.setattr(SampleFrequencyStack, "sample", sample)


class TestCraterDepth:
    """Tests for crater bowl depth."""

    def test_zero_above_threshold(self):
        assert crater_depth(0.0, -0.5, 2.5, 2.0) == 0.0

    def test_bowl_below_threshold(self):
        assert crater_depth(-0.9, -0.5, 2.5, 2.0) == pytest.approx(1.0)


class TestMoonRenderer:
    """Tests for moon surfaces."""

    def test_flat_regolith_centre_pixel(self, moon_spec, constant_noise, monkeypatch):
        override_fields(monkeypatch, rilles=0.5, mountains=0.0)
        renderer = MoonRenderer(moon_spec, noise=constant_noise(0.0))
        frame = renderer.render_frame(0)

        assert frame.shape == (256, 256, 4)
        # Middle of the five-entry surface ramp, #7a7a7a, barely limb darkened
        r, g, b, a = frame[128, 128].tolist()
        assert abs(r - 122) <= 1
        assert r == g == b
        assert a == 255

    def test_outside_disc_transparent(self, moon_spec, constant_noise):
        renderer = MoonRenderer(moon_spec, noise=constant_noise(0.0))
        frame = renderer.render_frame(0)
        inside = renderer.sampler.expand(renderer.sampler.inside)
        np.testing.assert_array_equal(frame[..., 3] == 255, inside)
        assert not frame[..., 3][~inside].any()

    def test_deep_crater_wins(self, moon_spec, constant_noise):
        renderer = MoonRenderer(moon_spec, noise=constant_noise(-0.9))
        fields = renderer.surface_fields(renderer.sampler.sample(0.0))
        count = fields["z"].shape[0]
        winners = renderer.chain.resolve(fields, count)
        assert np.all(winners == renderer.chain.index("deep_crater"))

    def test_deep_crater_colour(self, moon_spec, constant_noise):
        frame = MoonRenderer(moon_spec, noise=constant_noise(-0.9)).render_frame(0)
        # Darkest crater colour #2a2a2a, minus base variation
        assert frame[128, 128, 0] == pytest.approx(39, abs=1)

    def test_ridged_mountains_are_highlands(self, moon_spec, constant_noise):
        renderer = MoonRenderer(moon_spec, noise=constant_noise(0.1))
        fields = renderer.surface_fields(renderer.sampler.sample(0.0))
        winners = renderer.chain.resolve(fields, fields["z"].shape[0])
        assert np.all(winners == renderer.chain.index("highland"))

    def test_terminator_darkens_limb(self, moon_spec, constant_noise):
        lit = MoonRenderer(moon_spec, noise=constant_noise(0.0)).render_frame(0)
        flat = MoonRenderer(
            moon_spec, noise=constant_noise(0.0), config=MoonConfig(directional_weight=0.0)
        ).render_frame(0)
        assert lit[128, 223, 0] < flat[128, 223, 0]
        assert abs(int(lit[128, 128, 0]) - int(flat[128, 128, 0])) <= 1

    def test_lava_only_on_volcanic(self, moon_spec):
        volcanic = BodySpec(kind="moon", variant="volcanic", frame_count=2, frame_size=60, pixel_size=3)
        assert "lava" in MoonRenderer(volcanic).chain.names
        assert "lava" in MoonRenderer(volcanic).stack.names
        assert "lava" not in MoonRenderer(moon_spec).chain.names

    def test_chain_order(self, moon_spec):
        assert MoonRenderer(moon_spec).chain.names == (
            "rays", "deep_crater", "crater_rim", "maria", "rille", "highland", "regolith",
        )

    def test_rejects_other_kinds(self):
        with pytest.raises(ValueError):
            MoonRenderer(BodySpec(kind="planet", frame_count=1, frame_size=16))

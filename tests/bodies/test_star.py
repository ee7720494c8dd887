"""Tests for the star renderer."""

import numpy as np
import pytest

from orrery.bodies.base import STAR_SIZES, BodyKind, BodySpec
from orrery.bodies.star import StarRenderer
from orrery.core.noise import SampleFrequencyStack


def make_spec(variant="G", frame_size=80, pixel_size=2):
    return BodySpec(kind=BodyKind.STAR, variant=variant, seed=3, frame_count=4, frame_size=frame_size, pixel_size=pixel_size)


def classify(renderer):
    fields = renderer.surface_fields(renderer.sampler.sample(0.0))
    return fields, renderer.chain.resolve(fields, fields["z"].shape[0])


class TestStarGeometry:
    """Tests for class-dependent sizing."""

    @pytest.mark.parametrize("variant", ["G", "NeutronStar", "RedSuperGiant"])
    def test_disc_follows_core_ratio(self, variant):
        core, canvas = STAR_SIZES[variant]
        renderer = StarRenderer(make_spec(variant))
        assert renderer.radius == pytest.approx(80 * core / canvas * 0.4)

    def test_default_sheet_size(self):
        spec = BodySpec.defaults("star", "M")
        assert spec.frame_size == STAR_SIZES["M"][1]
        assert spec.pixel_size == 1


class TestStarSurface:
    """Tests for photosphere features."""

    def test_quiet_photosphere(self, constant_noise):
        renderer = StarRenderer(make_spec(), noise=constant_noise(0.0))
        _, won = classify(renderer)
        assert np.all(won == renderer.chain.index("photosphere"))
        frame = renderer.render_frame(0)
        assert frame[40, 40].tolist() == [255, 255, 255, 255]

    def test_flares(self, constant_noise):
        renderer = StarRenderer(make_spec(), noise=constant_noise(0.9))
        fields, won = classify(renderer)
        inner = fields["normalized"] < 0.9
        assert np.all(won[inner] == renderer.chain.index("flare"))
        assert np.all(won[~inner] == renderer.chain.index("photosphere"))

    def test_sunspots_are_dark(self, constant_noise):
        renderer = StarRenderer(make_spec(), noise=constant_noise(-0.9))
        fields, won = classify(renderer)
        assert np.all(won[fields["normalized"] < 0.85] == renderer.chain.index("sunspot"))
        assert renderer.render_frame(0)[40, 40, 0] < 100

    def test_sunspot_wins_over_flare(self, constant_noise, monkeypatch):
        original = SampleFrequencyStack.sample

        def sample(self, noise, x, y, z, spin=0.0):
            out = original(self, noise, x, y, z, spin)
            out["spots"] = np.full(np.shape(x), -0.9)
            out["flare"] = np.full(np.shape(x), 0.9)
            return out

        monkeypatch.setattr(SampleFrequencyStack, "sample", sample)
        renderer = StarRenderer(make_spec(), noise=constant_noise(0.0))
        fields, won = classify(renderer)
        assert np.all(won[fields["normalized"] < 0.85] == renderer.chain.index("sunspot"))
        between = (fields["normalized"] >= 0.85) & (fields["normalized"] < 0.9)
        assert np.all(won[between] == renderer.chain.index("flare"))


class TestCorona:
    """Tests for the corona and coronal mass ejections."""

    def test_corona_outside_disc(self, constant_noise):
        frame = StarRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        assert 0 < frame[40, 62, 3] < 255
        assert frame[0, 0, 3] == 0

    def test_ejections_brighten_corona(self, constant_noise):
        quiet = StarRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        active = StarRenderer(make_spec(), noise=constant_noise(0.9)).render_frame(0)
        assert active[40, 62, 3] > quiet[40, 62, 3]

    def test_corona_drawn_under_disc(self):
        frame = StarRenderer(make_spec()).render_frame(0)
        assert frame[40, 40, 3] == 255

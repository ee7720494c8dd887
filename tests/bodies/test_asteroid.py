"""Tests for the asteroid renderer."""

import numpy as np
import pytest

from orrery.bodies.asteroid import IRREGULARITY, AsteroidRenderer
from orrery.bodies.base import BodyKind, BodySpec


def make_spec(variant="rocky", seed=21, frame_size=120, pixel_size=3):
    return BodySpec(kind=BodyKind.ASTEROID, variant=variant, seed=seed, frame_count=4, frame_size=frame_size, pixel_size=pixel_size)


class TestAsteroidShape:
    """Tests for irregular tumbling silhouettes."""

    def test_irregularity_per_type(self):
        assert AsteroidRenderer(make_spec("bright_metal")).cfg.irregularity == IRREGULARITY["bright_metal"]
        assert AsteroidRenderer(make_spec("dark_carbon")).cfg.irregularity == 0.55

    def test_flat_noise_gives_circle(self, constant_noise):
        renderer = AsteroidRenderer(make_spec(), noise=constant_noise(0.0))
        angles = np.linspace(-np.pi, np.pi, 16)
        radius = np.broadcast_to(renderer.outline(angles, 0.0), angles.shape)
        assert np.allclose(radius, renderer.radius * 0.8)

    def test_outline_is_irregular(self):
        renderer = AsteroidRenderer(make_spec())
        radius = renderer.outline(np.linspace(-np.pi, np.pi, 64), 0.0)
        assert radius.max() - radius.min() > 1.0

    def test_silhouette(self, constant_noise):
        frame = AsteroidRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        # Radius is 0.8 * 0.38 * 120 = 36.5 px
        assert frame[60, 60, 3] == 255
        assert frame[60, 90, 3] == 255
        assert frame[60, 99, 3] == 0

    def test_tumbles(self):
        renderer = AsteroidRenderer(make_spec())
        assert not np.array_equal(renderer.render_frame(0), renderer.render_frame(2))

    def test_seed_changes_shape(self):
        a = AsteroidRenderer(make_spec(seed=1)).render_frame(0)
        b = AsteroidRenderer(make_spec(seed=2)).render_frame(0)
        assert not np.array_equal(a[..., 3], b[..., 3])


class TestAsteroidSurface:
    """Tests for craters and texture."""

    def test_large_craters_win(self, constant_noise):
        renderer = AsteroidRenderer(make_spec(), noise=constant_noise(-0.9))
        assert renderer.chain.names == ("large_crater", "medium_crater", "small_crater", "surface")
        frame = renderer.render_frame(0)
        flat = AsteroidRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        assert frame[60, 60, 0] < flat[60, 60, 0]

    @pytest.mark.parametrize("variant", ["rocky", "icy", "bright_metal"])
    def test_variants_render(self, variant):
        frame = AsteroidRenderer(make_spec(variant, frame_size=60)).render_frame(1)
        assert frame[..., 3].any()

"""Tests for the comet renderer."""

import numpy as np

from orrery.bodies.base import BodyKind, BodySpec
from orrery.bodies.comet import CometRenderer


def make_spec(frame_size=100, pixel_size=2):
    return BodySpec(kind=BodyKind.COMET, seed=4, frame_count=3, frame_size=frame_size, pixel_size=pixel_size)


class TestComet:
    """Tests for nucleus, coma and tail."""

    def test_default_variant(self):
        assert make_spec().variant == "default"

    def test_nucleus_is_opaque(self, constant_noise):
        frame = CometRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        r, g, b, a = frame[50, 50].tolist()
        assert a == 255
        # Nucleus colour (100, 90, 80) at 0.6 brightness
        assert (r, g, b) == (60, 54, 48)

    def test_tail_streams_left(self, constant_noise):
        frame = CometRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        assert frame[50, 16, 3] > 0
        assert frame[50, 84, 3] == 0

    def test_coma_fades(self, constant_noise):
        frame = CometRenderer(make_spec(), noise=constant_noise(0.0)).render_frame(0)
        near = frame[50, 62, 3]
        far = frame[50, 74, 3]
        assert 0 < far < near < 255

    def test_animates(self):
        renderer = CometRenderer(make_spec())
        assert not np.array_equal(renderer.render_frame(0), renderer.render_frame(1))

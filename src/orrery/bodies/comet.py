"""Comet renderer: rocky nucleus, glowing coma and a tail streaming to the left."""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, BodyRenderer


@dataclass
class CometConfig(BodyConfig):
    """Configuration for comet rendering. Lengths are fractions of the frame size."""
    # Nucleus radius
    radius_fraction: float = 0.08
    tail_length: float = 0.4
    tail_alpha: float = 150.0 / 255.0
    coma_extent: float = 4.0
    coma_alpha: float = 200.0 / 255.0


class CometRenderer(BodyRenderer):
    kind = BodyKind.COMET
    config_class = CometConfig

    def paint(self, canvas, sample, frame):
        cfg: CometConfig = self.cfg
        size = float(self.spec.frame_size)
        t = frame / self.spec.frame_count
        nucleus = self.sampler.radius
        dx, dy, d = sample.dx, sample.dy, sample.distance

        rgb = np.zeros(sample.shape + (3,), dtype=np.float64)
        alpha = np.zeros(sample.shape, dtype=np.float64)

        reach = size * cfg.tail_length
        tail = (dx < 0) & (np.abs(dy) < reach) & (-dx < reach)
        if tail.any():
            along = -dx[tail] / reach
            across = 1.0 - np.abs(dy[tail]) / reach
            wisps = self.noise.fbm(dx[tail] / size * 3.0, dy[tail] / size * 3.0, t * 10, 5)
            intensity = np.maximum((1.0 - along) ** 2 * across * (0.7 + wisps * 0.5), 0.0)
            rgb[tail] = np.asarray(self.palette.color("tail"), dtype=np.float64) * intensity[:, None]
            alpha[tail] = intensity * cfg.tail_alpha

        coma_radius = nucleus * cfg.coma_extent
        coma = d < coma_radius
        if coma.any():
            glow = self.noise.fbm(dx[coma] / size * 15.0, dy[coma] / size * 15.0, t * 8, 4)
            intensity = np.maximum((1.0 - d[coma] / coma_radius) ** 2 * (0.8 + glow * 0.4), 0.0)
            color = np.asarray(self.palette.color("coma"), dtype=np.float64)
            rgb[coma] = np.maximum(rgb[coma], color * intensity[:, None])
            alpha[coma] = np.maximum(alpha[coma], intensity * cfg.coma_alpha)

        core = d < nucleus
        if core.any():
            surface = self.noise.fbm(dx[core] / nucleus * 10.0, dy[core] / nucleus * 10.0, t * 5, 5)
            brightness = 0.6 + np.asarray(surface) * 0.4
            rgb[core] = np.asarray(self.palette.color("nucleus"), dtype=np.float64) * np.reshape(brightness, (-1, 1))
            alpha[core] = 1.0

        visible = alpha > 0
        canvas.fill(visible, rgb[visible], alpha[visible])

"""
Black hole renderer.

Drawn as concentric passes over a transparent frame: event horizon,
lensing ring, accretion disk, outer glow and polar jets. The frame is
twice the hole's base size so the disk and jets fit.
"""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, BodyRenderer
from orrery.core.compositor import Canvas
from orrery.core.palettes import pick
from orrery.core.sampler import SurfaceSample

EVENT_HORIZON_COLOR = (0.0, 0.0, 0.0)

ACTIVITY = {
    "active_quasar": 1.0,
    "supermassive": 0.8,
    "dormant": 0.2,
}
DEFAULT_ACTIVITY = 0.6


@dataclass
class BlackHoleConfig(BodyConfig):
    """Configuration for black hole rendering. Radii are fractions of the base size."""
    # Event horizon radius as a fraction of the frame (0.15 of the base size)
    radius_fraction: float = 0.075
    angular_speed: float = 5.0
    lensing_extent: float = 1.3
    lensing_alpha: float = 0.3
    disk_inner: float = 1.5
    disk_outer: float = 0.8
    disk_alpha: float = 0.8
    disk_gap_threshold: float = -0.3
    glow_extent: float = 1.5
    glow_alpha: float = 0.3
    glow_min_activity: float = 0.3
    jet_min_activity: float = 0.5
    jet_alpha: float = 0.7


class BlackHoleRenderer(BodyRenderer):
    kind = BodyKind.BLACK_HOLE
    config_class = BlackHoleConfig

    def __init__(self, spec, noise=None, palettes=None, config=None):
        super().__init__(spec, noise, palettes, config)
        self.activity = ACTIVITY.get(spec.variant, DEFAULT_ACTIVITY)
        self.has_jets = "jet" in self.palette

    @property
    def base_size(self) -> float:
        return self.spec.frame_size / 2.0

    def horizon_mask(self, sample: SurfaceSample) -> np.ndarray:
        """Cells inside the event horizon, always including the centre block."""
        mask = sample.distance < self.sampler.radius
        mask[self.sampler.center_cell] = True
        return mask

    def paint(self, canvas: Canvas, sample: SurfaceSample, frame: int):
        self.paint_lensing(canvas, sample)
        self.paint_disk(canvas, sample, frame)
        self.paint_glow(canvas, sample)
        if self.has_jets and self.activity > self.cfg.jet_min_activity:
            self.paint_jets(canvas, sample)
        # The horizon occludes every other pass
        canvas.fill(self.horizon_mask(sample), EVENT_HORIZON_COLOR, 1.0)

    def paint_lensing(self, canvas, sample):
        cfg: BlackHoleConfig = self.cfg
        horizon = self.sampler.radius
        d = sample.distance
        ring = (d >= horizon) & (d < horizon * cfg.lensing_extent)
        width = horizon * (cfg.lensing_extent - 1.0)
        intensity = 1.0 - (d[ring] - horizon) / width
        canvas.blend(ring, self.palette.color("lensing", 0), cfg.lensing_alpha * intensity)

    def paint_disk(self, canvas, sample, frame):
        """
        Differentially rotating accretion disk.

        Inner rings turn faster than outer ones. Temperature falls with
        distance and is perturbed by turbulence, selecting the hot, warm
        or cool ramp.
        """
        cfg: BlackHoleConfig = self.cfg
        base = self.base_size
        inner = self.sampler.radius * cfg.disk_inner
        outer = base * cfg.disk_outer
        d = sample.distance
        region = (d >= inner) & (d < outer)
        if not region.any():
            return

        dist = d[region]
        progress = (dist - inner) / (outer - inner)
        angle = np.arctan2(sample.dy[region], sample.dx[region]) - sample.spin * (1.0 - progress)
        cos_a = np.cos(angle) * dist / base
        sin_a = np.sin(angle) * dist / base
        count = dist.shape[0]

        structure = np.broadcast_to(self.noise.fbm(cos_a * 40.0, sin_a * 40.0, frame * 0.1, 6), (count,))
        turbulence = np.broadcast_to(
            self.noise.turbulence(cos_a * 80.0 + sample.spin * 10.0, sin_a * 80.0, frame * 0.2, 5),
            (count,),
        )
        temperature = (1.0 - progress) + turbulence * 0.2

        hot = temperature > 0.7
        warm = ~hot & (temperature > 0.4)
        cool = ~hot & ~warm
        rgb = np.empty((count, 3), dtype=np.float64)
        rgb[hot] = pick(self.palette["accretion_hot"], (temperature[hot] - 0.7) / 0.3)
        rgb[warm] = pick(self.palette["accretion_warm"], (temperature[warm] - 0.4) / 0.3)
        rgb[cool] = pick(self.palette["accretion_cool"], temperature[cool] / 0.4)
        alpha = cfg.disk_alpha * self.activity * (1.0 - progress * 0.5)

        solid = structure >= cfg.disk_gap_threshold
        mask = np.zeros(region.shape, dtype=bool)
        mask[region] = solid
        canvas.blend(mask, rgb[solid], alpha[solid])

    def paint_glow(self, canvas, sample):
        cfg: BlackHoleConfig = self.cfg
        if self.activity <= cfg.glow_min_activity:
            return
        outer = self.base_size * cfg.disk_outer
        glow = outer * cfg.glow_extent
        d = sample.distance
        ring = (d >= outer) & (d < glow)
        progress = (d[ring] - outer) / (glow - outer)
        canvas.blend(ring, self.palette.color("accretion_warm", 1), cfg.glow_alpha * self.activity * (1.0 - progress))

    def paint_jets(self, canvas, sample):
        """Twin polar jets whose width wobbles along their length."""
        cfg: BlackHoleConfig = self.cfg
        base = self.base_size
        horizon = self.sampler.radius
        length = base * 2.0
        half_width = horizon * 0.5

        dy = np.abs(sample.dy)
        dx = np.abs(sample.dx)
        # One wobble value per row, sampled along the jet axis
        rows = sample.dy[:, :1]
        wobble = np.broadcast_to(self.noise.fbm(0.0, rows / base * 80.0, sample.spin * 5.0, 4), rows.shape)
        width = np.maximum(half_width * (1.0 + wobble * 0.5), 1e-9)

        jet = (dy >= horizon) & (dy < length) & (dx <= width)
        if not jet.any():
            return
        width = np.broadcast_to(width, dx.shape)
        alpha = cfg.jet_alpha * self.activity * (1.0 - dy / length) * (1.0 - dx / width)
        canvas.blend(jet, self.palette.color("jet", 0), alpha[jet])

"""
Star renderer: granulated photosphere, sunspots, flares, corona and CMEs.

The disc is sized from the stellar class's core-to-canvas ratio so the
extended corona fits inside the frame. Vectorized with numpy, no
per-pixel Python loops.
"""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import STAR_SIZES, TAU, BodyConfig, BodyKind, SphereBodyRenderer
from orrery.core.colorgrade import radial_gradient
from orrery.core.compositor import FeatureLayer, PriorityChain, always
from orrery.core.noise import FieldSpec, SampleFrequencyStack

GRADIENT_STOPS = (0.0, 0.15, 0.5, 0.85, 1.0)
GRANULATION_WEIGHTS = {
    "granules_large": 0.4,
    "granules_medium": 0.3,
    "granules_small": 0.2,
    "granules_micro": 0.1,
}
# Fraction of the core diameter used as the visible disc radius
CORE_RADIUS_FRACTION = 0.4


@dataclass
class StarConfig(BodyConfig):
    """Configuration for star rendering."""
    world_scale: float = 20.0
    limb_exponent: float = 0.6
    edge_falloff: float = 0.15
    sunspot_threshold: float = -0.4
    sunspot_extent: float = 0.85
    flare_threshold: float = 0.7
    flare_extent: float = 0.9
    corona_extent: float = 0.95
    corona_falloff: float = 2.5
    corona_alpha: float = 200.0 / 255.0
    corona_boost: float = 1.3
    cme_threshold: float = 0.65
    cme_reach: float = 0.8
    cme_boost: float = 1.5


class StarRenderer(SphereBodyRenderer):
    kind = BodyKind.STAR
    config_class = StarConfig

    def default_config(self) -> StarConfig:
        core, canvas = STAR_SIZES.get(self.spec.variant, STAR_SIZES["G"])
        return StarConfig(radius_fraction=core / canvas * CORE_RADIUS_FRACTION)

    def build_stack(self) -> SampleFrequencyStack:
        return SampleFrequencyStack([
            FieldSpec("granules_large", 0.3, 4),
            FieldSpec("granules_medium", 0.8, 5),
            FieldSpec("granules_small", 2.0, 6),
            FieldSpec("granules_micro", 5.0, 4),
            FieldSpec("spots", 0.6, 5),
            # Flares cycle 50 times per rotation of the noise time axis
            FieldSpec("flare", 1.5, 4, drift=50.0 / TAU),
        ])

    def derive(self, fields):
        cfg: StarConfig = self.cfg
        nd = fields["normalized"]
        granulation = sum(fields[name] * weight for name, weight in GRANULATION_WEIGHTS.items())
        fields["granulation"] = granulation
        fields["base_brightness"] = 1.2 - nd * 0.3 + granulation * 0.25

        spots = fields["spots"]
        fields["spot_intensity"] = np.where(
            spots < cfg.sunspot_threshold,
            (np.clip(cfg.sunspot_threshold - spots, 0.0, None) * 2.0) ** 1.5,
            0.0,
        )
        flare = fields["flare"]
        fields["flare_intensity"] = np.where(
            flare > cfg.flare_threshold,
            (np.clip(flare - cfg.flare_threshold, 0.0, None) * 3.33) ** 2,
            0.0,
        )

    def build_chain(self) -> PriorityChain:
        cfg: StarConfig = self.cfg
        p = self.palette
        colors = [p.color("core"), p.color("core"), p.color("mid"), p.color("edge"), p.color("mid")]

        def surface(f):
            return radial_gradient(GRADIENT_STOPS, colors, f["normalized"])

        return PriorityChain([
            FeatureLayer(
                "sunspot",
                lambda f: (f["spots"] < cfg.sunspot_threshold) & (f["normalized"] < cfg.sunspot_extent),
                lambda f: surface(f) * (f["base_brightness"] * (1.0 - f["spot_intensity"] * 0.7))[:, None],
            ),
            FeatureLayer(
                "flare",
                lambda f: (f["flare"] > cfg.flare_threshold) & (f["normalized"] < cfg.flare_extent),
                lambda f: surface(f) * (f["base_brightness"] + f["flare_intensity"] * 0.5)[:, None],
            ),
            FeatureLayer(
                "photosphere",
                always,
                lambda f: surface(f) * f["base_brightness"][:, None],
            ),
        ])

    def paint(self, canvas, sample, frame):
        self.paint_corona(canvas, sample, frame)
        super().paint(canvas, sample, frame)

    def paint_corona(self, canvas, sample, frame):
        """
        Turbulent corona with radial streamers, plus coronal mass ejections.

        Corona intensity falls off as (1 - d)^2.5 between the disc edge and
        ``corona_extent`` of the half-frame; ejections reach ``cme_reach``
        of that distance and fade linearly.
        """
        cfg: StarConfig = self.cfg
        t = frame / self.spec.frame_count
        core = self.sampler.radius
        max_corona = min(self.sampler.center) * cfg.corona_extent
        max_cme = max_corona * cfg.cme_reach

        distance = sample.distance
        region = (distance > core * 0.95) & (distance < max_corona)
        if not region.any() or max_corona <= core:
            return

        dx = sample.dx[region]
        dy = sample.dy[region]
        d = distance[region]
        angle = np.arctan2(dy, dx)
        count = d.shape[0]

        rgb = np.zeros((count, 3), dtype=np.float64)
        alpha = np.zeros(count, dtype=np.float64)

        corona = d > core
        if corona.any():
            cd = (d[corona] - core) / (max_corona - core)
            turbulent = self.noise.fbm(
                dx[corona] / core * 2.4 + t * 18, dy[corona] / core * 2.4 + t * 15, t * 25, 6
            )
            streamers = self.noise.fbm(angle[corona] * 8 + t * 10, d[corona] / core * 4.8, t * 12, 4)
            intensity = (1.0 - cd) ** cfg.corona_falloff * (0.7 + turbulent * 0.5 + streamers * 0.3)
            rgb[corona] = np.asarray(self.palette.color("corona"), dtype=np.float64) * cfg.corona_boost
            alpha[corona] = np.maximum(intensity, 0.0) * cfg.corona_alpha

        reach = d < max_cme
        if max_cme > core and reach.any():
            eruption = np.asarray(
                self.noise.fbm(angle[reach] * 5 + t * 30, d[reach] / core * 7.2 + t * 20, t * 35, 5)
            )
            eruption = np.broadcast_to(eruption, (int(reach.sum()),))
            fade = 1.0 - np.minimum(1.0, (d[reach] - core) / (max_cme - core))
            strength = np.where(
                eruption > cfg.cme_threshold,
                (np.clip(eruption - cfg.cme_threshold, 0.0, None) * 2.85) ** 2 * fade,
                0.0,
            )
            cme = np.asarray(self.palette.color("cme"), dtype=np.float64) * cfg.cme_boost
            rgb[reach] = np.maximum(rgb[reach], cme[None, :] * strength[:, None])
            alpha[reach] = np.maximum(alpha[reach], strength)

        # Drop cells that would round to fully transparent
        visible = alpha * 255.0 > 1.0
        mask = np.zeros(region.shape, dtype=bool)
        mask[region] = visible
        canvas.fill(mask, np.minimum(rgb[visible], 255.0), alpha[visible])

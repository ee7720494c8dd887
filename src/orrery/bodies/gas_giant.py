"""
Gas giant renderer: latitude bands, storms, polar hexagons and rings.

Gas giants spin 2.5x faster than rocky planets, and their jet streams
and lightning drift faster still. Vectorized with numpy, no per-pixel
Python loops.
"""

import math
from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, SphereBodyRenderer
from orrery.core.compositor import FeatureLayer, PriorityChain, always
from orrery.core.noise import Composition, FieldSpec, SampleFrequencyStack
from orrery.core.palettes import pick, speckle_position

LIGHTNING_COLOR = (255.0, 255.0, 255.0)
RING_TILT = math.sin(math.pi * 0.25)


@dataclass
class GasGiantConfig(BodyConfig):
    """Configuration for gas giant rendering."""
    world_scale: float = 10.0
    angular_speed: float = 2.5
    limb_exponent: float = 0.35
    edge_falloff: float = 0.15
    band_frequency: float = 3.5
    band_split: float = 0.55
    storm_threshold: float = 0.55
    great_spot_threshold: float = 0.3
    small_storm_threshold: float = 0.65
    lightning_threshold: float = 0.78
    polar_latitude: float = 0.75
    polar_wobble: float = 0.03
    variation_scale: float = 4.0
    halo_scale: float = 1.06
    halo_alpha: float = 0.4
    # Rings
    ring_radius_fraction: float = 0.24
    ring_inner: float = 1.3
    ring_outer: float = 2.0
    ring_alpha: float = 0.6
    ring_gap_frequency: float = 25.0
    ring_gap_threshold: float = -0.2
    ring_occlusion: float = 1.05


class GasGiantRenderer(SphereBodyRenderer):
    kind = BodyKind.GAS_GIANT
    config_class = GasGiantConfig

    def default_config(self) -> GasGiantConfig:
        cfg = GasGiantConfig()
        if "rings" in self.palette:
            # Shrink the disc so the outer ring stays on the frame
            cfg.radius_fraction = cfg.ring_radius_fraction
        return cfg

    @property
    def has_rings(self) -> bool:
        return "rings" in self.palette

    def build_stack(self) -> SampleFrequencyStack:
        return SampleFrequencyStack([
            FieldSpec("jet", (4.0, 0.8, 4.0), 6, drift=30.0),
            FieldSpec("turbulence", 2.5, 7, Composition.TURBULENCE, drift=20.0),
            FieldSpec("storm", 1.2, 5),
            FieldSpec("small_storm", 3.5, 6),
            FieldSpec("polar", 6.0, 5),
            FieldSpec("lightning", 5.0, 4, drift=50.0),
            FieldSpec("grain", 9.0, 3, offset=250.0),
        ])

    def derive(self, fields):
        cfg: GasGiantConfig = self.cfg
        latitude = np.sin(fields["world_y"] * cfg.band_frequency) * 0.5 + 0.5
        storm = fields["storm"]
        span = 1.0 - cfg.storm_threshold
        fields["storm_intensity"] = np.where(
            storm > cfg.storm_threshold,
            (np.clip(storm - cfg.storm_threshold, 0.0, None) / span) ** 2,
            0.0,
        )
        fields["band"] = latitude + fields["jet"] * 0.3 + fields["turbulence"] * 0.15

        # Six-sided polar vortex edge, rotating with the planet
        longitude = np.arctan2(fields["world_x"], fields["world_z"])
        edge = cfg.polar_latitude + cfg.polar_wobble * np.cos(6.0 * longitude)
        fields["polar_zone"] = np.abs(fields["ny"]) > edge

    def build_chain(self) -> PriorityChain:
        cfg: GasGiantConfig = self.cfg
        palette = self.palette
        light = palette["light_bands"]
        dark = palette["dark_bands"]
        storms = palette["storms"]
        poles = palette["poles"]
        light_span = 1.0 - cfg.band_split

        return PriorityChain([
            FeatureLayer(
                "lightning",
                lambda f: f["lightning"] > cfg.lightning_threshold,
                lambda f: LIGHTNING_COLOR,
            ),
            FeatureLayer(
                "polar_vortex",
                lambda f: f["polar_zone"],
                lambda f: pick(poles, (f["polar"] + 1.0) / 2.0),
            ),
            FeatureLayer(
                "great_spot",
                lambda f: f["storm_intensity"] > cfg.great_spot_threshold,
                lambda f: pick(storms, f["storm_intensity"]),
            ),
            FeatureLayer(
                "small_storm",
                lambda f: f["small_storm"] > cfg.small_storm_threshold,
                lambda f: pick(storms, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "light_band",
                lambda f: f["band"] > cfg.band_split,
                lambda f: pick(light, (f["band"] - cfg.band_split) / light_span),
            ),
            FeatureLayer(
                "dark_band",
                always,
                lambda f: pick(dark, f["band"] / cfg.band_split),
            ),
        ])

    def variation(self, fields):
        return fields["turbulence"] * self.cfg.variation_scale

    def paint_outside(self, canvas, sample, frame):
        self.paint_halo(
            canvas, sample, self.cfg.halo_scale, self.palette.color("light_bands", 0), self.cfg.halo_alpha
        )
        if self.has_rings:
            self.paint_rings(canvas, sample, frame)

    def paint_rings(self, canvas, sample, frame):
        """
        Tilted ring system made of concentric bands ``2 * pixel_size`` wide.

        Bands whose structure noise falls below the gap threshold are left
        empty. The back half is hidden by the disc; the front half passes
        over it.
        """
        cfg: GasGiantConfig = self.cfg
        radius = self.sampler.radius
        inner = radius * cfg.ring_inner
        outer = radius * cfg.ring_outer
        step = 2.0 * self.spec.pixel_size

        band_count = max(int(math.ceil((outer - inner) / step)), 1)
        band_radii = inner + np.arange(band_count) * step
        progress = (band_radii - inner) / (outer - inner)
        structure = np.broadcast_to(
            self.noise.fbm(band_radii / radius * cfg.ring_gap_frequency, frame * 0.1, 0.0, 4),
            (band_count,),
        )
        open_band = structure >= cfg.ring_gap_threshold

        ellipse = np.hypot(sample.dx, sample.dy / RING_TILT)
        band = np.clip(np.floor((ellipse - inner) / step).astype(np.int64), 0, band_count - 1)
        in_rings = (ellipse >= inner) & (ellipse < outer)
        unoccluded = (sample.distance >= radius * cfg.ring_occlusion) | (sample.dy > 0)
        visible = in_rings & unoccluded & open_band[band]
        if not visible.any():
            return

        hit = band[visible]
        colors = pick(self.palette["rings"], progress[hit])
        canvas.blend(visible, colors, cfg.ring_alpha * (1.0 - progress[hit]))

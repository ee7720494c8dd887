"""
Moon renderer: cratered regolith with maria, rilles and ray systems.

Vectorized with numpy, no per-pixel Python loops.
"""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, SphereBodyRenderer
from orrery.core.colorgrade import brighten
from orrery.core.compositor import FeatureLayer, PriorityChain, always
from orrery.core.noise import Composition, FieldSpec, SampleFrequencyStack
from orrery.core.palettes import pick, speckle_position

# (threshold, scale, exponent) per crater size class
CRATER_PROFILES = {
    "craters_large": (-0.5, 2.5, 2.0),
    "craters_medium": (-0.58, 2.4, 2.0),
    "craters_small": (-0.62, 2.2, 1.8),
}


def crater_depth(value, threshold: float, scale: float, exponent: float) -> np.ndarray:
    """Bowl depth where the field dips below ``threshold``, zero elsewhere."""
    value = np.asarray(value, dtype=np.float64)
    depth = np.clip((threshold - value) * scale, 0.0, None)
    return np.where(value < threshold, depth ** exponent, 0.0)


@dataclass
class MoonConfig(BodyConfig):
    """Configuration for moon rendering."""
    world_scale: float = 12.0
    limb_exponent: float = 0.6
    edge_falloff: float = 0.2
    # Terminator contrast from the view-aligned light
    directional_weight: float = 0.35
    lava_threshold: float = 0.68
    ray_threshold: float = 0.5
    deep_crater_threshold: float = 0.4
    rim_range: tuple = (0.15, 0.35)
    maria_threshold: float = -0.3
    rille_width: float = 0.08
    highland_threshold: float = 0.7
    variation_scale: float = 3.0
    roughness_scale: float = 0.3


class MoonRenderer(SphereBodyRenderer):
    kind = BodyKind.MOON
    config_class = MoonConfig

    def build_stack(self) -> SampleFrequencyStack:
        fields = [
            FieldSpec("base", 4.0, 8),
            FieldSpec("craters_large", 0.8, 6),
            FieldSpec("craters_medium", 2.0, 7),
            FieldSpec("craters_small", 4.5, 7),
            FieldSpec("maria", 0.4, 5),
            FieldSpec("mountains", 1.2, 7, Composition.RIDGED),
            FieldSpec("rilles", 1.8, 6),
            FieldSpec("rays", 3.0, 5, offset=500.0),
            FieldSpec("grain", 9.0, 3, offset=250.0),
        ]
        if "lava" in self.palette:
            fields.append(FieldSpec("lava", 1.5, 5, offset=1000.0))
        return SampleFrequencyStack(fields)

    def derive(self, fields):
        depths = {
            name: crater_depth(fields[name], *profile)
            for name, profile in CRATER_PROFILES.items()
        }
        fields["depth_large"] = depths["craters_large"]
        fields["crater_depth"] = np.maximum.reduce(list(depths.values()))

    def build_chain(self) -> PriorityChain:
        self.cfg: MoonConfig = self.cfg  # Type hint
        cfg = self.cfg
        palette = self.palette
        surface = palette["surface"]
        crater = palette.ramp("crater", default=surface[-2:])
        maria = palette.ramp("maria", default=surface[-2:])
        ray_color = brighten(surface[0], 60)
        rim_low, rim_high = cfg.rim_range

        layers = []
        if "lava" in palette:
            layers.append(FeatureLayer(
                "lava",
                lambda f: f["lava"] > cfg.lava_threshold,
                lambda f: pick(palette["lava"], speckle_position(f["grain"])),
            ))
        layers += [
            FeatureLayer(
                "rays",
                lambda f: (f["depth_large"] > 0.3) & (f["rays"] > cfg.ray_threshold),
                lambda f: ray_color,
            ),
            FeatureLayer(
                "deep_crater",
                lambda f: f["crater_depth"] > cfg.deep_crater_threshold,
                lambda f: pick(crater, f["crater_depth"]),
            ),
            FeatureLayer(
                "crater_rim",
                lambda f: (f["crater_depth"] > rim_low) & (f["crater_depth"] < rim_high),
                lambda f: pick(surface[:2], speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "maria",
                lambda f: (f["maria"] < cfg.maria_threshold) & (f["mountains"] <= cfg.highland_threshold),
                lambda f: pick(maria, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "rille",
                lambda f: np.abs(f["rilles"]) < cfg.rille_width,
                lambda f: pick(crater, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "highland",
                lambda f: f["mountains"] > cfg.highland_threshold,
                lambda f: pick(surface[:3], (f["mountains"] - cfg.highland_threshold) / (1.0 - cfg.highland_threshold)),
            ),
            FeatureLayer(
                "regolith",
                always,
                lambda f: pick(surface, (f["base"] + 1.0) / 2.0),
            ),
        ]
        return PriorityChain(layers)

    def variation(self, fields):
        return fields["base"] * self.cfg.variation_scale

    def roughness(self, fields):
        return fields["crater_depth"] * self.cfg.roughness_scale

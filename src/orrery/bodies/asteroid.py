"""
Asteroid renderer: irregular tumbling silhouettes with cratered surfaces.

Asteroids are not spheres. The outline is a noisy radius around the
centre, re-sampled every frame so the body appears to tumble.
"""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, BodyRenderer
from orrery.core.colorgrade import shade
from orrery.core.compositor import FeatureLayer, PriorityChain, always
from orrery.core.palettes import pick

IRREGULARITY = {
    "rocky": 0.4,
    "metallic": 0.3,
    "icy": 0.35,
    "carbonaceous": 0.5,
    "stony_iron": 0.45,
    "nickel_iron": 0.3,
    "silicate": 0.4,
    "ice_rock": 0.5,
    "dark_carbon": 0.55,
    "rusty": 0.4,
    "bright_metal": 0.25,
    "dark_metal": 0.35,
}

# (angular harmonic, coordinate scale, time rate, octaves, weight) per shape layer
SHAPE_LAYERS = (
    (1, 3.0, 1.5, 4, 0.6),
    (3, 6.0, 2.0, 5, 0.3),
    (7, 12.0, 2.5, 6, 0.1),
)

# (name, coordinate scale relative to the base radius, time rate, octaves, threshold, depth)
CRATERS = (
    ("large_crater", 5.5, 2.0, 5, -0.55, 0.8),
    ("medium_crater", 11.0, 1.5, 5, -0.6, 0.6),
    ("small_crater", 18.0, 1.0, 4, -0.65, 0.4),
)


@dataclass
class AsteroidConfig(BodyConfig):
    """Configuration for asteroid rendering."""
    radius_fraction: float = 0.38
    irregularity: float = 0.4
    edge_falloff: float = 0.45
    roughness: float = 0.15
    crater_shadow: float = 0.5


class AsteroidRenderer(BodyRenderer):
    kind = BodyKind.ASTEROID
    config_class = AsteroidConfig

    def __init__(self, spec, noise=None, palettes=None, config=None):
        super().__init__(spec, noise, palettes, config)
        # Per-asteroid offsets into the shape noise, taken from the seeded field
        self.shape_offsets = [
            (float(self.noise.noise(i * 1.37 + 0.5, 0.5, 0.5)) + 1.0) * 5.0 for i in range(6)
        ]
        self.chain = self.build_chain()

    def default_config(self) -> AsteroidConfig:
        return AsteroidConfig(irregularity=IRREGULARITY.get(self.spec.variant, 0.4))

    def build_chain(self) -> PriorityChain:
        cfg: AsteroidConfig = self.cfg
        surface = self.palette.ramp("surface", default=self.palette.first())

        def texture(f):
            return pick(surface, (f["surface"] + f["micro"] * 0.3 + 1.0) / 2.0)

        def crater_layer(name, threshold, depth):
            return FeatureLayer(
                name,
                lambda f: f[name] < threshold,
                lambda f: texture(f) * (1.0 - depth * cfg.crater_shadow),
            )

        layers = [crater_layer(name, threshold, depth) for name, _, _, _, threshold, depth in CRATERS]
        layers.append(FeatureLayer("surface", always, texture))
        return PriorityChain(layers)

    def outline(self, angle, phase):
        """Silhouette radius in pixels for each polar angle."""
        cfg: AsteroidConfig = self.cfg
        offsets = self.shape_offsets
        shape = 0.0
        for i, (harmonic, scale, rate, octaves, weight) in enumerate(SHAPE_LAYERS):
            layer = self.noise.fbm(
                np.cos(angle * harmonic) * scale + offsets[2 * i],
                np.sin(angle * harmonic) * scale + offsets[2 * i + 1],
                phase * rate,
                octaves,
            )
            shape = shape + layer * cfg.irregularity * weight
        return self.sampler.radius * (0.8 + shape * 0.8)

    def paint(self, canvas, sample, frame):
        cfg: AsteroidConfig = self.cfg
        base = self.sampler.radius
        phase = sample.phase
        angle = np.arctan2(sample.dy, sample.dx)
        radius = np.broadcast_to(self.outline(angle, phase), sample.shape)
        body = sample.distance <= radius
        if not body.any():
            return

        dx = sample.dx[body] / base
        dy = sample.dy[body] / base
        count = dx.shape[0]
        fields = {
            name: np.broadcast_to(self.noise.fbm(dx * scale, dy * scale, phase * rate, octaves), (count,))
            for name, scale, rate, octaves, _, _ in CRATERS
        }
        fields["surface"] = np.broadcast_to(self.noise.fbm(dx * 7.3, dy * 7.3, phase * 3.0, 7), (count,))
        fields["micro"] = np.broadcast_to(self.noise.fbm(dx * 27.0, dy * 27.0, phase * 4.0, 5), (count,))

        rgb, _ = self.chain.composite(fields, count)
        normalized = sample.distance[body] / np.maximum(radius[body], 1e-9)
        light = (1.0 - normalized * cfg.edge_falloff) * (1.0 - np.abs(fields["surface"]) * cfg.roughness)
        canvas.fill(body, shade(rgb, np.zeros(count), light))

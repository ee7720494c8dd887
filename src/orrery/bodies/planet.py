"""
Rocky and terran planet renderer.

Continents, ridged mountain ranges, craters, water systems, volcanoes,
ice caps, city lights and a cloud layer, resolved per cell through one
priority chain. Vectorized with numpy, no per-pixel Python loops.
"""

from dataclasses import dataclass

import numpy as np

from orrery.bodies.base import BodyConfig, BodyKind, SphereBodyRenderer
from orrery.core.compositor import FeatureLayer, PriorityChain, always
from orrery.core.noise import Composition, FieldSpec, SampleFrequencyStack
from orrery.core.palettes import hex_to_rgb, pick, speckle_position

CLOUD_TYPES = frozenset({"terran", "ocean", "jungle", "toxic"})
ICE_CAP_TYPES = frozenset({"terran", "ice", "frozen", "tundra"})
CITY_TYPES = frozenset({"terran", "super_earth"})
VOLCANO_TYPES = frozenset({"volcanic", "lava"})
WATER_TYPES = frozenset({"ocean", "terran", "jungle"})

ATMOSPHERE_COLORS = {
    "terran": "#4488ff",
    "ocean": "#4488ff",
    "jungle": "#4488ff",
    "super_earth": "#4488ff",
    "toxic": "#8aaa5a",
    "ice": "#c0e0ff",
    "frozen": "#c0e0ff",
}

# Ramps used when a palette lacks the feature's own colours
FALLBACK_RAMPS = {
    "cloud": ("#ffffff", "#f0f0f0", "#e0e0e0"),
    "ice": ("#e0f0ff", "#c0d8f0", "#a0c0e0"),
    "city": ("#ffcc00", "#ffaa00", "#ff8800"),
    "lava": ("#ff4400", "#ff6600", "#ff8800"),
    "crater": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
    "deep_ocean": ("#001a4d", "#00143d", "#000e2d"),
    "shallow_water": ("#2080c0", "#1870b0", "#1060a0"),
    "river": ("#2080c0", "#1870b0"),
    "sand": ("#f4e4a0", "#e0d090", "#d0c080"),
    "mountain": ("#8b7355", "#a08968", "#6b5944"),
    "forest": ("#1d5b32", "#2d6b42", "#0d4b22"),
    "grass": ("#2d8659", "#3a9b6e", "#1d6b42"),
}


@dataclass
class PlanetConfig(BodyConfig):
    """Configuration for rocky/terran planets."""
    world_scale: float = 15.0
    limb_exponent: float = 0.45
    edge_falloff: float = 0.25
    cloud_threshold: float = 0.5
    ice_cap_latitude: float = 0.7
    ice_cap_threshold: float = 0.3
    city_threshold: float = 0.72
    volcano_threshold: float = 0.65
    active_volcano_height: float = 0.3
    crater_threshold: float = 0.2
    mountain_threshold: float = 0.65
    variation_scale: float = 4.8
    halo_scale: float = 1.08
    halo_alpha: float = 0.35


class PlanetRenderer(SphereBodyRenderer):
    kind = BodyKind.PLANET
    config_class = PlanetConfig

    def __init__(self, spec, noise=None, palettes=None, config=None):
        # Features follow the requested type even when it borrows another palette
        variant = spec.variant
        self.has_clouds = variant in CLOUD_TYPES
        self.has_ice_caps = variant in ICE_CAP_TYPES
        self.has_cities = variant in CITY_TYPES
        self.has_volcanoes = variant in VOLCANO_TYPES
        self.has_water = variant in WATER_TYPES
        self.atmosphere = ATMOSPHERE_COLORS.get(variant)
        super().__init__(spec, noise, palettes, config)

    def build_stack(self) -> SampleFrequencyStack:
        return SampleFrequencyStack([
            FieldSpec("continents", 0.25, 6),
            FieldSpec("mountains", 0.8, 7, Composition.RIDGED),
            FieldSpec("valleys_raw", 1.0, 6, Composition.RIDGED),
            FieldSpec("micro", 3.5, 8),
            FieldSpec("craters_large", 1.8, 5),
            FieldSpec("craters_small", 4.5, 6),
            FieldSpec("water", 0.45, 7),
            FieldSpec("river", 2.2, 6),
            FieldSpec("volcano", 1.5, 5, offset=1000.0),
            FieldSpec("city", 5.0, 4, offset=500.0),
            FieldSpec("cloud", 1.8, 7, drift=2.0),
            FieldSpec("grain", 9.0, 3, offset=250.0),
        ])

    def derive(self, fields):
        cfg: PlanetConfig = self.cfg
        large = fields["craters_large"]
        small = fields["craters_small"]
        fields["crater_depth"] = np.where(
            large < -0.55,
            ((-0.55 - large) * 3.0) ** 2,
            np.where(small < -0.65, ((-0.65 - small) * 2.5) ** 2, 0.0),
        )

        volcano = fields["volcano"]
        if self.has_volcanoes:
            lift = np.clip(volcano - cfg.volcano_threshold, 0.0, None) * 2.857
            fields["volcano_height"] = np.where(volcano > cfg.volcano_threshold, lift ** 1.5, 0.0)
        else:
            fields["volcano_height"] = np.zeros_like(volcano)

        polar = np.abs(fields["ny"])
        ice_zone = (polar > cfg.ice_cap_latitude) & self.has_ice_caps
        span = 1.0 - cfg.ice_cap_latitude
        fields["ice_cap"] = np.where(ice_zone, ((polar - cfg.ice_cap_latitude) / span) ** 2, 0.0)
        fields["city_light"] = (
            self.has_cities
            & (fields["city"] > cfg.city_threshold)
            & (fields["continents"] > 0.0)
            & ~ice_zone
        )

        fields["valleys"] = 1.0 - fields["valleys_raw"]
        fields["elevation"] = (
            fields["continents"] * 0.4
            + fields["mountains"] * 0.3
            + fields["valleys"] * 0.15
            + fields["micro"] * 0.15
            + fields["volcano_height"] * 0.5
            - fields["crater_depth"] * 0.6
        )

    def _ramp(self, *keys):
        return self.palette.ramp(*keys, default=FALLBACK_RAMPS[keys[0]])

    def build_chain(self) -> PriorityChain:
        cfg: PlanetConfig = self.cfg
        mountain_span = 1.0 - cfg.mountain_threshold
        layers = []

        if self.has_clouds:
            clouds = self._ramp("cloud")
            layers.append(FeatureLayer(
                "clouds",
                lambda f: f["cloud"] > cfg.cloud_threshold,
                lambda f: pick(clouds, (f["cloud"] - cfg.cloud_threshold) / (1.0 - cfg.cloud_threshold)),
            ))
        if self.has_ice_caps:
            ice = self.palette.ramp("ice", "snow", default=FALLBACK_RAMPS["ice"])
            layers.append(FeatureLayer(
                "ice_cap",
                lambda f: f["ice_cap"] > cfg.ice_cap_threshold,
                lambda f: pick(ice, f["ice_cap"]),
            ))
        if self.has_cities:
            city = self._ramp("city")
            layers.append(FeatureLayer(
                "city_lights",
                lambda f: f["city_light"],
                lambda f: pick(city, speckle_position(f["grain"])),
            ))
        if self.has_volcanoes:
            lava = self.palette.ramp("lava", "bright_lava", default=FALLBACK_RAMPS["lava"])
            layers.append(FeatureLayer(
                "volcano",
                lambda f: f["volcano_height"] > cfg.active_volcano_height,
                lambda f: pick(lava, f["volcano_height"]),
            ))

        crater = self._ramp("crater")
        layers.append(FeatureLayer(
            "crater",
            lambda f: f["crater_depth"] > cfg.crater_threshold,
            lambda f: pick(crater, f["crater_depth"]),
        ))

        if self.has_water:
            layers += self._water_layers(mountain_span)
        else:
            mountain = self.palette.ramp("mountain", "rock", default=FALLBACK_RAMPS["mountain"])
            base = self.palette.first()
            layers += [
                FeatureLayer(
                    "mountain",
                    lambda f: f["mountains"] > cfg.mountain_threshold,
                    lambda f: pick(mountain, (f["mountains"] - cfg.mountain_threshold) / mountain_span),
                ),
                FeatureLayer(
                    "terrain",
                    always,
                    lambda f: pick(base, (f["elevation"] + 1.0) / 2.0),
                ),
            ]
        return PriorityChain(layers)

    def _water_layers(self, mountain_span):
        """Oceans, coasts, rivers and land cover for water worlds. Ends in a catch-all."""
        cfg: PlanetConfig = self.cfg
        deep = self.palette.ramp("deep_ocean", "ocean", default=FALLBACK_RAMPS["deep_ocean"])
        shallow = self.palette.ramp("shallow_water", "ocean", default=FALLBACK_RAMPS["shallow_water"])
        river = self.palette.ramp("shallow_water", default=FALLBACK_RAMPS["river"])
        sand = self._ramp("sand")
        peak = self.palette.ramp("mountain", "snow_peak", default=FALLBACK_RAMPS["mountain"])
        forest = self.palette.ramp("forest", "canopy", "grass", default=FALLBACK_RAMPS["forest"])
        grass = self.palette.ramp("grass", "clearing", default=FALLBACK_RAMPS["grass"])

        return [
            FeatureLayer(
                "deep_ocean",
                lambda f: f["water"] < -0.1,
                lambda f: pick(deep, (-0.1 - f["water"]) / 0.9),
            ),
            FeatureLayer(
                "shallows",
                lambda f: f["water"] < 0.0,
                lambda f: pick(shallow, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "river",
                lambda f: (f["river"] < -0.3) & (f["continents"] < 0.3),
                lambda f: pick(river, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "beach",
                lambda f: f["continents"] < 0.0,
                lambda f: pick(sand, speckle_position(f["grain"])),
            ),
            FeatureLayer(
                "peak",
                lambda f: f["mountains"] > cfg.mountain_threshold,
                lambda f: pick(peak, (f["mountains"] - cfg.mountain_threshold) / mountain_span),
            ),
            FeatureLayer(
                "forest",
                lambda f: f["continents"] > 0.3,
                lambda f: pick(forest, (f["continents"] - 0.3) / 0.7),
            ),
            FeatureLayer(
                "grassland",
                always,
                lambda f: pick(grass, f["continents"] / 0.3),
            ),
        ]

    def variation(self, fields):
        return fields["micro"] * self.cfg.variation_scale

    def paint_outside(self, canvas, sample, frame):
        if self.atmosphere:
            self.paint_halo(canvas, sample, self.cfg.halo_scale, hex_to_rgb(self.atmosphere), self.cfg.halo_alpha)

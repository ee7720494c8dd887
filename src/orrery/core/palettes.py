"""
Static colour ramps for every body type.

A palette is an ordered set of named ramps; each ramp runs from low to
high intensity (or shallow to deep) within its feature class. Every
colour pick goes through ``pick_index``:

    index = clamp(floor(t * (L - 1)), 0, L - 1)
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]


def hex_to_rgb(value: str) -> Color:
    """Convert '#rrggbb' (case-insensitive, '#' optional) to an RGB triple."""
    text = value.strip().lstrip("#")
    if len(text) != 6:
        raise ValueError(f"Not a hex colour: {value!r}")
    return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)


def to_rgb(value: ColorLike) -> Color:
    if isinstance(value, str):
        return hex_to_rgb(value)
    r, g, b = value
    return int(r), int(g), int(b)


def pick_index(t, length: int) -> np.ndarray:
    """Ramp index for a class-local scalar ``t``."""
    if length < 1:
        raise ValueError("Cannot pick from an empty ramp")
    t = np.nan_to_num(np.asarray(t, dtype=np.float64))
    return np.clip(np.floor(t * (length - 1)), 0, length - 1).astype(np.int64)


def pick(colors: Sequence[Color], t) -> np.ndarray:
    """
    Select colours from a ramp.

    Args:
        colors: Ramp of RGB triples.
        t: Scalar or array of class-local positions.

    Returns:
        float64 array of shape t.shape + (3,).
    """
    ramp = np.asarray(colors, dtype=np.float64).reshape(-1, 3)
    return ramp[pick_index(t, len(ramp))]


def speckle_position(grain) -> np.ndarray:
    """
    Map a grain fbm value onto [0, 1] for per-pixel palette variety.

    fbm rarely leaves [-0.5, 0.5], so the value is stretched until every
    entry of a short ramp shows up.
    """
    return np.clip(0.5 + np.asarray(grain, dtype=np.float64) * 1.5, 0.0, 1.0)


class Palette:
    """Ordered mapping of ramp name to a tuple of RGB colours."""

    def __init__(self, name: str, ramps: Mapping[str, Iterable[ColorLike]]):
        self.name = name
        self.ramps: "OrderedDict[str, Tuple[Color, ...]]" = OrderedDict(
            (key, tuple(to_rgb(c) for c in colors)) for key, colors in ramps.items()
        )
        if not self.ramps:
            raise ValueError(f"Palette {name!r} has no ramps")

    def __repr__(self) -> str:
        return f"Palette({self.name!r}, ramps={list(self.ramps)})"

    def __contains__(self, key: str) -> bool:
        return key in self.ramps

    def __getitem__(self, key: str) -> Tuple[Color, ...]:
        return self.ramps[key]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.ramps)

    def first(self) -> Tuple[Color, ...]:
        """The palette's primary ramp (base terrain for most bodies)."""
        return next(iter(self.ramps.values()))

    def color(self, key: str, index: int = 0) -> Color:
        return self.ramps[key][index]

    def ramp(self, *keys: str, default: Optional[Iterable[ColorLike]] = None) -> Tuple[Color, ...]:
        """
        First ramp present among ``keys``.

        Args:
            keys: Candidate ramp names in order of preference.
            default: Colours used when none of the keys exist.

        Raises:
            KeyError: No key matched and no default was given.
        """
        for key in keys:
            if key in self.ramps:
                return self.ramps[key]
        if default is None:
            raise KeyError(f"Palette {self.name!r} has none of {keys}")
        return tuple(to_rgb(c) for c in default)


class PaletteTable:
    """
    Palettes per body kind, keyed by variant name.

    Unknown variants fall back to the kind's default palette; a missing
    palette is a cosmetic problem, not a reason to fail a batch.
    """

    def __init__(
        self,
        data: Mapping[str, Mapping[str, Mapping[str, Iterable[ColorLike]]]],
        defaults: Mapping[str, str],
    ):
        self._palettes: Dict[str, "OrderedDict[str, Palette]"] = {}
        for kind, variants in data.items():
            self._palettes[kind] = OrderedDict(
                (variant, Palette(variant, ramps)) for variant, ramps in variants.items()
            )
        self.defaults = dict(defaults)
        for kind, variant in self.defaults.items():
            if variant not in self._palettes.get(kind, {}):
                raise ValueError(f"Default palette {variant!r} missing for {kind!r}")

    @staticmethod
    def _kind_key(kind) -> str:
        return getattr(kind, "value", kind)

    def has(self, kind, variant: str) -> bool:
        return variant in self._palettes.get(self._kind_key(kind), {})

    def get(self, kind, variant: Optional[str] = None) -> Palette:
        """Palette for ``variant``, or the kind's default when it is unknown."""
        key = self._kind_key(kind)
        if key not in self._palettes:
            raise KeyError(f"No palettes for body kind {key!r}")
        palettes = self._palettes[key]
        if variant in palettes:
            return palettes[variant]
        fallback = self.defaults[key]
        logger.debug("No %s palette for %r, using %r", key, variant, fallback)
        return palettes[fallback]


# ---------------------------------------------------------------------------
# Palette data
# ---------------------------------------------------------------------------

STAR_PALETTES = {
    "O": {"core": ["#ffffff"], "mid": ["#e0f0ff"], "edge": ["#9bb0ff"], "corona": ["#c5d5ff"], "cme": ["#7788ee"]},
    "B": {"core": ["#ffffff"], "mid": ["#f0f8ff"], "edge": ["#aabfff"], "corona": ["#d5e5ff"], "cme": ["#8899ff"]},
    "A": {"core": ["#ffffff"], "mid": ["#f5faff"], "edge": ["#cad8ff"], "corona": ["#e5efff"], "cme": ["#99aadd"]},
    "F": {"core": ["#fffff8"], "mid": ["#fffef0"], "edge": ["#fff9ea"], "corona": ["#fffcf5"], "cme": ["#eecc99"]},
    "G": {"core": ["#fffff0"], "mid": ["#ffffe0"], "edge": ["#fff4ea"], "corona": ["#fff8ee"], "cme": ["#ffcc88"]},
    "K": {"core": ["#ffffd0"], "mid": ["#ffe8c0"], "edge": ["#ffd2a1"], "corona": ["#ffeedd"], "cme": ["#ff9966"]},
    "M": {"core": ["#ffcc99"], "mid": ["#ffaa66"], "edge": ["#ff9040"], "corona": ["#ffbb88"], "cme": ["#ff5522"]},
    "BrownDwarf": {"core": ["#8b4513"], "mid": ["#654321"], "edge": ["#4a2810"], "corona": ["#6a3a1a"], "cme": ["#aa5533"]},
    "WhiteDwarf": {"core": ["#ffffff"], "mid": ["#f0f8ff"], "edge": ["#e0f0ff"], "corona": ["#f5faff"], "cme": ["#c0d8ff"]},
    "NeutronStar": {"core": ["#ffffff"], "mid": ["#ff00ff"], "edge": ["#8800ff"], "corona": ["#cc88ff"], "cme": ["#ff00cc"]},
    "Pulsar": {"core": ["#ffffff"], "mid": ["#ff00cc"], "edge": ["#cc0099"], "corona": ["#ff88cc"], "cme": ["#ff0088"]},
    "RedGiant": {"core": ["#ffaa66"], "mid": ["#ff6633"], "edge": ["#ff4500"], "corona": ["#ff8844"], "cme": ["#ff2200"]},
    "BlueGiant": {"core": ["#ffffff"], "mid": ["#aaccff"], "edge": ["#6699ff"], "corona": ["#bbddff"], "cme": ["#5588ee"]},
    "RedSuperGiant": {"core": ["#ff8844"], "mid": ["#ff4422"], "edge": ["#ff2200"], "corona": ["#ff6633"], "cme": ["#dd1100"]},
    "BlueSuperGiant": {"core": ["#ffffff"], "mid": ["#99bbff"], "edge": ["#5588ff"], "corona": ["#aaccff"], "cme": ["#4477ee"]},
}

MOON_PALETTES = {
    "rocky_gray": {
        "surface": ("#9a9a9a", "#8a8a8a", "#7a7a7a", "#6a6a6a", "#5a5a5a"),
        "crater": ("#4a4a4a", "#3a3a3a", "#2a2a2a"),
        "maria": ("#5a5a5a", "#4a4a4a", "#3a3a3a"),
    },
    "rocky_tan": {
        "surface": ("#c0b0a0", "#b0a090", "#a09080", "#908070", "#807060"),
        "crater": ("#706050", "#605040", "#504030"),
        "maria": ("#706050", "#605040", "#504030"),
    },
    "rocky_brown": {
        "surface": ("#a08060", "#907050", "#806040", "#705030", "#604020"),
        "crater": ("#503010", "#402000", "#301000"),
        "maria": ("#604020", "#503010", "#402000"),
    },
    "icy": {
        "surface": ("#e0f0ff", "#d0e0f0", "#c0d0e0", "#b0c0d0", "#a0b0c0"),
        "crater": ("#90a0b0", "#8090a0", "#708090"),
        "maria": ("#90a0b0", "#8090a0", "#708090"),
    },
    "volcanic": {
        "surface": ("#6a5a4a", "#5a4a3a", "#4a3a2a", "#3a2a1a", "#2a1a0a"),
        "crater": ("#1a0a00", "#0a0000", "#000000"),
        "maria": ("#2a1a0a", "#1a0a00", "#0a0000"),
        "lava": ("#ff4400", "#ff6600", "#ff8800"),
    },
}

GAS_GIANT_PALETTES = {
    "jovian_tan": {
        "light_bands": ("#f4e4d0", "#e0d0b0", "#d0c0a0"),
        "dark_bands": ("#b0a080", "#a09070", "#908060"),
        "storms": ("#dd8855", "#cc7744", "#bb6633"),
        "poles": ("#c0b0a0", "#b0a090", "#a09080"),
    },
    "jovian_orange": {
        "light_bands": ("#ffcc88", "#ffbb77", "#ffaa66"),
        "dark_bands": ("#dd7733", "#cc6622", "#bb5511"),
        "storms": ("#ff4422", "#ee3311", "#dd2200"),
        "poles": ("#bb8855", "#aa7744", "#996633"),
    },
    "ice_giant_blue": {
        "light_bands": ("#88ccff", "#77bbee", "#66aadd"),
        "dark_bands": ("#4488cc", "#3377bb", "#2266aa"),
        "storms": ("#2255aa", "#114499", "#003388"),
        "poles": ("#5599dd", "#4488cc", "#3377bb"),
    },
    "ice_giant_teal": {
        "light_bands": ("#88ffee", "#77eedd", "#66ddcc"),
        "dark_bands": ("#44ccbb", "#33bbaa", "#22aa99"),
        "storms": ("#228899", "#117788", "#006677"),
        "poles": ("#55ddcc", "#44ccbb", "#33bbaa"),
    },
    "hot_jupiter": {
        "light_bands": ("#4a3a2a", "#3a2a1a", "#2a1a0a"),
        "dark_bands": ("#2a1a0a", "#1a0a00", "#0a0000"),
        "storms": ("#ff6600", "#ff5500", "#ff4400"),
        "poles": ("#3a2a1a", "#2a1a0a", "#1a0a00"),
    },
    "storm_giant": {
        "light_bands": ("#e0d0ff", "#d0c0ee", "#c0b0dd"),
        "dark_bands": ("#9080cc", "#8070bb", "#7060aa"),
        "storms": ("#ff88cc", "#ee77bb", "#dd66aa"),
        "poles": ("#b0a0dd", "#a090cc", "#9080bb"),
    },
    "purple_giant": {
        "light_bands": ("#dd99ff", "#cc88ee", "#bb77dd"),
        "dark_bands": ("#9955cc", "#8844bb", "#7733aa"),
        "storms": ("#cc44ff", "#bb33ee", "#aa22dd"),
        "poles": ("#aa66dd", "#9955cc", "#8844bb"),
    },
    "green_giant": {
        "light_bands": ("#99ff99", "#88ee88", "#77dd77"),
        "dark_bands": ("#55aa55", "#449944", "#338833"),
        "storms": ("#44bb44", "#33aa33", "#229922"),
        "poles": ("#66cc66", "#55bb55", "#44aa44"),
    },
    "ringed_giant": {
        "light_bands": ("#ffeecc", "#eeddbb", "#ddccaa"),
        "dark_bands": ("#aa9977", "#998866", "#887755"),
        "storms": ("#cc9966", "#bb8855", "#aa7744"),
        "poles": ("#ccbb99", "#bbaa88", "#aa9977"),
        "rings": ("#d0c0b0", "#c0b0a0", "#b0a090"),
    },
}

# Black holes without a "jet" ramp never launch jets
BLACK_HOLE_PALETTES = {
    "stellar": {
        "accretion_hot": ("#ffffff", "#ffffaa", "#ffff88"),
        "accretion_warm": ("#ffaa55", "#ff8844", "#ff6633"),
        "accretion_cool": ("#ff4422", "#ff2211", "#cc0000"),
        "jet": ("#88aaff",),
        "lensing": ("#ffffff",),
    },
    "intermediate": {
        "accretion_hot": ("#ffffee", "#ffffdd", "#ffffcc"),
        "accretion_warm": ("#ffcc88", "#ffaa66", "#ff8844"),
        "accretion_cool": ("#ff5533", "#ff3322", "#dd1100"),
        "jet": ("#99bbff",),
        "lensing": ("#ffffff",),
    },
    "supermassive": {
        "accretion_hot": ("#ffffff", "#ffffee", "#ffffdd"),
        "accretion_warm": ("#ffddaa", "#ffcc99", "#ffbb88"),
        "accretion_cool": ("#ff7744", "#ff5522", "#ff3300"),
        "jet": ("#aaccff",),
        "lensing": ("#ffffff",),
    },
    "active_quasar": {
        "accretion_hot": ("#ffffff", "#ffffff", "#ffffee"),
        "accretion_warm": ("#ffffcc", "#ffffaa", "#ffff88"),
        "accretion_cool": ("#ffaa66", "#ff8844", "#ff6622"),
        "jet": ("#ddeeff",),
        "lensing": ("#ffffff",),
    },
    "dormant": {
        "accretion_hot": ("#ffaa88", "#ff9977", "#ff8866"),
        "accretion_warm": ("#ff6644", "#ff4433", "#ff2222"),
        "accretion_cool": ("#cc1100", "#aa0000", "#880000"),
        "lensing": ("#888888",),
    },
}

ASTEROID_PALETTES = {
    "rocky": {"surface": ("#6a5a4a", "#5a4a3a", "#4a3a2a")},
    "metallic": {"surface": ("#8a7a6a", "#aa8866", "#ccaa88")},
    "icy": {"surface": ("#c0d0e0", "#b0c0d0", "#a0b0c0")},
    "carbonaceous": {"surface": ("#2a2a2a", "#3a3a3a", "#1a1a1a")},
    "stony_iron": {"surface": ("#9a7a5a", "#8a6a4a", "#7a5a3a")},
    "nickel_iron": {"surface": ("#b0a090", "#a09080", "#908070")},
    "silicate": {"surface": ("#a08060", "#907050", "#806040")},
    "ice_rock": {"surface": ("#d0e0f0", "#c0d0e0", "#b0c0d0")},
    "dark_carbon": {"surface": ("#1a1a1a", "#0a0a0a", "#000000")},
    "rusty": {"surface": ("#aa5533", "#995544", "#884433")},
    "bright_metal": {"surface": ("#d0c0b0", "#c0b0a0", "#b0a090")},
    "dark_metal": {"surface": ("#5a4a3a", "#4a3a2a", "#3a2a1a")},
}

COMET_PALETTES = {
    "default": {
        "tail": ((180, 200, 255),),
        "coma": ((200, 220, 255),),
        "nucleus": ((100, 90, 80),),
    },
}

PLANET_PALETTES = {
    "terran": {
        "deep_ocean": ("#001a4d", "#00143d", "#000e2d"),
        "ocean": ("#0047ab", "#003d99", "#002966"),
        "shallow_water": ("#2080c0", "#1870b0", "#1060a0"),
        "sand": ("#f4e4a0", "#e0d090", "#d0c080"),
        "grass": ("#2d8659", "#3a9b6e", "#1d6b42"),
        "forest": ("#1d5b32", "#2d6b42", "#0d4b22"),
        "mountain": ("#8b7355", "#a08968", "#6b5944"),
        "snow_peak": ("#f0f8ff", "#e0e8f0", "#d0d8e0"),
        "ice": ("#e0f0ff", "#c0d8f0", "#a0c0e0"),
        "cloud": ("#ffffff", "#f0f0f0", "#e0e0e0"),
        "city": ("#ffcc00", "#ffaa00", "#ff8800"),
    },
    "ocean": {
        "deep_ocean": ("#000a2d", "#00061d", "#00020d"),
        "ocean": ("#001a4d", "#00143d", "#000e2d"),
        "shallow_water": ("#0047ab", "#003d99", "#002966"),
        "ice": ("#c0e0ff", "#d0f0ff", "#e0f5ff"),
        "island": ("#6a5a4a", "#5a4a3a", "#4a3a2a"),
    },
    "desert": {
        "sand": ("#f4a460", "#daa520", "#cd853f"),
        "dark_sand": ("#c89050", "#b08040", "#987030"),
        "rock": ("#a0522d", "#8b4513", "#6b3410"),
        "crater": ("#5a3a1a", "#4a2a0a", "#3a1a00"),
        "dune": ("#e0b080", "#d0a070", "#c09060"),
    },
    "ice": {
        "ice": ("#e0f5ff", "#b0d5f5", "#90c5e5"),
        "dark_ice": ("#a0c5d5", "#80a5b5", "#608595"),
        "crack": ("#7090a0", "#506070", "#304050"),
        "deep": ("#d0e5f0", "#a0c5d5", "#80a5b5"),
    },
    "lava": {
        "crust": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
        "cooling_lava": ("#aa3300", "#882200", "#661100"),
        "lava": ("#ff4400", "#ff6600", "#ff8800"),
        "bright_lava": ("#ffaa00", "#ffcc00", "#ffee00"),
        "ash": ("#4a4a4a", "#3a3a3a", "#2a2a2a"),
    },
    "volcanic": {
        "rock": ("#3a2a1a", "#2a1a0a", "#1a0a00"),
        "ash": ("#5a5a5a", "#4a4a4a", "#3a3a3a"),
        "lava": ("#ff5500", "#ff7700", "#ff9900"),
        "smoke": ("#6a6a6a", "#5a5a5a", "#4a4a4a"),
    },
    "rocky": {
        "rock": ("#6a5a4a", "#5a4a3a", "#4a3a2a"),
        "dark_rock": ("#4a3a2a", "#3a2a1a", "#2a1a0a"),
        "crater": ("#3a2a1a", "#2a1a0a", "#1a0a00"),
        "dust": ("#8a7a6a", "#7a6a5a", "#6a5a4a"),
        "iron": ("#aa7755", "#996644", "#885533"),
    },
    "jungle": {
        "canopy": ("#0d4b22", "#1d5b32", "#0d3b12"),
        "forest": ("#1d6b42", "#2d7b52", "#1d5b32"),
        "clearing": ("#3a9b6e", "#4aab7e", "#3a8b5e"),
        "river": ("#2080c0", "#1870b0", "#1060a0"),
        "mountain": ("#5a6a4a", "#4a5a3a", "#3a4a2a"),
    },
    "toxic": {
        "surface": ("#4a5a2a", "#3a4a1a", "#2a3a0a"),
        "pool": ("#6a8a3a", "#5a7a2a", "#4a6a1a"),
        "cloud": ("#8aaa5a", "#7a9a4a", "#6a8a3a"),
        "waste": ("#5a6a3a", "#4a5a2a", "#3a4a1a"),
    },
    "frozen": {
        "ice": ("#e0f0ff", "#c0d8f0", "#a0c0e0"),
        "dark_ice": ("#90b0d0", "#7090b0", "#507090"),
        "snow": ("#ffffff", "#f0f8ff", "#e0f0f8"),
        "rock": ("#6a7a8a", "#5a6a7a", "#4a5a6a"),
    },
    "tundra": {
        "snow": ("#f0f8ff", "#e0f0f8", "#d0e8f0"),
        "ice": ("#c0d8f0", "#b0c8e0", "#a0b8d0"),
        "rock": ("#6a7a8a", "#5a6a7a", "#4a5a6a"),
        "moss": ("#4a5a4a", "#3a4a3a", "#2a3a2a"),
    },
    "savanna": {
        "grass": ("#c0b060", "#b0a050", "#a09040"),
        "dry_grass": ("#d0c080", "#c0b070", "#b0a060"),
        "tree": ("#5a6a3a", "#4a5a2a", "#3a4a1a"),
        "soil": ("#8a6a4a", "#7a5a3a", "#6a4a2a"),
    },
    "barren": {
        "rock": ("#5a4a3a", "#4a3a2a", "#3a2a1a"),
        "dust": ("#7a6a5a", "#6a5a4a", "#5a4a3a"),
        "crater": ("#2a1a0a", "#1a0a00", "#0a0000"),
    },
    "carbon": {
        "graphite": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
        "diamond": ("#6a8a9a", "#5a7a8a", "#4a6a7a"),
        "tar": ("#1a1a0a", "#0a0a00", "#000000"),
    },
    "crystal": {
        "crystal": ("#a0d0ff", "#80b0e0", "#6090c0"),
        "dark_crystal": ("#5070a0", "#405080", "#304060"),
        "shine": ("#d0f0ff", "#c0e0f0", "#b0d0e0"),
    },
    "metal": {
        "iron": ("#8a7a6a", "#7a6a5a", "#6a5a4a"),
        "rust": ("#aa5533", "#994422", "#883311"),
        "shine": ("#c0b0a0", "#b0a090", "#a09080"),
    },
    "arctic": {
        "ice": ("#f0f8ff", "#e0f0ff", "#d0e8f8"),
        "snow": ("#ffffff", "#f8fcff", "#f0f8ff"),
        "rock": ("#8090a0", "#708090", "#607080"),
    },
    "tropical": {
        "jungle": ("#0d4b22", "#1d5b32", "#2d6b42"),
        "beach": ("#f4e4a0", "#e0d090", "#d0c080"),
        "ocean": ("#0080c0", "#0070b0", "#0060a0"),
    },
    "arid": {
        "sand": ("#e0b080", "#d0a070", "#c09060"),
        "rock": ("#b08050", "#a07040", "#906030"),
        "dune": ("#f0c090", "#e0b080", "#d0a070"),
    },
    "swamp": {
        "mud": ("#4a5a3a", "#3a4a2a", "#2a3a1a"),
        "water": ("#5a6a4a", "#4a5a3a", "#3a4a2a"),
        "vegetation": ("#2d5b32", "#1d4b22", "#0d3b12"),
    },
    "continental": {
        "land": ("#6a8a5a", "#5a7a4a", "#4a6a3a"),
        "mountain": ("#8a7a6a", "#7a6a5a", "#6a5a4a"),
        "ocean": ("#2080c0", "#1070b0", "#0060a0"),
    },
    "island": {
        "sand": ("#f4e4a0", "#e0d090", "#d0c080"),
        "vegetation": ("#3a9b6e", "#2a8b5e", "#1a7b4e"),
        "ocean": ("#0080c0", "#0070b0", "#0060a0"),
    },
    "pangaea": {
        "central": ("#5a7a4a", "#4a6a3a", "#3a5a2a"),
        "coast": ("#6a8a5a", "#5a7a4a", "#4a6a3a"),
        "ocean": ("#1080c0", "#0070b0", "#0060a0"),
    },
    "archipelago": {
        "island": ("#6a8a5a", "#5a7a4a", "#4a6a3a"),
        "water": ("#2080c0", "#1870b0", "#1060a0"),
        "reef": ("#4090d0", "#3080c0", "#2070b0"),
    },
    "canyon": {
        "rim": ("#d0a070", "#c09060", "#b08050"),
        "wall": ("#b08050", "#a07040", "#906030"),
        "floor": ("#906030", "#805020", "#704010"),
    },
    "mesa": {
        "top": ("#e0b080", "#d0a070", "#c09060"),
        "cliff": ("#c09060", "#b08050", "#a07040"),
        "desert": ("#d0a070", "#c09060", "#b08050"),
    },
    "rift": {
        "valley": ("#5a6a4a", "#4a5a3a", "#3a4a2a"),
        "wall": ("#7a6a5a", "#6a5a4a", "#5a4a3a"),
        "lava": ("#ff6600", "#ff5500", "#ff4400"),
    },
    "shield": {
        "lava": ("#4a3a2a", "#3a2a1a", "#2a1a0a"),
        "flow": ("#6a5a4a", "#5a4a3a", "#4a3a2a"),
        "vent": ("#ff5500", "#ff4400", "#ff3300"),
    },
    "supervolcano": {
        "caldera": ("#3a2a1a", "#2a1a0a", "#1a0a00"),
        "lava": ("#ff4400", "#ff5500", "#ff6600"),
        "ash": ("#5a5a5a", "#4a4a4a", "#3a3a3a"),
    },
    "geothermal": {
        "hot": ("#ff8844", "#ff7733", "#ff6622"),
        "warm": ("#dd6633", "#cc5522", "#bb4411"),
        "steam": ("#e0e0e0", "#d0d0d0", "#c0c0c0"),
    },
    "primordial": {
        "proto": ("#8a6a4a", "#7a5a3a", "#6a4a2a"),
        "molten": ("#ff6600", "#ff5500", "#ff4400"),
        "forming": ("#a07a5a", "#906a4a", "#805a3a"),
    },
    "dead": {
        "surface": ("#4a4a4a", "#3a3a3a", "#2a2a2a"),
        "crater": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
        "dust": ("#5a5a5a", "#4a4a4a", "#3a3a3a"),
    },
    "storm": {
        "cloud": ("#8090a0", "#708090", "#607080"),
        "dark": ("#506070", "#405060", "#304050"),
        "lightning": ("#d0e0f0", "#c0d0e0", "#b0c0d0"),
    },
    "windy": {
        "sand": ("#d0b080", "#c0a070", "#b09060"),
        "dune": ("#e0c090", "#d0b080", "#c0a070"),
        "dust": ("#b09060", "#a08050", "#907040"),
    },
    "fog": {
        "mist": ("#d0d8e0", "#c0c8d0", "#b0b8c0"),
        "surface": ("#8090a0", "#708090", "#607080"),
        "dense": ("#a0b0c0", "#90a0b0", "#8090a0"),
    },
    "dust": {
        "fine": ("#c0a080", "#b09070", "#a08060"),
        "coarse": ("#a08060", "#907050", "#806040"),
        "settled": ("#907050", "#806040", "#705030"),
    },
    "ash": {
        "light": ("#b0b0b0", "#a0a0a0", "#909090"),
        "dark": ("#606060", "#505050", "#404040"),
        "volcanic": ("#707070", "#606060", "#505050"),
    },
    "sulfur": {
        "yellow": ("#ffff00", "#eeee00", "#dddd00"),
        "orange": ("#ffaa00", "#ff9900", "#ff8800"),
        "deposit": ("#cccc00", "#bbbb00", "#aaaa00"),
    },
    "methane": {
        "ice": ("#c0e0ff", "#b0d0f0", "#a0c0e0"),
        "liquid": ("#8090ff", "#7080ee", "#6070dd"),
        "atmosphere": ("#90a0ff", "#8090ee", "#7080dd"),
    },
    "ammonia": {
        "ice": ("#e0f0ff", "#d0e0f0", "#c0d0e0"),
        "clouds": ("#b0c0d0", "#a0b0c0", "#90a0b0"),
        "surface": ("#c0d0e0", "#b0c0d0", "#a0b0c0"),
    },
    "silicate": {
        "rock": ("#8a7a6a", "#7a6a5a", "#6a5a4a"),
        "mineral": ("#a09080", "#908070", "#807060"),
        "crystal": ("#b0a090", "#a09080", "#908070"),
    },
    "iron": {
        "surface": ("#8a6a5a", "#7a5a4a", "#6a4a3a"),
        "oxide": ("#aa5533", "#995544", "#884433"),
        "pure": ("#9a8a7a", "#8a7a6a", "#7a6a5a"),
    },
    "nickel": {
        "surface": ("#b0a090", "#a09080", "#908070"),
        "alloy": ("#c0b0a0", "#b0a090", "#a09080"),
        "deposit": ("#a09080", "#908070", "#807060"),
    },
    "diamond": {
        "crystal": ("#f0f8ff", "#e0f0ff", "#d0e8f8"),
        "shine": ("#ffffff", "#f0f8ff", "#e0f0ff"),
        "facet": ("#d0e8f8", "#c0d8e8", "#b0c8d8"),
    },
    "graphite": {
        "layer": ("#3a3a3a", "#2a2a2a", "#1a1a1a"),
        "surface": ("#4a4a4a", "#3a3a3a", "#2a2a2a"),
        "deposit": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
    },
    "ruby": {
        "red": ("#ff0044", "#ee0033", "#dd0022"),
        "dark": ("#aa0022", "#990011", "#880000"),
        "shine": ("#ff4466", "#ff3355", "#ff2244"),
    },
    "sapphire": {
        "blue": ("#0044ff", "#0033ee", "#0022dd"),
        "dark": ("#0022aa", "#001199", "#000088"),
        "shine": ("#4466ff", "#3355ff", "#2244ff"),
    },
    "emerald": {
        "green": ("#00ff44", "#00ee33", "#00dd22"),
        "dark": ("#00aa22", "#009911", "#008800"),
        "shine": ("#44ff66", "#33ff55", "#22ff44"),
    },
    "quartz": {
        "clear": ("#f0f0f0", "#e0e0e0", "#d0d0d0"),
        "milky": ("#e0e0e0", "#d0d0d0", "#c0c0c0"),
        "crystal": ("#ffffff", "#f0f0f0", "#e0e0e0"),
    },
    "obsidian": {
        "black": ("#1a1a1a", "#0a0a0a", "#000000"),
        "glassy": ("#2a2a2a", "#1a1a1a", "#0a0a0a"),
        "shine": ("#3a3a3a", "#2a2a2a", "#1a1a1a"),
    },
    "marble": {
        "white": ("#f0f0f0", "#e0e0e0", "#d0d0d0"),
        "vein": ("#d0d0d0", "#c0c0c0", "#b0b0b0"),
        "surface": ("#e0e0e0", "#d0d0d0", "#c0c0c0"),
    },
    "granite": {
        "speckled": ("#c0b0a0", "#b0a090", "#a09080"),
        "dark": ("#8a7a6a", "#7a6a5a", "#6a5a4a"),
        "light": ("#d0c0b0", "#c0b0a0", "#b0a090"),
    },
    "basalt": {
        "dark": ("#4a4a4a", "#3a3a3a", "#2a2a2a"),
        "columnar": ("#5a5a5a", "#4a4a4a", "#3a3a3a"),
        "flow": ("#3a3a3a", "#2a2a2a", "#1a1a1a"),
    },
    "sandstone": {
        "red": ("#d08060", "#c07050", "#b06040"),
        "tan": ("#d0b090", "#c0a080", "#b09070"),
        "layered": ("#c09060", "#b08050", "#a07040"),
    },
    "limestone": {
        "white": ("#e0d0c0", "#d0c0b0", "#c0b0a0"),
        "cream": ("#f0e0d0", "#e0d0c0", "#d0c0b0"),
        "weathered": ("#d0c0b0", "#c0b0a0", "#b0a090"),
    },
    "shale": {
        "layered": ("#7a6a5a", "#6a5a4a", "#5a4a3a"),
        "dark": ("#5a4a3a", "#4a3a2a", "#3a2a1a"),
        "split": ("#6a5a4a", "#5a4a3a", "#4a3a2a"),
    },
    "slate": {
        "gray": ("#7a7a7a", "#6a6a6a", "#5a5a5a"),
        "blue": ("#6a7a8a", "#5a6a7a", "#4a5a6a"),
        "split": ("#6a6a6a", "#5a5a5a", "#4a4a4a"),
    },
    "gneiss": {
        "banded": ("#9a8a7a", "#8a7a6a", "#7a6a5a"),
        "light": ("#b0a090", "#a09080", "#908070"),
        "dark": ("#7a6a5a", "#6a5a4a", "#5a4a3a"),
    },
    "schist": {
        "shiny": ("#8a8a8a", "#7a7a7a", "#6a6a6a"),
        "foliated": ("#7a7a7a", "#6a6a6a", "#5a5a5a"),
        "mica": ("#9a9a9a", "#8a8a8a", "#7a7a7a"),
    },
}

DEFAULT_VARIANTS = {
    "star": "G",
    "planet": "rocky",
    "moon": "rocky_gray",
    "gas_giant": "jovian_tan",
    "black_hole": "stellar",
    "asteroid": "rocky",
    "comet": "default",
}

DEFAULT_PALETTES = PaletteTable(
    {
        "star": STAR_PALETTES,
        "planet": PLANET_PALETTES,
        "moon": MOON_PALETTES,
        "gas_giant": GAS_GIANT_PALETTES,
        "black_hole": BLACK_HOLE_PALETTES,
        "asteroid": ASTEROID_PALETTES,
        "comet": COMET_PALETTES,
    },
    DEFAULT_VARIANTS,
)

"""
Body specifications and the renderer base classes.

Every sprite is described by a BodySpec. A renderer turns one spec into
RGBA frames: sample the block grid for a phase, paint a Canvas, expand
the blocks to full resolution.
"""

import abc
import enum
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from orrery.core.colorgrade import shade
from orrery.core.compositor import Canvas, PriorityChain
from orrery.core.noise import NoiseField, SampleFrequencyStack
from orrery.core.palettes import DEFAULT_PALETTES, Palette, PaletteTable
from orrery.core.sampler import DEFAULT_LIGHT, LightingModel, SurfaceSample, SurfaceSampler
from orrery.errors import ConfigurationError, InvalidDimensionError, UnknownBodyTypeError

TAU = 2.0 * math.pi


class BodyKind(str, enum.Enum):
    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    GAS_GIANT = "gas_giant"
    BLACK_HOLE = "black_hole"
    ASTEROID = "asteroid"
    COMET = "comet"

    @classmethod
    def parse(cls, value) -> "BodyKind":
        """Accept a BodyKind, its value, or a dashed/upper-case spelling."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("-", "_")
        try:
            return cls(text)
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise UnknownBodyTypeError(f"Unknown body kind {value!r} (expected one of: {known})") from None

    @property
    def category(self) -> str:
        """Manifest section and output sub-directory."""
        return self.value + "s"


# Core diameter and canvas size per stellar class
STAR_SIZES: Dict[str, Tuple[int, int]] = {
    "O": (1400, 2400),
    "B": (1300, 2200),
    "A": (1100, 1900),
    "F": (1200, 2000),
    "G": (1200, 2000),
    "K": (900, 1600),
    "M": (600, 1100),
    "BrownDwarf": (600, 1100),
    "WhiteDwarf": (600, 1100),
    "NeutronStar": (350, 700),
    "Pulsar": (400, 800),
    "RedGiant": (1500, 2600),
    "BlueGiant": (1500, 2600),
    "RedSuperGiant": (1600, 2800),
    "BlueSuperGiant": (1500, 2600),
}

VARIANTS: Dict[BodyKind, Tuple[str, ...]] = {
    BodyKind.STAR: tuple(STAR_SIZES),
    BodyKind.PLANET: (
        "terran", "rocky", "desert", "ice", "frozen", "tundra",
        "lava", "volcanic", "ocean", "carbon", "crystal", "metal",
        "eyeball", "tidally_locked", "radioactive", "super_earth", "jungle",
        "toxic", "barren", "savanna", "arctic", "tropical", "arid", "swamp",
        "continental", "island", "pangaea", "archipelago", "canyon", "mesa",
        "rift", "shield", "supervolcano", "geothermal", "primordial", "dead",
        "storm", "windy", "fog", "dust", "ash", "sulfur", "methane", "ammonia",
        "silicate", "iron", "nickel", "diamond", "graphite", "ruby", "sapphire",
        "emerald", "quartz", "obsidian", "marble", "granite", "basalt",
        "sandstone", "limestone", "shale", "slate", "gneiss", "schist",
    ),
    BodyKind.MOON: ("rocky_gray", "rocky_tan", "rocky_brown", "icy", "volcanic"),
    BodyKind.GAS_GIANT: (
        "jovian_tan", "jovian_orange", "ice_giant_blue", "ice_giant_teal",
        "hot_jupiter", "storm_giant", "purple_giant", "green_giant", "ringed_giant",
    ),
    BodyKind.BLACK_HOLE: ("stellar", "intermediate", "supermassive", "active_quasar", "dormant"),
    BodyKind.ASTEROID: (
        "rocky", "metallic", "icy", "carbonaceous", "stony_iron", "nickel_iron",
        "silicate", "ice_rock", "dark_carbon", "rusty", "bright_metal", "dark_metal",
    ),
    BodyKind.COMET: ("default",),
}

# (frame_count, pixel_size) per kind
FRAME_DEFAULTS: Dict[BodyKind, Tuple[int, int]] = {
    BodyKind.STAR: (24, 1),
    BodyKind.PLANET: (32, 3),
    BodyKind.MOON: (24, 3),
    BodyKind.GAS_GIANT: (32, 4),
    BodyKind.BLACK_HOLE: (24, 4),
    BodyKind.ASTEROID: (16, 3),
    BodyKind.COMET: (12, 4),
}

# Frame sizes cycled by sprite index; stars use STAR_SIZES instead
FRAME_SIZES: Dict[BodyKind, Tuple[int, ...]] = {
    BodyKind.PLANET: (800,),
    BodyKind.MOON: (250, 280, 310, 340, 370, 400),
    BodyKind.GAS_GIANT: (1200, 1400, 1600, 1800),
    # Canvas is twice the hole's base size to leave room for the disk and jets
    BodyKind.BLACK_HOLE: (1200, 1600, 2000),
    BodyKind.ASTEROID: (120, 150, 180, 210, 240, 270, 300, 330, 360, 390, 420, 450),
    BodyKind.COMET: (300,),
}


def default_variant(kind) -> str:
    return DEFAULT_PALETTES.defaults[BodyKind.parse(kind).value]


def default_frame_size(kind, variant: Optional[str] = None, index: int = 0) -> int:
    kind = BodyKind.parse(kind)
    if kind is BodyKind.STAR:
        return STAR_SIZES.get(variant, STAR_SIZES["G"])[1]
    sizes = FRAME_SIZES[kind]
    return sizes[index % len(sizes)]


def _check_positive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensionError(f"{name} must be positive, got {value}")
    return int(value)


@dataclass(frozen=True)
class BodySpec:
    """
    Everything needed to render one sprite sheet.

    Attributes:
        kind: Body type; strings are coerced, unknown kinds raise UnknownBodyTypeError.
        variant: Palette/subtype name. Empty means the kind's default; unknown
            names are accepted and render with the default palette.
        seed: Noise seed. Same spec, same pixels.
        frame_count: Animation frames in the filmstrip.
        frame_size: Width and height of one frame in pixels.
        pixel_size: Edge of the square blocks the surface is sampled in.
    """

    kind: BodyKind
    variant: str = ""
    seed: int = 0
    frame_count: int = 24
    frame_size: int = 256
    pixel_size: int = 1

    def __post_init__(self):
        object.__setattr__(self, "kind", BodyKind.parse(self.kind))
        if not self.variant:
            object.__setattr__(self, "variant", default_variant(self.kind))
        if isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer)):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        object.__setattr__(self, "seed", int(self.seed))
        for name in ("frame_count", "frame_size", "pixel_size"):
            object.__setattr__(self, name, _check_positive(name, getattr(self, name)))

    @classmethod
    def defaults(cls, kind, variant: Optional[str] = None, seed: int = 0, index: int = 0, **overrides) -> "BodySpec":
        """Spec with the frame count, size and pixel size the kind is normally rendered at."""
        kind = BodyKind.parse(kind)
        variant = variant or default_variant(kind)
        frame_count, pixel_size = FRAME_DEFAULTS[kind]
        values = dict(
            kind=kind,
            variant=variant,
            seed=seed,
            frame_count=frame_count,
            frame_size=default_frame_size(kind, variant, index),
            pixel_size=pixel_size,
        )
        values.update(overrides)
        return cls(**values)

    @property
    def sheet_width(self) -> int:
        return self.frame_size * self.frame_count

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass
class BodyConfig:
    """Geometry and lighting constants shared by every body type."""
    radius_fraction: float = 0.42
    world_scale: float = 12.0
    angular_speed: float = 1.0
    limb_exponent: float = 0.6
    edge_falloff: float = 0.2
    directional_weight: float = 0.0
    light_direction: Tuple[float, float, float] = DEFAULT_LIGHT

    def lighting(self) -> LightingModel:
        return LightingModel(self.limb_exponent, self.edge_falloff, self.directional_weight)


class BodyRenderer(abc.ABC):
    """
    Abstract base for all body renderers.

    Subclasses set ``kind`` and ``config_class`` and implement ``paint``.
    The renderer owns its NoiseField; nothing is shared between sprites.
    """

    kind: BodyKind
    config_class = BodyConfig

    def __init__(
        self,
        spec: BodySpec,
        noise: Optional[NoiseField] = None,
        palettes: Optional[PaletteTable] = None,
        config: Optional[BodyConfig] = None,
    ):
        if spec.kind is not self.kind:
            raise ConfigurationError(f"{type(self).__name__} cannot render {spec.kind.value}")
        self.spec = spec
        self.palette: Palette = (palettes or DEFAULT_PALETTES).get(spec.kind, spec.variant)
        self.cfg = config or self.default_config()
        self.noise = noise if noise is not None else NoiseField(spec.seed)
        self.sampler = self.build_sampler()

    def default_config(self) -> BodyConfig:
        return self.config_class()

    @property
    def radius(self) -> float:
        return self.spec.frame_size * self.cfg.radius_fraction

    def build_sampler(self) -> SurfaceSampler:
        return SurfaceSampler(
            self.spec.frame_size,
            self.spec.frame_size,
            self.radius,
            pixel_size=self.spec.pixel_size,
            world_scale=self.cfg.world_scale,
            angular_speed=self.cfg.angular_speed,
            light_direction=self.cfg.light_direction,
        )

    def phase(self, frame: int) -> float:
        return frame / self.spec.frame_count * TAU

    def render_frame(self, frame: int) -> np.ndarray:
        """
        Render one animation frame.

        Returns:
            (frame_size, frame_size, 4) uint8 RGBA array.
        """
        if not 0 <= frame < self.spec.frame_count:
            raise IndexError(f"Frame {frame} out of range 0..{self.spec.frame_count - 1}")
        sample = self.sampler.sample(self.phase(frame))
        canvas = Canvas(*self.sampler.grid_shape)
        self.paint(canvas, sample, frame)
        return self.sampler.expand(canvas.to_rgba())

    @abc.abstractmethod
    def paint(self, canvas: Canvas, sample: SurfaceSample, frame: int):
        """Draw one frame onto the block canvas."""
        pass


class SphereBodyRenderer(BodyRenderer):
    """
    Renderer for bodies drawn as a lit, rotating sphere.

    Per frame: sample the named noise fields on the disc, derive
    composite fields, classify every cell through the priority chain,
    shade with the lighting model, then run any outside-disc passes.
    """

    def __init__(self, spec, noise=None, palettes=None, config=None):
        super().__init__(spec, noise, palettes, config)
        self.lighting = self.cfg.lighting()
        self.stack = self.build_stack()
        self.chain = self.build_chain()

    @abc.abstractmethod
    def build_stack(self) -> SampleFrequencyStack:
        pass

    @abc.abstractmethod
    def build_chain(self) -> PriorityChain:
        pass

    def derive(self, fields: Dict[str, Any]):
        """Add composite fields computed from the sampled ones."""
        pass

    def variation(self, fields: Dict[str, Any]):
        return 0.0

    def roughness(self, fields: Dict[str, Any]):
        return 0.0

    def surface_fields(self, sample: SurfaceSample) -> Dict[str, Any]:
        """Sampled, derived and geometric fields for every cell on the disc."""
        fields: Dict[str, Any] = sample.masked()
        fields.update(
            self.stack.sample(
                self.noise, fields["world_x"], fields["world_y"], fields["world_z"], sample.spin
            )
        )
        fields["spin"] = sample.spin
        self.derive(fields)
        return fields

    def paint(self, canvas: Canvas, sample: SurfaceSample, frame: int):
        inside = sample.inside
        if inside.any():
            fields = self.surface_fields(sample)
            count = fields["z"].shape[0]
            rgb, _ = self.chain.composite(fields, count)
            brightness = self.lighting.brightness(
                fields["z"], fields["normalized"], fields["light"], self.roughness(fields)
            )
            variation = np.broadcast_to(np.asarray(self.variation(fields), dtype=np.float64), (count,))
            canvas.fill(inside, shade(rgb, variation, brightness))
        self.paint_outside(canvas, sample, frame)

    def paint_outside(self, canvas: Canvas, sample: SurfaceSample, frame: int):
        """Passes beyond the disc (halo, rings). Runs after the surface."""
        pass

    def paint_halo(self, canvas: Canvas, sample: SurfaceSample, scale: float, color, alpha: float):
        """Thin translucent ring centred on ``scale`` times the radius."""
        ring = self.sampler.radius * scale
        width = self.spec.pixel_size
        band = (~sample.inside) & (np.abs(sample.distance - ring) <= width)
        canvas.blend(band, color, alpha)

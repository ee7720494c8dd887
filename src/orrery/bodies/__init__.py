"""Body specifications and one renderer per celestial body type."""

from typing import Dict, Optional, Type

from orrery.bodies.asteroid import AsteroidRenderer
from orrery.bodies.base import (
    FRAME_DEFAULTS,
    STAR_SIZES,
    VARIANTS,
    BodyConfig,
    BodyKind,
    BodyRenderer,
    BodySpec,
    SphereBodyRenderer,
)
from orrery.bodies.black_hole import BlackHoleRenderer
from orrery.bodies.comet import CometRenderer
from orrery.bodies.gas_giant import GasGiantRenderer
from orrery.bodies.moon import MoonRenderer
from orrery.bodies.planet import PlanetRenderer
from orrery.bodies.star import StarRenderer
from orrery.core.noise import NoiseField
from orrery.core.palettes import PaletteTable

RENDERERS: Dict[BodyKind, Type[BodyRenderer]] = {
    BodyKind.STAR: StarRenderer,
    BodyKind.PLANET: PlanetRenderer,
    BodyKind.MOON: MoonRenderer,
    BodyKind.GAS_GIANT: GasGiantRenderer,
    BodyKind.BLACK_HOLE: BlackHoleRenderer,
    BodyKind.ASTEROID: AsteroidRenderer,
    BodyKind.COMET: CometRenderer,
}


def create_renderer(
    spec: BodySpec,
    noise: Optional[NoiseField] = None,
    palettes: Optional[PaletteTable] = None,
) -> BodyRenderer:
    """Instantiate the renderer registered for ``spec.kind``."""
    return RENDERERS[spec.kind](spec, noise=noise, palettes=palettes)


__all__ = [
    "AsteroidRenderer",
    "BlackHoleRenderer",
    "BodyConfig",
    "BodyKind",
    "BodyRenderer",
    "BodySpec",
    "CometRenderer",
    "FRAME_DEFAULTS",
    "GasGiantRenderer",
    "MoonRenderer",
    "PlanetRenderer",
    "RENDERERS",
    "STAR_SIZES",
    "SphereBodyRenderer",
    "StarRenderer",
    "VARIANTS",
    "create_renderer",
]

"""
Frame assembly: render every animation frame of a body and pack the
frames left to right into a single RGBA filmstrip.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from orrery.bodies import BodySpec, create_renderer
from orrery.core.noise import NoiseField
from orrery.core.palettes import PaletteTable
from orrery.errors import InvalidDimensionError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class SpriteFrame:
    """Pixel rectangle of one frame inside a sheet."""

    index: int
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower), as Pillow's crop expects."""
        return self.x, self.y, self.x + self.width, self.y + self.height


def frame_index_for_rotation(angle: float, frame_count: int) -> int:
    """
    Frame whose rotation phase covers ``angle``.

    Args:
        angle: Rotation in radians, any value; wrapped into [0, 2*pi).
        frame_count: Frames in the sheet.

    Returns:
        Index in ``[0, frame_count)``.
    """
    if frame_count <= 0:
        raise InvalidDimensionError(f"frame_count must be positive, got {frame_count}")
    tau = 2.0 * math.pi
    normalized = math.fmod(angle, tau)
    if normalized < 0:
        normalized += tau
    return int(math.floor(normalized / tau * frame_count)) % frame_count


def frame_layout(frame_width: int, frame_height: int, frame_count: int) -> Tuple[SpriteFrame, ...]:
    return tuple(
        SpriteFrame(index=i, x=i * frame_width, y=0, width=frame_width, height=frame_height)
        for i in range(frame_count)
    )


class SpriteSheet:
    """
    Horizontal filmstrip of equally sized RGBA frames.

    ``pixels`` is an (H, W * n, 4) uint8 array and is read-only.
    """

    def __init__(
        self,
        pixels: np.ndarray,
        frame_width: int,
        frame_height: int,
        frame_count: int,
        frames: Optional[Sequence[SpriteFrame]] = None,
    ):
        pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        expected = (frame_height, frame_width * frame_count, 4)
        if pixels.shape != expected:
            raise InvalidDimensionError(f"Sheet pixels have shape {pixels.shape}, expected {expected}")
        pixels.setflags(write=False)

        self.pixels = pixels
        self.frame_width = int(frame_width)
        self.frame_height = int(frame_height)
        self.frame_count = int(frame_count)
        self.frames: Tuple[SpriteFrame, ...] = (
            tuple(frames) if frames is not None else frame_layout(frame_width, frame_height, frame_count)
        )

    def __repr__(self) -> str:
        return (
            f"SpriteSheet({self.frame_count} frames of "
            f"{self.frame_width}x{self.frame_height})"
        )

    @property
    def width(self) -> int:
        return self.frame_width * self.frame_count

    @property
    def height(self) -> int:
        return self.frame_height

    def frame(self, index: int) -> np.ndarray:
        """Read-only view of one frame's pixels."""
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range 0..{self.frame_count - 1}")
        rect = self.frames[index]
        return self.pixels[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width]

    def frame_for_rotation(self, angle: float) -> np.ndarray:
        return self.frame(frame_index_for_rotation(angle, self.frame_count))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.array(self.pixels))

    @classmethod
    def from_image(cls, image: Image.Image, frame_width: int) -> "SpriteSheet":
        """Rebuild a sheet from a decoded filmstrip image."""
        pixels = np.asarray(image.convert("RGBA"), dtype=np.uint8)
        height, width = pixels.shape[:2]
        if frame_width <= 0 or width % frame_width:
            raise InvalidDimensionError(
                f"Image width {width} is not a multiple of frame width {frame_width}"
            )
        return cls(pixels, frame_width, height, width // frame_width)


class FrameAssembler:
    """
    Renders BodySpecs into SpriteSheets.

    A fresh NoiseField is created for every call, so assemblers can be
    shared freely and identical specs always give identical pixels.
    """

    def __init__(
        self,
        noise_factory: Callable[[int], NoiseField] = NoiseField,
        palettes: Optional[PaletteTable] = None,
    ):
        """
        Args:
            noise_factory: Builds the noise field for a seed. Tests pass stubs here.
            palettes: Palette table; the built-in one when omitted.
        """
        self.noise_factory = noise_factory
        self.palettes = palettes

    def _renderer(self, spec: BodySpec):
        return create_renderer(spec, noise=self.noise_factory(spec.seed), palettes=self.palettes)

    def render_frame(self, spec: BodySpec, index: int) -> np.ndarray:
        """
        Render a single frame.

        Returns:
            (frame_size, frame_size, 4) uint8 RGBA array.
        """
        return self._renderer(spec).render_frame(index)

    def generate(self, spec: BodySpec, progress_callback: Optional[ProgressCallback] = None) -> SpriteSheet:
        """
        Render every frame of ``spec`` into a sheet.

        Args:
            spec: Validated body specification.
            progress_callback: Called as ``callback(frames_done, frame_count)``.

        Returns:
            SpriteSheet with ``spec.frame_count`` frames.
        """
        renderer = self._renderer(spec)
        size = spec.frame_size
        pixels = np.zeros((size, size * spec.frame_count, 4), dtype=np.uint8)

        start = time.perf_counter()
        for i in range(spec.frame_count):
            pixels[:, i * size:(i + 1) * size] = renderer.render_frame(i)
            if progress_callback is not None:
                progress_callback(i + 1, spec.frame_count)

        logger.debug(
            "Rendered %s/%s (%d frames at %dpx) in %.2fs",
            spec.kind.value, spec.variant, spec.frame_count, size, time.perf_counter() - start,
        )
        return SpriteSheet(pixels, size, size, spec.frame_count)

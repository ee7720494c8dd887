"""
Rotating-sphere sampling over a pixel-block grid.

A frame is divided into ``pixel_size`` blocks; every block is sampled once
at its centre and later expanded back to full resolution, which gives the
sprites their chunky retro look and keeps the noise work proportional to
the block count rather than the pixel count.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from orrery.errors import InvalidDimensionError

DEFAULT_LIGHT = (0.0, 0.0, 1.0)


@dataclass
class SurfaceSample:
    """Per-block geometry for one animation phase. All arrays share one grid shape."""

    phase: float
    spin: float
    dx: np.ndarray
    dy: np.ndarray
    distance: np.ndarray
    normalized: np.ndarray
    inside: np.ndarray
    z: np.ndarray
    nx: np.ndarray
    ny: np.ndarray
    world_x: np.ndarray
    world_y: np.ndarray
    world_z: np.ndarray
    light: np.ndarray

    GEOMETRY = (
        "dx", "dy", "distance", "normalized", "z", "nx", "ny",
        "world_x", "world_y", "world_z", "light",
    )

    @property
    def shape(self) -> Tuple[int, int]:
        return self.inside.shape

    def masked(self, mask: Optional[np.ndarray] = None) -> Dict[str, np.ndarray]:
        """Flatten the geometry arrays down to the cells selected by ``mask`` (default: the disc)."""
        if mask is None:
            mask = self.inside
        return {name: getattr(self, name)[mask] for name in self.GEOMETRY}


@dataclass(frozen=True)
class LightingModel:
    """
    Limb darkening plus an optional directional term.

    brightness = z^(limb_exponent - roughness)
                 * (1 - normalized * edge_falloff)
                 * ((1 - w) + w * light)
    """

    limb_exponent: float
    edge_falloff: float
    directional_weight: float = 0.0

    def brightness(self, z, normalized, light=None, roughness=0.0) -> np.ndarray:
        z = np.clip(np.asarray(z, dtype=np.float64), 0.0, 1.0)
        exponent = np.maximum(self.limb_exponent - np.asarray(roughness, dtype=np.float64), 0.0)
        value = np.power(z, exponent) * (1.0 - np.asarray(normalized) * self.edge_falloff)
        if self.directional_weight and light is not None:
            w = self.directional_weight
            value = value * ((1.0 - w) + w * np.asarray(light))
        return value


class SurfaceSampler:
    """
    Maps a frame's block grid onto a unit sphere rotating about screen Y.

    The sphere sits at the frame centre. Geometry that does not depend on
    the phase is computed once in the constructor and shared by every
    frame.
    """

    def __init__(
        self,
        width: int,
        height: int,
        radius: float,
        pixel_size: int = 1,
        world_scale: float = 12.0,
        angular_speed: float = 1.0,
        light_direction: Tuple[float, float, float] = DEFAULT_LIGHT,
    ):
        if width <= 0 or height <= 0:
            raise InvalidDimensionError(f"Frame must be positive, got {width}x{height}")
        if pixel_size <= 0:
            raise InvalidDimensionError(f"pixel_size must be positive, got {pixel_size}")
        if radius <= 0:
            raise InvalidDimensionError(f"radius must be positive, got {radius}")

        self.width = int(width)
        self.height = int(height)
        self.radius = float(radius)
        self.pixel_size = int(pixel_size)
        self.world_scale = float(world_scale)
        self.angular_speed = float(angular_speed)

        light = np.asarray(light_direction, dtype=np.float64)
        norm = np.linalg.norm(light)
        self.light_direction = light / norm if norm > 0 else np.asarray(DEFAULT_LIGHT)

        self.grid_width = math.ceil(self.width / self.pixel_size)
        self.grid_height = math.ceil(self.height / self.pixel_size)
        self.center = (self.width / 2.0, self.height / 2.0)

        xs = np.arange(self.grid_width) * self.pixel_size + self.pixel_size / 2.0
        ys = np.arange(self.grid_height) * self.pixel_size + self.pixel_size / 2.0
        self.dx, self.dy = np.meshgrid(xs - self.center[0], ys - self.center[1])
        self.distance = np.hypot(self.dx, self.dy)
        self.normalized = self.distance / self.radius
        self.inside = self.distance <= self.radius
        self.z = np.where(
            self.inside, np.sqrt(np.clip(1.0 - self.normalized ** 2, 0.0, None)), 0.0
        )
        self.nx = self.dx / self.radius
        self.ny = self.dy / self.radius

        lx, ly, lz = self.light_direction
        self.light = np.where(
            self.inside, np.maximum(0.0, self.nx * lx + self.ny * ly + self.z * lz), 0.0
        )

    @property
    def grid_shape(self) -> Tuple[int, int]:
        return self.grid_height, self.grid_width

    @property
    def center_cell(self) -> Tuple[int, int]:
        """Grid (row, column) of the block holding the frame's centre pixel."""
        row = min(int(self.center[1]) // self.pixel_size, self.grid_height - 1)
        col = min(int(self.center[0]) // self.pixel_size, self.grid_width - 1)
        return row, col

    def sample(self, phase: float) -> SurfaceSample:
        """
        Sample the sphere at an animation phase.

        Args:
            phase: Rotation phase in radians, before the angular-speed multiplier.

        Returns:
            SurfaceSample over the whole block grid.
        """
        spin = phase * self.angular_speed
        cos_rot = math.cos(spin)
        sin_rot = math.sin(spin)
        rot_x = self.nx * cos_rot - self.z * sin_rot
        rot_z = self.nx * sin_rot + self.z * cos_rot

        return SurfaceSample(
            phase=phase,
            spin=spin,
            dx=self.dx,
            dy=self.dy,
            distance=self.distance,
            normalized=self.normalized,
            inside=self.inside,
            z=self.z,
            nx=self.nx,
            ny=self.ny,
            world_x=rot_x * self.world_scale,
            world_y=self.ny * self.world_scale,
            world_z=rot_z * self.world_scale,
            light=self.light,
        )

    def expand(self, grid: np.ndarray) -> np.ndarray:
        """Upscale a block grid to full frame resolution (nearest neighbour), cropped to the frame."""
        if self.pixel_size > 1:
            grid = np.repeat(np.repeat(grid, self.pixel_size, axis=0), self.pixel_size, axis=1)
        return grid[: self.height, : self.width]

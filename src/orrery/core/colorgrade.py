"""
Colour helpers shared by the body renderers.

All functions work on float RGB in [0, 255] and broadcast over arrays of
shape (..., 3).
"""

import numpy as np


def lerp_color(c1, c2, t) -> np.ndarray:
    """
    Linear blend between two colours.

    Args:
        c1, c2: RGB triples or (..., 3) arrays.
        t: Blend factor, scalar or array broadcastable to the leading shape.

    Returns:
        float64 (..., 3) array.
    """
    c1 = np.asarray(c1, dtype=np.float64)
    c2 = np.asarray(c2, dtype=np.float64)
    t = np.asarray(t, dtype=np.float64)[..., None]
    return c1 + (c2 - c1) * t


def brighten(color, amount: float) -> np.ndarray:
    """Add ``amount`` to every channel, saturating at 255."""
    return np.minimum(np.asarray(color, dtype=np.float64) + amount, 255.0)


def shade(rgb: np.ndarray, variation, brightness) -> np.ndarray:
    """
    Final per-pixel colour: (rgb + variation) * brightness, clamped.

    Args:
        rgb: (N, 3) base colours.
        variation: (N,) micro-detail offset added to every channel.
        brightness: (N,) lighting scalar.

    Returns:
        (N, 3) float64, floored and clipped to [0, 255].
    """
    variation = np.asarray(variation, dtype=np.float64)
    brightness = np.asarray(brightness, dtype=np.float64)
    value = (rgb + variation[..., None]) * brightness[..., None]
    return np.floor(np.clip(value, 0.0, 255.0))


def radial_gradient(stops, colors, position) -> np.ndarray:
    """
    Piecewise-linear colour ramp over a scalar position.

    Args:
        stops: Increasing positions, one per colour.
        colors: RGB triples at each stop.
        position: Scalar or array; clamped to the first and last stop.

    Returns:
        float64 (..., 3) array.
    """
    stops = np.asarray(stops, dtype=np.float64)
    colors = np.asarray(colors, dtype=np.float64)
    position = np.asarray(position, dtype=np.float64)
    return np.stack(
        [np.interp(position, stops, colors[:, channel]) for channel in range(3)],
        axis=-1,
    )

"""Pytest configuration and shared fixtures."""

import logging

import numpy as np
import pytest

from orrery.bodies.base import BodyKind, BodySpec
from orrery.core.noise import NoiseField
from orrery.logging_config import PACKAGE_LOGGER


class ConstantNoise(NoiseField):
    """
    NoiseField whose raw noise is the same value everywhere.

    Every composition goes through ``noise``, so with value c:
    fbm == c, turbulence == |c| * sum(amplitudes) and
    ridged == (1 - |c|)^2 * sum(amplitudes).
    """

    def __init__(self, value: float = 0.0, seed: int = 0):
        super().__init__(seed)
        self.value = float(value)

    def noise(self, x, y, z):
        shape = np.broadcast(np.asarray(x), np.asarray(y), np.asarray(z)).shape
        if shape == ():
            return self.value
        return np.full(shape, self.value)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers a CLI run attached so later tests log normally."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def constant_noise():
    """Factory for ConstantNoise instances."""
    return ConstantNoise


@pytest.fixture
def small_spec():
    """Factory for tiny specs that render quickly."""

    def make(kind, variant="", seed=7, frame_count=2, frame_size=48, pixel_size=2):
        return BodySpec(
            kind=BodyKind.parse(kind),
            variant=variant,
            seed=seed,
            frame_count=frame_count,
            frame_size=frame_size,
            pixel_size=pixel_size,
        )

    return make

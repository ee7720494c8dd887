"""Noise, sphere sampling, palettes and compositing primitives."""

from orrery.core.compositor import Canvas, FeatureLayer, PriorityChain
from orrery.core.noise import Composition, FieldSpec, NoiseField, SampleFrequencyStack
from orrery.core.palettes import DEFAULT_PALETTES, Palette, PaletteTable, pick
from orrery.core.sampler import LightingModel, SurfaceSample, SurfaceSampler

__all__ = [
    "Canvas",
    "Composition",
    "DEFAULT_PALETTES",
    "FeatureLayer",
    "FieldSpec",
    "LightingModel",
    "NoiseField",
    "Palette",
    "PaletteTable",
    "PriorityChain",
    "SampleFrequencyStack",
    "SurfaceSample",
    "SurfaceSampler",
    "pick",
]

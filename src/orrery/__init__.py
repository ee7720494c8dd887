"""Procedural celestial sprite-sheet generator."""

__version__ = "4.1.0"

from orrery.assembler import FrameAssembler, SpriteFrame, SpriteSheet
from orrery.bodies import BodyKind, BodySpec, create_renderer
from orrery.core.noise import NoiseField
from orrery.core.palettes import PaletteTable
from orrery.io.exporter import ManifestExporter
from orrery.pipeline import PipelineConfig, SpritePipeline

__all__ = [
    "BodyKind",
    "BodySpec",
    "FrameAssembler",
    "ManifestExporter",
    "NoiseField",
    "PaletteTable",
    "PipelineConfig",
    "SpriteFrame",
    "SpritePipeline",
    "SpriteSheet",
    "create_renderer",
]

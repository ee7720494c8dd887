"""PNG sheet I/O, sprite manifest export and the sprite cache."""

from orrery.io.cache import GENERATOR_VERSION, SpriteCache
from orrery.io.exporter import (
    ManifestExporter,
    ManifestMetadata,
    ManifestRecord,
    load_sheet,
    save_sheet,
    sprite_filename,
    sprite_key,
)

__all__ = [
    "GENERATOR_VERSION",
    "ManifestExporter",
    "ManifestMetadata",
    "ManifestRecord",
    "SpriteCache",
    "load_sheet",
    "save_sheet",
    "sprite_filename",
    "sprite_key",
]

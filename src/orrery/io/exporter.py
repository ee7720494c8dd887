"""
Sprite sheet and manifest serialization.

Sheets are written as lossless PNG filmstrips. The manifest is a JSON
index of every sheet, grouped by category, that the game's sprite loader
reads to find frame counts and sizes.
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from PIL import Image

from orrery import __version__
from orrery.assembler import SpriteSheet
from orrery.bodies.base import BodyKind

# Kinds whose sprites are numbered only, without a variant in the key
UNTYPED_KINDS = frozenset({BodyKind.MOON, BodyKind.ASTEROID, BodyKind.COMET})


def sprite_key(kind, variant: str, index: int) -> str:
    """Manifest key: ``<variant>_<index:03d>``, or just the index for numbered kinds."""
    if BodyKind.parse(kind) in UNTYPED_KINDS:
        return f"{index:03d}"
    return f"{variant}_{index:03d}"


def sprite_filename(kind, variant: str, index: int) -> str:
    """PNG file name, e.g. ``planet_terran_000.png`` or ``moon_004.png``."""
    kind = BodyKind.parse(kind)
    return f"{kind.value}_{sprite_key(kind, variant, index)}.png"


def save_sheet(sheet: SpriteSheet, path: Union[str, Path]) -> Path:
    """Encode a sheet as PNG. Parent directories are created."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sheet.to_image().save(path, format="PNG")
    return path


def load_sheet(path: Union[str, Path], frame_width: int) -> SpriteSheet:
    with Image.open(path) as image:
        return SpriteSheet.from_image(image, frame_width)


@dataclass
class ManifestRecord:
    """One sheet's entry in the manifest. ``width`` is the whole filmstrip."""

    file: str
    frames: int
    width: int
    height: int

    @classmethod
    def for_sheet(cls, file: str, sheet: SpriteSheet) -> "ManifestRecord":
        return cls(file=file, frames=sheet.frame_count, width=sheet.width, height=sheet.height)


@dataclass
class ManifestMetadata:
    """Metadata header for the sprite manifest."""

    generated: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    description: str = "Procedurally generated celestial sprite sheets"
    # Generator version
    version: str = __version__
    # Explicit schema version for the manifest payload
    schema_version: str = "1.0"


class ManifestExporter:
    """
    Builds and writes the sprite manifest.

    Layout::

        {"version": ..., "generated": ..., "description": ...,
         "schema_version": ...,
         "sprites": {"<category>": {"<key>": {"file", "frames", "width", "height"}}}}
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def build_manifest(
        self,
        entries: Dict[str, Dict[str, ManifestRecord]],
        metadata: Optional[ManifestMetadata] = None,
    ) -> Dict[str, Any]:
        """
        Build the manifest dictionary.

        Args:
            entries: category -> key -> record.
            metadata: Header values; a fresh timestamp when omitted.

        Returns:
            Manifest dictionary ready for serialization.
        """
        metadata = metadata or ManifestMetadata()
        manifest: Dict[str, Any] = asdict(metadata)
        manifest["sprites"] = {
            category: {key: asdict(record) for key, record in sorted(records.items())}
            for category, records in sorted(entries.items())
        }
        return manifest

    @staticmethod
    def merge(existing: Dict[str, Any], manifest: Dict[str, Any]) -> Dict[str, Any]:
        """
        Overlay ``manifest`` onto a previously written one.

        Header fields come from the new manifest; sprite entries are merged
        per category, new keys winning.
        """
        merged = dict(manifest)
        sprites: Dict[str, Dict[str, Any]] = {}
        for source in (existing.get("sprites", {}), manifest.get("sprites", {})):
            for category, records in source.items():
                sprites.setdefault(category, {}).update(records)
        merged["sprites"] = {
            category: dict(sorted(records.items())) for category, records in sorted(sprites.items())
        }
        return merged

    @staticmethod
    def load(path: Union[str, Path]) -> Dict[str, Any]:
        """Read a manifest. Raises OSError or ValueError when unreadable."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Manifest {path} is not a JSON object")
        return data

    def write(self, manifest: Dict[str, Any], output_path: Union[str, Path]) -> Path:
        """Serialize an already built manifest."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=self.indent)

        return output_path

    def export_json(
        self,
        entries: Dict[str, Dict[str, ManifestRecord]],
        output_path: Union[str, Path],
        metadata: Optional[ManifestMetadata] = None,
        merge_with: Optional[Dict[str, Any]] = None,
    ) -> Path:
        """
        Write the manifest to a JSON file.

        Args:
            entries: category -> key -> record.
            output_path: Destination file.
            metadata: Header values.
            merge_with: Previously written manifest to merge into.

        Returns:
            Path to written file.
        """
        manifest = self.build_manifest(entries, metadata)
        if merge_with:
            manifest = self.merge(merge_with, manifest)
        return self.write(manifest, output_path)


def count_sprites(manifest: Dict[str, Any], categories: Optional[Iterable[str]] = None) -> int:
    """Number of sheet records in a manifest, optionally limited to some categories."""
    sprites = manifest.get("sprites", {})
    names = categories if categories is not None else sprites.keys()
    return sum(len(sprites.get(name, {})) for name in names)

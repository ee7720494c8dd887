"""
On-disk cache of rendered sprite sheets.

Entries are PNG filmstrips named by a hash of the full BodySpec plus
the generator version, so any change to a spec or to the renderers
produces a new key. Cache problems are never fatal: a broken entry is
a miss.
"""

import hashlib
import json
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from orrery.assembler import SpriteSheet
from orrery.bodies.base import BodySpec
from orrery.io.exporter import load_sheet, save_sheet

logger = logging.getLogger(__name__)

# Bump whenever renderer output changes so stale entries are not reused
GENERATOR_VERSION = "4.1.0"


class SpriteCache:
    """Sheet cache under ``~/.cache/orrery/sprites`` or an explicit directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory is not None else None

    def __repr__(self) -> str:
        return f"SpriteCache({str(self._get_cache_dir())!r})"

    def _get_cache_dir(self) -> Path:
        """Get or create the cache directory."""
        if self.directory is not None:
            cache_dir = self.directory
        else:
            cache_dir = Path.home() / ".cache" / "orrery" / "sprites"
        cache_dir.mkdir(parents=True, exist_ok=True)
        return cache_dir

    @staticmethod
    def key(spec: BodySpec) -> str:
        """SHA256 of the spec fields and generator version."""
        payload = dict(spec.to_dict(), generator_version=GENERATOR_VERSION)
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()

    def path_for(self, spec: BodySpec) -> Path:
        return self._get_cache_dir() / f"{spec.kind.value}_{self.key(spec)}.png"

    def get(self, spec: BodySpec) -> Optional[SpriteSheet]:
        """
        Cached sheet for ``spec``, or None on a miss.

        Unreadable or mismatched entries are logged and treated as misses.
        """
        try:
            path = self.path_for(spec)
            if not path.exists():
                return None
            sheet = load_sheet(path, spec.frame_size)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load cached sprite for %s/%s: %s", spec.kind.value, spec.variant, e)
            return None

        if sheet.frame_count != spec.frame_count or sheet.frame_height != spec.frame_size:
            logger.warning("Discarding cached sprite with wrong dimensions: %s", path)
            return None
        logger.debug("Cache hit: %s", path)
        return sheet

    def put(self, spec: BodySpec, sheet: SpriteSheet) -> Optional[Path]:
        """Store a sheet. Returns the entry path, or None if it could not be written."""
        try:
            return save_sheet(sheet, self.path_for(spec))
        except OSError as e:
            logger.warning("Failed to save sprite to cache: %s", e)
            return None

    def clear(self):
        """Clear the sprite cache."""
        cache_dir = self._get_cache_dir()
        if cache_dir.exists():
            shutil.rmtree(cache_dir)
            cache_dir.mkdir(parents=True, exist_ok=True)

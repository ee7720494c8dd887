"""
Batch sprite generation pipeline.

Plans one job per sprite sheet, renders them (sequentially or in a
process pool), writes the PNGs and the manifest. A failing sprite is
logged and reported; it never stops the rest of the batch.
"""

import concurrent.futures
import dataclasses
import hashlib
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from orrery.assembler import FrameAssembler, SpriteSheet
from orrery.bodies.base import VARIANTS, BodyKind, BodySpec
from orrery.errors import ConfigurationError, InvalidDimensionError, UnknownBodyTypeError
from orrery.io.cache import SpriteCache
from orrery.io.exporter import (
    UNTYPED_KINDS,
    ManifestExporter,
    ManifestRecord,
    save_sheet,
    sprite_filename,
    sprite_key,
)

logger = logging.getLogger(__name__)

# Frame-size scale per quality profile; "full" is the native sprite size
PROFILES: Dict[str, float] = {
    "preview": 0.25,
    "standard": 0.5,
    "full": 1.0,
}

# Sprites generated for numbered kinds when no count is requested
DEFAULT_COUNTS: Dict[BodyKind, int] = {
    BodyKind.MOON: 5,
    BodyKind.ASTEROID: 12,
    BodyKind.COMET: 3,
}

MANIFEST_NAME = "manifest.json"

# kind -> variant names (typed kinds) or sprite count (numbered kinds)
Selection = Mapping[BodyKind, Union[Sequence[str], int]]


@dataclass
class PipelineConfig:
    """Configuration for a batch run."""

    output_dir: Path = Path("sprites")
    profile: str = "full"
    # Override the per-kind defaults when set
    frame_count: Optional[int] = None
    pixel_size: Optional[int] = None
    # Sheets per requested variant
    variants: int = 1
    seed: int = 0
    workers: int = 1
    use_cache: bool = True

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)
        if self.profile not in PROFILES:
            raise ConfigurationError(
                f"Unknown profile {self.profile!r} (expected one of: {', '.join(PROFILES)})"
            )
        for name in ("frame_count", "pixel_size"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidDimensionError(f"{name} must be positive, got {value}")
        if self.variants < 1:
            raise ConfigurationError(f"variants must be at least 1, got {self.variants}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")

    @property
    def scale(self) -> float:
        return PROFILES[self.profile]


@dataclass(frozen=True)
class SpriteJob:
    """One sheet to render and where it goes."""

    spec: BodySpec
    category: str
    key: str
    # Path relative to the output directory, as written to the manifest
    file: str


@dataclass
class BatchResult:
    written: List[str] = field(default_factory=list)
    cached: int = 0
    failed: List[Tuple[str, str]] = field(default_factory=list)
    manifest: Optional[Dict[str, Any]] = None
    manifest_path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return not self.failed


def derive_seed(base_seed: int, category: str, index: int) -> int:
    """Stable 32-bit job seed from the batch seed, category and sprite index."""
    digest = hashlib.sha256(f"{base_seed}:{category}:{index}".encode("utf-8")).hexdigest()
    return int(digest[:8], 16)


def render_job(spec: BodySpec) -> np.ndarray:
    """Worker entry point. Returns the sheet pixels, which pickle cheaply."""
    return FrameAssembler().generate(spec).pixels


def _check_variants(kind: BodyKind, variants: Sequence[str]) -> List[str]:
    known = VARIANTS[kind]
    unknown = [v for v in variants if v not in known]
    if unknown:
        raise UnknownBodyTypeError(
            f"Unknown {kind.value} type(s): {', '.join(unknown)} (known: {', '.join(known)})"
        )
    return list(variants)


class SpritePipeline:
    """
    Plans and runs sprite batches.

    The cache is optional and owned by the caller; the renderers never
    see it.
    """

    def __init__(self, config: Optional[PipelineConfig] = None, cache: Optional[SpriteCache] = None):
        self.config = config or PipelineConfig()
        self.cache = cache if self.config.use_cache else None
        self.exporter = ManifestExporter()

    def _spec(self, kind: BodyKind, variant: str, seed: int, index: int) -> BodySpec:
        cfg = self.config
        spec = BodySpec.defaults(kind, variant, seed=seed, index=index)
        return dataclasses.replace(
            spec,
            frame_size=max(int(round(spec.frame_size * cfg.scale)), 1),
            frame_count=cfg.frame_count or spec.frame_count,
            pixel_size=cfg.pixel_size or spec.pixel_size,
        )

    def plan(self, selection: Selection) -> List[SpriteJob]:
        """
        Expand a selection into jobs.

        Args:
            selection: Variant names for typed kinds (stars, planets, gas
                giants, black holes), sprite counts for numbered kinds
                (moons, asteroids, comets).

        Raises:
            UnknownBodyTypeError: A requested variant does not exist.
        """
        jobs: List[SpriteJob] = []
        for kind, wanted in selection.items():
            kind = BodyKind.parse(kind)
            category = kind.category

            if kind in UNTYPED_KINDS:
                if not isinstance(wanted, int):
                    raise ConfigurationError(f"{category} are selected by count, not type name")
                if wanted < 0:
                    raise ConfigurationError(f"{category} count must not be negative, got {wanted}")
                # Numbered kinds cycle through their subtypes
                pool = VARIANTS[kind]
                plan = [(pool[i % len(pool)], i) for i in range(wanted)]
            else:
                if isinstance(wanted, int):
                    raise ConfigurationError(f"{category} are selected by type name, not count")
                variants = _check_variants(kind, wanted or VARIANTS[kind])
                plan = [(v, i) for v in variants for i in range(self.config.variants)]

            for position, (variant, index) in enumerate(plan):
                seed = derive_seed(self.config.seed, category, position)
                jobs.append(SpriteJob(
                    spec=self._spec(kind, variant, seed, position),
                    category=category,
                    key=sprite_key(kind, variant, index),
                    file=f"{category}/{sprite_filename(kind, variant, index)}",
                ))
        return jobs

    def _store(self, job: SpriteJob, sheet: SpriteSheet, records: Dict[str, Dict[str, ManifestRecord]], result: BatchResult):
        try:
            save_sheet(sheet, self.config.output_dir / job.file)
        except OSError as e:
            logger.error("Failed to write %s: %s", job.file, e)
            result.failed.append((job.file, str(e)))
            return
        records.setdefault(job.category, {})[job.key] = ManifestRecord.for_sheet(job.file, sheet)
        result.written.append(job.file)
        logger.info("Wrote %s (%d frames, %dx%d)", job.file, sheet.frame_count, sheet.width, sheet.height)

    def _rendered(self, job: SpriteJob, pixels: np.ndarray, records, result: BatchResult):
        spec = job.spec
        sheet = SpriteSheet(pixels, spec.frame_size, spec.frame_size, spec.frame_count)
        if self.cache is not None:
            self.cache.put(spec, sheet)
        self._store(job, sheet, records, result)

    def _failed(self, job: SpriteJob, error: Exception, result: BatchResult):
        logger.error("Failed to render %s: %s", job.file, error, exc_info=error)
        result.failed.append((job.file, str(error)))

    def run(
        self,
        jobs: Sequence[SpriteJob],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> BatchResult:
        """
        Render jobs, write sheets and the manifest.

        Args:
            jobs: Output of ``plan``.
            progress_callback: Called as ``callback(jobs_done, job_count)``.

        Returns:
            BatchResult listing written files, cache hits and failures.
        """
        result = BatchResult()
        records: Dict[str, Dict[str, ManifestRecord]] = {}
        total = len(jobs)
        done = 0
        start = time.perf_counter()

        def advance():
            nonlocal done
            done += 1
            if progress_callback is not None:
                progress_callback(done, total)

        pending: List[SpriteJob] = []
        for job in jobs:
            sheet = self.cache.get(job.spec) if self.cache is not None else None
            if sheet is None:
                pending.append(job)
                continue
            result.cached += 1
            self._store(job, sheet, records, result)
            advance()

        workers = self.config.workers
        if workers == 1 or len(pending) <= 1:
            for job in pending:
                logger.info("Rendering %s", job.file)
                try:
                    pixels = render_job(job.spec)
                except Exception as e:
                    self._failed(job, e, result)
                else:
                    self._rendered(job, pixels, records, result)
                advance()
        else:
            logger.info("Rendering %d sprites with %d workers", len(pending), workers)
            with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as exe:
                futures = {exe.submit(render_job, job.spec): job for job in pending}
                for fut in concurrent.futures.as_completed(futures):
                    job = futures[fut]
                    try:
                        pixels = fut.result()
                    except Exception as e:
                        self._failed(job, e, result)
                    else:
                        self._rendered(job, pixels, records, result)
                    advance()

        self._write_manifest(records, result)
        logger.info(
            "Batch finished in %.1fs: %d written (%d from cache), %d failed",
            time.perf_counter() - start, len(result.written), result.cached, len(result.failed),
        )
        return result

    def _write_manifest(self, records, result: BatchResult):
        path = self.config.output_dir / MANIFEST_NAME
        existing = None
        if path.exists():
            try:
                existing = self.exporter.load(path)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable manifest %s: %s", path, e)

        manifest = self.exporter.build_manifest(records)
        if existing:
            manifest = self.exporter.merge(existing, manifest)
        result.manifest = manifest
        try:
            result.manifest_path = self.exporter.write(manifest, path)
        except OSError as e:
            logger.error("Failed to write manifest %s: %s", path, e)

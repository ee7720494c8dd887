"""
Feature compositing: priority chains and the RGBA block canvas.

A body's surface is classified by an ordered list of feature layers.
Each layer is a (predicate, colorer) pair over a dict of per-cell fields;
the first layer whose predicate holds claims the cell. Colorers only ever
see the cells they won, so each layer can be tested on its own.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Tuple

import numpy as np

Fields = Mapping[str, np.ndarray]
Predicate = Callable[[Fields], np.ndarray]
Colorer = Callable[[Fields], np.ndarray]


def always(fields: Fields) -> bool:
    """Predicate for a chain's fallback layer."""
    return True


def subset(fields: Fields, mask: np.ndarray) -> Dict[str, np.ndarray]:
    """Restrict every per-cell array in ``fields`` to ``mask``; scalars pass through."""
    count = mask.shape[0]
    out = {}
    for name, value in fields.items():
        if isinstance(value, np.ndarray) and value.ndim >= 1 and value.shape[0] == count:
            out[name] = value[mask]
        else:
            out[name] = value
    return out


@dataclass(frozen=True)
class FeatureLayer:
    name: str
    predicate: Predicate
    colorer: Colorer

    def matches(self, fields: Fields, count: int) -> np.ndarray:
        hit = np.asarray(self.predicate(fields), dtype=bool)
        return np.broadcast_to(hit, (count,))

    def paint(self, fields: Fields, count: int) -> np.ndarray:
        rgb = np.asarray(self.colorer(fields), dtype=np.float64)
        return np.broadcast_to(rgb, (count, 3))


class PriorityChain:
    """
    Ordered, mutually exclusive feature layers.

    Layers are evaluated top to bottom; once a cell is claimed, later
    layers never touch it.
    """

    def __init__(self, layers: Iterable[FeatureLayer]):
        self.layers: Tuple[FeatureLayer, ...] = tuple(layers)
        if not self.layers:
            raise ValueError("A priority chain needs at least one layer")

    def __len__(self) -> int:
        return len(self.layers)

    def __repr__(self) -> str:
        return f"PriorityChain({' > '.join(self.names)})"

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(layer.name for layer in self.layers)

    def index(self, name: str) -> int:
        return self.names.index(name)

    def resolve(self, fields: Fields, count: int) -> np.ndarray:
        """
        Winning layer per cell.

        Returns:
            (count,) int64 array of layer indices, -1 where nothing matched.
        """
        winners = np.full(count, -1, dtype=np.int64)
        for idx, layer in enumerate(self.layers):
            unclaimed = winners < 0
            if not unclaimed.any():
                break
            winners[unclaimed & layer.matches(fields, count)] = idx
        return winners

    def composite(self, fields: Fields, count: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Classify and colour every cell.

        Args:
            fields: Per-cell arrays of length ``count`` plus scalar parameters.
            count: Number of cells.

        Returns:
            ((count, 3) float64 RGB, (count,) winner indices). Unclaimed cells are black.
        """
        winners = self.resolve(fields, count)
        rgb = np.zeros((count, 3), dtype=np.float64)
        for idx, layer in enumerate(self.layers):
            mask = winners == idx
            n = int(mask.sum())
            if n:
                rgb[mask] = layer.paint(subset(fields, mask), n)
        return rgb, winners


class Canvas:
    """
    Straight-alpha RGBA accumulator over a block grid.

    Colour is float in [0, 255], alpha float in [0, 1].
    """

    def __init__(self, height: int, width: int):
        self.rgb = np.zeros((height, width, 3), dtype=np.float64)
        self.alpha = np.zeros((height, width), dtype=np.float64)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.alpha.shape

    def fill(self, mask: np.ndarray, rgb, alpha=1.0):
        """Overwrite the masked cells."""
        n = int(np.count_nonzero(mask))
        if not n:
            return
        self.rgb[mask] = np.broadcast_to(np.asarray(rgb, dtype=np.float64), (n, 3))
        self.alpha[mask] = np.clip(np.broadcast_to(np.asarray(alpha, dtype=np.float64), (n,)), 0.0, 1.0)

    def blend(self, mask: np.ndarray, rgb, alpha):
        """Source-over composite onto the masked cells."""
        n = int(np.count_nonzero(mask))
        if not n:
            return
        src = np.broadcast_to(np.asarray(rgb, dtype=np.float64), (n, 3))
        src_a = np.clip(np.broadcast_to(np.asarray(alpha, dtype=np.float64), (n,)), 0.0, 1.0)
        dst = self.rgb[mask]
        dst_a = self.alpha[mask]

        out_a = src_a + dst_a * (1.0 - src_a)
        safe = np.where(out_a > 0, out_a, 1.0)
        out = (src * src_a[:, None] + dst * (dst_a * (1.0 - src_a))[:, None]) / safe[:, None]

        self.rgb[mask] = out
        self.alpha[mask] = out_a

    def to_rgba(self) -> np.ndarray:
        """(H, W, 4) uint8 image of the canvas."""
        out = np.empty(self.alpha.shape + (4,), dtype=np.uint8)
        out[..., :3] = np.floor(np.clip(self.rgb, 0.0, 255.0)).astype(np.uint8)
        out[..., 3] = np.round(self.alpha * 255.0).astype(np.uint8)
        return out

# src/thresholdbench/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from thresholdbench.errors import InvalidArgument


# bit depth -> numpy dtype
_DTYPES: Dict[int, Any] = {8: np.uint8, 16: np.uint16}


@dataclass(frozen=True)
class LoadedImage:
    """
    Greyscale image as handed over by input_img.

    pixels: 2-D uint8 / uint16 array (height, width)
    channels: channel count of the source file before greyscale conversion
    """
    pixels: np.ndarray
    width: int
    height: int
    channels: int

    @property
    def bit_depth(self) -> int:
        return bit_depth_of(self.pixels)


@dataclass(frozen=True)
class BenchmarkResult:
    """
    One row of the benchmark report.

    threshold: value returned by the estimator
    elapsed_s: wall time of the estimator call (perf_counter)
    destructive: the estimator reordered its (private) working copy
    black_ratio: fraction of pixels that binarize() turns black at this threshold
    """
    name: str
    threshold: int
    elapsed_s: float
    destructive: bool
    black_ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": str(self.name),
            "threshold": int(self.threshold),
            "elapsed_s": float(self.elapsed_s),
            "destructive": bool(self.destructive),
            "black_ratio": float(self.black_ratio),
        }


def dtype_for(bit_depth: int) -> Any:
    if bit_depth not in _DTYPES:
        raise InvalidArgument(f"bit_depth must be 8 or 16, got {bit_depth!r}")
    return _DTYPES[bit_depth]


def bit_depth_of(greyscale: np.ndarray) -> int:
    dt = np.asarray(greyscale).dtype
    if dt == np.uint8:
        return 8
    if dt == np.uint16:
        return 16
    raise InvalidArgument(f"pixel dtype must be uint8 or uint16, got {dt}")


def max_value(bit_depth: int) -> int:
    dtype_for(bit_depth)
    return (1 << int(bit_depth)) - 1


def as_pixels(greyscale: np.ndarray) -> np.ndarray:
    """
    Validate an image buffer and return it as an ndarray (no copy).

    Raises InvalidArgument for a non-uint8/uint16 dtype or an empty buffer.
    """
    if not isinstance(greyscale, np.ndarray):
        raise InvalidArgument(f"greyscale must be a numpy array, got {type(greyscale).__name__}")
    bit_depth_of(greyscale)
    if greyscale.size == 0:
        raise InvalidArgument("greyscale image is empty")
    return greyscale


def quantile_index(size: int, ratio: float) -> int:
    # floor(N * ratio)。ratio=1 のときは最後の要素に丸める
    return min(int(np.floor(size * ratio)), size - 1)

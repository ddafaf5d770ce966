# Path: src/thresholdbench/binarize.py

from __future__ import annotations

import numpy as np

from thresholdbench.errors import InvalidArgument
from thresholdbench.types import as_pixels, bit_depth_of, max_value


def binarize(greyscale: np.ndarray, threshold: int) -> np.ndarray:
    """
    二値化（閾値より暗い画素が黒、明るい画素が白）

    Parameters
    ----------
    greyscale : uint8 / uint16 ndarray
        この配列をその場で書き換える
    threshold : int
        0..max の閾値

    Returns
    -------
    greyscale : 同じ配列（値は 0 か max のみ）

    注意
    ----
    閾値ちょうどの画素は黒にする。ただし 0 か max の画素はそのまま残す。
    """
    x = as_pixels(greyscale)
    mx = max_value(bit_depth_of(x))
    t = _check_threshold(threshold, mx)

    # マスクは書き換え前にすべて作る
    white = x > t
    black = (x < t) | ((x == t) & (x != 0) & (x != mx))

    x[white] = mx
    x[black] = 0
    return x


def black_ratio(greyscale: np.ndarray, threshold: int) -> float:
    """Fraction of pixels binarize() would set to 0 (the image is not modified)."""
    x = as_pixels(greyscale)
    mx = max_value(bit_depth_of(x))
    t = _check_threshold(threshold, mx)

    n_black = int(np.count_nonzero(x < t))
    # 閾値ちょうどの画素は max でなければ黒（0 はもともと黒）
    if t != mx:
        n_black += int(np.count_nonzero(x == t))
    return n_black / float(x.size)


def _check_threshold(threshold: int, mx: int) -> int:
    t = int(threshold)
    if not (0 <= t <= mx):
        raise InvalidArgument(f"threshold must be in [0, {mx}], got {threshold!r}")
    return t

# Path: src/thresholdbench/counting_sort.py

from __future__ import annotations

import numpy as np

from thresholdbench.config import check_ratio
from thresholdbench.types import as_pixels, bit_depth_of, quantile_index


def counting_sort(greyscale: np.ndarray, ratio: float) -> int:
    """
    計数ソート（度数分布）で、黒画素の割合が ratio になる閾値を求める。

    全画素のヒストグラムを作り、小さい輝度から累積していき、
    ソート後の n = floor(N * ratio) 番目の画素が入る bin を返す。
    画像は変更しない。

    Parameters
    ----------
    greyscale : uint8 / uint16 ndarray
        参照画像（形状は問わない。C 順でフラットに扱う）
    ratio : float
        0.0-1.0。黒にしたい画素の割合

    Returns
    -------
    threshold : int
        std_sort / nth_element_sort と同じ値
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)

    hist = pixel_histogram(x.ravel(), bit_depth_of(x))
    return histogram_threshold(hist, quantile_index(x.size, r))


def histogram_threshold(hist: np.ndarray, cutoff: int) -> int:
    """
    Walk the histogram upward until more than ``cutoff`` pixels have been
    counted and return that bin.
    """
    total = np.cumsum(hist)
    # total[b] > cutoff となる最初の b
    return int(np.searchsorted(total, cutoff, side="right"))


def pixel_histogram(flat: np.ndarray, bit_depth: int) -> np.ndarray:
    return np.bincount(flat, minlength=1 << bit_depth)

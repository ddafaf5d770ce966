# Path: src/thresholdbench/uniform_sample.py

from __future__ import annotations

import numpy as np

from thresholdbench.config import check_ratio, check_sample_stride
from thresholdbench.counting_sort import histogram_threshold, pixel_histogram
from thresholdbench.types import as_pixels, bit_depth_of, quantile_index


def uniform_sample(greyscale: np.ndarray, ratio: float, sample_stride: int = 10) -> int:
    """
    counting_sort と同じ処理を、sample_stride 画素おきの標本だけで行う。

    前提
    ----
    大きい画像や細部の少ない画像向け。stride を大きくするほど
    速くなるが、細部に対して粗くなると結果がずれる。
    sample_stride=1 なら counting_sort と完全に一致する。

    Parameters
    ----------
    greyscale : uint8 / uint16 ndarray
    ratio : float
        0.0-1.0。黒にしたい画素の割合
    sample_stride : int
        標本間隔（10 なら 10 画素に 1 つ）

    Returns
    -------
    threshold : int
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)
    k = check_sample_stride(sample_stride)

    sample = x.ravel()[::k]
    # カットオフは標本数でスケールする
    hist = pixel_histogram(sample, bit_depth_of(x))
    return histogram_threshold(hist, quantile_index(sample.size, r))

# Path: src/thresholdbench/weighted_estimate.py

from __future__ import annotations

import numpy as np

from thresholdbench.config import check_ratio
from thresholdbench.types import as_pixels, bit_depth_of, max_value


def weighted_estimate(greyscale: np.ndarray, ratio: float) -> int:
    """
    平均値と最小 / 最大値の間を線形補間して閾値を推定する。

    ratio > 0.5 : mean .. max を (ratio - 0.5) / 0.5 で補間
    ratio <= 0.5: 0 .. mean を ratio / 0.5 で補間

    輝度が平均のまわりにほぼ一様・対称に分布している前提の
    ヒューリスティックで、統計的な根拠はない。
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)

    mean = float(np.mean(x, dtype=np.float64))

    if r > 0.5:
        lo, hi = mean, float(max_value(bit_depth_of(x)))
        fraction = (r - 0.5) / 0.5
    else:
        lo, hi = 0.0, mean
        fraction = r / 0.5

    # lo + (hi - lo) * fraction と同じ。fraction=1 で hi に丸め誤差なく一致させる
    return int(lo * (1.0 - fraction) + hi * fraction)

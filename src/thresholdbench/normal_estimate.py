# Path: src/thresholdbench/normal_estimate.py

from __future__ import annotations

import math

import numpy as np

from thresholdbench.config import check_ratio
from thresholdbench.types import as_pixels, bit_depth_of, max_value


def normal_estimate(greyscale: np.ndarray, ratio: float) -> int:
    """
    正規分布近似で閾値を推定する。

    手順
    ----
    1) 平均と標準偏差（母集団、N で割る）を求める
    2) z ≈ √2 · (r + r³ + r⁵ + r⁷) で z 値を近似
    3) mean + z·σ を画素値の範囲にクリップして整数に切り捨てる

    注意
    ----
    2) は逆誤差関数の級数の先頭をそろえただけの粗い近似で、r が小さいときしか
    合わない。較正された逆 CDF ではなく、比較用のヒューリスティック。
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)

    flat = x.ravel()
    mean = float(np.mean(flat, dtype=np.float64))
    sigma = math.sqrt(float(np.mean((flat.astype(np.float64) - mean) ** 2)))

    z = math.sqrt(2.0) * (r + r ** 3 + r ** 5 + r ** 7)
    t = mean + z * sigma
    return int(min(max(t, 0.0), float(max_value(bit_depth_of(x)))))

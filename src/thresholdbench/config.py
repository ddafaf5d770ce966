# Path: src/thresholdbench/config.py
# 役割: pipeline / cli / app から参照される設定値を集約する

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from thresholdbench.errors import InvalidArgument


@dataclass(frozen=True)
class Config:
    # ---- threshold ----
    ratio: float = 0.33  # 黒にしたい画素の割合（0..1）

    # ---- uniform_sample ----
    sample_stride: int = 10  # 何画素おきに見るか（10 なら 10 画素に 1 つ）

    # ---- input ----
    bit_depth: int = 8  # 8 or 16。読み込み時にこの深さへ変換する

    # ---- output ----
    output_suffix: str = "_binary"  # 二値画像のファイル名 = <tag><suffix>.png
    save_results: bool = True  # csv / json / histogram を保存するか

    # ---- visualize result ----
    hist_bins: int = 64  # ヒストグラムの区間数


CFG = Config()


def validate_config(cfg: Config) -> None:
    """
    Check every tunable before any image is touched.

    Raises
    ------
    InvalidArgument
        ratio outside [0, 1], non-positive stride, unsupported bit depth
        or non-positive histogram bin count.
    """
    check_ratio(cfg.ratio)
    check_sample_stride(cfg.sample_stride)
    check_bit_depth(cfg.bit_depth)
    if int(cfg.hist_bins) <= 0:
        raise InvalidArgument(f"hist_bins must be positive, got {cfg.hist_bins}")


def check_ratio(ratio: float) -> float:
    try:
        r = float(ratio)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"ratio must be a number, got {ratio!r}") from e
    if not math.isfinite(r) or not (0.0 <= r <= 1.0):
        raise InvalidArgument(f"ratio must be in [0, 1], got {ratio!r}")
    return r


def check_sample_stride(sample_stride: int) -> int:
    # bool は int のサブクラスなので明示的に弾く
    if isinstance(sample_stride, bool) or not isinstance(sample_stride, numbers.Integral) or sample_stride <= 0:
        raise InvalidArgument(f"sample_stride must be a positive integer, got {sample_stride!r}")
    return int(sample_stride)


def check_bit_depth(bit_depth: int) -> int:
    if bit_depth not in (8, 16):
        raise InvalidArgument(f"bit_depth must be 8 or 16, got {bit_depth!r}")
    return int(bit_depth)

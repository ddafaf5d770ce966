# Path: src/thresholdbench/input_img.py
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import imageio.v3 as iio

from thresholdbench.config import check_bit_depth
from thresholdbench.errors import ImageDecodeError
from thresholdbench.types import LoadedImage, dtype_for, max_value

PathLike = Union[str, Path]


def input_img(img_path: PathLike, bit_depth: int = 8) -> LoadedImage:
    """
    画像を読み込み、1 チャンネルのグレースケール（uint8 / uint16）にして返す。
    元画像のチャンネル数に関係なくグレースケールに変換する。

    Raises
    ------
    ImageDecodeError
        ファイルが無い / 読めない / 対応していない形状
    """
    check_bit_depth(bit_depth)
    path = Path(img_path)

    try:
        arr = iio.imread(str(path))
    except FileNotFoundError as e:
        raise ImageDecodeError(f"Failed to open image: {path} (not found)") from e
    except (OSError, ValueError, RuntimeError) as e:
        raise ImageDecodeError(f"Failed to open image: {path} ({e})") from e

    x = np.asarray(arr)
    channels = 1 if x.ndim == 2 else int(x.shape[2]) if x.ndim == 3 else 0
    try:
        gray = _to_grayscale(x)
    except ValueError as e:
        raise ImageDecodeError(f"Failed to open image: {path} ({e})") from e

    if gray.size == 0:
        raise ImageDecodeError(f"Failed to open image: {path} (empty image)")

    pixels = _to_bit_depth(gray, bit_depth, src_dtype=x.dtype)
    h, w = pixels.shape
    return LoadedImage(pixels=pixels, width=int(w), height=int(h), channels=channels)


def _to_grayscale(arr: np.ndarray) -> np.ndarray:
    x = np.asarray(arr)

    if x.ndim == 2:
        return x

    if x.ndim == 3 and x.shape[2] == 1:
        return x[..., 0]

    # グレー + アルファ: アルファは捨てる
    if x.ndim == 3 and x.shape[2] == 2:
        return x[..., 0]

    if x.ndim == 3 and x.shape[2] in (3, 4):
        rgb = x[..., :3].astype(np.float64, copy=False)
        return 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]

    raise ValueError(f"Unsupported image shape: {x.shape}")


def _to_bit_depth(x: np.ndarray, bit_depth: int, src_dtype: np.dtype) -> np.ndarray:
    """
    指定の深さ（8 / 16 bit）へ変換する。

    integer: 元ファイルの dtype の最大値を基準にスケール（uint8 -> uint16 は x257）。
             RGB から変換した輝度（float）も元の dtype で扱う
    bool   : False=0, True=max
    float  : min-max 正規化
    """
    dst_max = max_value(bit_depth)
    dst_dtype = dtype_for(bit_depth)
    a = np.asarray(x)

    if a.dtype == dst_dtype:
        return np.array(a, dtype=dst_dtype, order="C")

    if np.dtype(src_dtype) == np.bool_:
        return np.where(a.astype(bool), dst_max, 0).astype(dst_dtype)

    if np.issubdtype(src_dtype, np.integer):
        src_max = float(_source_max(src_dtype, a))
        scaled = a.astype(np.float64) * (dst_max / src_max)
        return np.clip(np.rint(scaled), 0, dst_max).astype(dst_dtype)

    a2 = a.astype(np.float64, copy=False)
    mn = float(np.nanmin(a2))
    mx = float(np.nanmax(a2))
    if mx <= mn:
        return np.zeros(a2.shape, dtype=dst_dtype)
    a01 = np.nan_to_num((a2 - mn) / (mx - mn), nan=0.0)
    return np.clip(np.rint(a01 * dst_max), 0, dst_max).astype(dst_dtype)


def _source_max(src_dtype: np.dtype, a: np.ndarray) -> int:
    # 16 bit PNG は Pillow の "I" モード経由で int32 として来ることがある
    dt = np.dtype(src_dtype)
    if dt in (np.uint8, np.uint16):
        return int(np.iinfo(dt).max)
    if a.size and float(np.max(a)) <= 65535.0:
        return 65535
    return int(np.iinfo(dt).max)

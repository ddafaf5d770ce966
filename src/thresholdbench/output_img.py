# Path: src/thresholdbench/output_img.py
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import imageio.v3 as iio

from thresholdbench.errors import ImageEncodeError
from thresholdbench.types import as_pixels

PathLike = Union[str, Path]


def output_img(img_path: PathLike, pixels: np.ndarray) -> Path:
    """
    2 次元のグレースケール画像（uint8 / uint16）を PNG で保存する。

    Raises
    ------
    ImageEncodeError
        書き込みに失敗した場合（握りつぶさない）
    """
    x = as_pixels(pixels)
    if x.ndim != 2:
        raise ImageEncodeError(f"expected a 2-D greyscale image, got shape {x.shape}")

    path = Path(img_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        iio.imwrite(str(path), np.ascontiguousarray(x), extension=".png")
    except (OSError, ValueError, RuntimeError) as e:
        raise ImageEncodeError(f"Failed to write image: {path} ({e})") from e
    return path

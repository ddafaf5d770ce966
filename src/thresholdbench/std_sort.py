# Path: src/thresholdbench/std_sort.py

from __future__ import annotations

import numpy as np

from thresholdbench.config import check_ratio
from thresholdbench.types import as_pixels, quantile_index


def std_sort(greyscale: np.ndarray, ratio: float) -> int:
    """
    Sort the whole image and read the threshold at index floor(N * ratio).

    Destructive: ``greyscale`` is sorted in place (flattened, C order).
    Pass a copy if the image is still needed.
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)

    flat = x.reshape(-1)
    flat.sort()
    return int(flat[quantile_index(flat.size, r)])

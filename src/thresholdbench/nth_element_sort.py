# Path: src/thresholdbench/nth_element_sort.py

from __future__ import annotations

import numpy as np

from thresholdbench.config import check_ratio
from thresholdbench.types import as_pixels, quantile_index


def nth_element_sort(greyscale: np.ndarray, ratio: float) -> int:
    """
    Select the element at index floor(N * ratio) with introselect
    (``ndarray.partition``) instead of a full sort.

    Destructive: ``greyscale`` is partially reordered in place. Everything
    before index n ends up <= the result, everything after >= it.
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)

    flat = x.reshape(-1)
    n = quantile_index(flat.size, r)
    flat.partition(n)
    return int(flat[n])

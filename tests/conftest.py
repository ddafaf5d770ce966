import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def image8(rng):
    # 2-D uint8 image with a skewed histogram
    x = rng.normal(90.0, 40.0, size=(48, 64))
    return np.clip(np.rint(x), 0, 255).astype(np.uint8)


@pytest.fixture
def image16(rng):
    x = rng.normal(30000.0, 9000.0, size=(40, 50))
    return np.clip(np.rint(x), 0, 65535).astype(np.uint16)

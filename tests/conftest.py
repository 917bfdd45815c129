import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def ramp_field():
    """4x4 field whose values equal their own flat index."""
    return np.arange(16, dtype=np.float64).reshape(4, 4)

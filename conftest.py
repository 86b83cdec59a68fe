import math

import matplotlib
import pytest

matplotlib.use("Agg")

from ink_ribbon.stroke_pipeline.point_processor import RawPoint


@pytest.fixture
def wavy_samples():
    """A gently curving stroke with varying pressure."""
    return [
        RawPoint(i * 4.0, 20 * math.sin(i / 6.0), 0.3 + 0.5 * abs(math.sin(i / 9.0)))
        for i in range(40)
    ]


@pytest.fixture
def straight_samples():
    return [RawPoint(0, 0, 0.5), RawPoint(10, 0, 0.5), RawPoint(20, 0, 0.5)]

import matplotlib
import pytest

from wfmlut_gen.fixed_point import FixedPointFormat

matplotlib.use("Agg")


@pytest.fixture
def q1_3():
    return FixedPointFormat(integer_bits=1, fractional_bits=3)

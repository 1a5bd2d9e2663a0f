import pytest

from gravstep import Body
from gravstep.diagnostics import reset_diag_counts


@pytest.fixture(autouse=True)
def _fresh_diag_counts():
    reset_diag_counts()
    yield
    reset_diag_counts()


@pytest.fixture
def two_body():
    return [Body.at((-0.5, 0.0)), Body.at((0.5, 0.0))]


@pytest.fixture
def orbiting_bodies():
    v = 0.5 ** 0.5
    return [
        Body(1.0, -0.5, 0.0, 0.0, -v),
        Body(1.0, 0.5, 0.0, 0.0, v),
        Body(0.1, 4.0, 0.0, 0.0, 0.5),
    ]

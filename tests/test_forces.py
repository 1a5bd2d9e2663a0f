import numpy as np
import pytest

from gravstep import (
    SingularConfiguration,
    force_magnitude,
    geometry_buffers,
    gravitational_force,
    pairwise_forces,
)

G = 6.67430e-11


def test_geometry_points_from_i_to_j():
    dx, dy, r = geometry_buffers(np.array([[0.0, 0.0], [3.0, 4.0]]))
    assert dx[0, 1] == 3.0 and dy[0, 1] == 4.0
    assert dx[1, 0] == -3.0 and dy[1, 0] == -4.0
    assert r[0, 1] == 5.0
    assert np.isinf(r[0, 0])


def test_magnitude_matches_inverse_square():
    assert force_magnitude(G, 2.0, 3.0, 2.0) == pytest.approx(G * 6.0 / 4.0, rel=1e-15)


def test_magnitude_decays_monotonically_to_zero():
    r = np.logspace(-2, 12, 200)
    mag = force_magnitude(1.0, 1.0, 1.0, r)
    assert np.all(np.diff(mag) < 0.0)
    assert mag[-1] < 1e-23


def test_two_body_force_points_along_separation():
    F = pairwise_forces(np.array([[-0.5, 0.0], [0.5, 0.0]]), np.ones(2), G)
    assert F[0, 1, 0] == pytest.approx(G, rel=1e-15)
    assert F[1, 0, 0] == pytest.approx(-G, rel=1e-15)
    assert abs(F[0, 1, 1]) < 1e-25
    assert np.all(F[0, 0] == 0.0) and np.all(F[1, 1] == 0.0)


def test_newtons_third_law():
    rng = np.random.default_rng(7)
    pos = rng.normal(size=(6, 2))
    mass = rng.uniform(0.5, 5.0, size=6)
    F = pairwise_forces(pos, mass, 1.0)
    scale = np.max(np.abs(F))
    np.testing.assert_allclose(F, -F.transpose(1, 0, 2), rtol=0.0, atol=1e-12 * scale)


def test_net_force_sums_pairs():
    pos = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]])
    mass = np.array([1.0, 2.0, 3.0])
    net = gravitational_force(pos, mass, 1.0)
    np.testing.assert_allclose(net[0], [2.0, 0.75], rtol=1e-12)
    np.testing.assert_allclose(net.sum(axis=0), [0.0, 0.0], atol=1e-12)


def test_coincident_bodies_raise():
    pos = np.array([[0.0, 0.0], [1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(SingularConfiguration) as exc_info:
        pairwise_forces(pos, np.ones(3), G, step_index=7)
    assert exc_info.value.pair == (1, 2)
    assert exc_info.value.step_index == 7


def test_min_separation_clamps_close_pairs(capsys):
    pos = np.array([[0.0, 0.0], [1e-6, 0.0]])
    F = pairwise_forces(pos, np.ones(2), 1.0, min_separation=1e-3)
    assert F[0, 1, 0] == pytest.approx(1e6, rel=1e-12)
    assert "clamped to min_separation" in capsys.readouterr().out


def test_min_separation_leaves_coincident_pairs_forceless():
    pos = np.array([[0.0, 0.0], [0.0, 0.0], [1.0, 0.0]])
    F = pairwise_forces(pos, np.ones(3), 1.0, min_separation=1e-3)
    assert np.all(F[0, 1] == 0.0) and np.all(F[1, 0] == 0.0)
    assert F[0, 2, 0] == pytest.approx(1.0)


def test_single_body_feels_nothing():
    F = pairwise_forces(np.array([[1.0, 2.0]]), np.ones(1), G)
    assert F.shape == (1, 1, 2)
    assert np.all(F == 0.0)


def test_coincident_bodies_raise_without_gravity():
    pos = np.array([[0.0, 0.0], [0.0, 0.0]])
    with pytest.raises(SingularConfiguration) as exc_info:
        pairwise_forces(pos, np.ones(2), 0.0)
    assert exc_info.value.pair == (0, 1)


def test_zero_gravity_gives_zero_forces():
    pos = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    F = pairwise_forces(pos, np.ones(3), 0.0)
    assert F.shape == (3, 3, 2)
    assert np.all(F == 0.0)

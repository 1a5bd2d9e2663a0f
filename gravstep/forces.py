"""
This module implements the Newtonian pairwise force law.

pairwise_forces returns the raw (N, N, 2) force matrix, F[i, j] being the force body j
exerts on body i, computed from the magnitude G * m_i * m_j / r^2 and the direction
atan2(dy, dx) from i toward j. The matrix is antisymmetric (Newton's third law) up to
rounding, which is why it is exposed before any division by the differing masses.
gravitational_force sums it into the net force per body. Coincident bodies make the law
undefined: with min_separation == 0 they raise SingularConfiguration, otherwise every
separation is clamped to min_separation and coincident pairs exert no force, since they
have no direction.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray

from .diagnostics import diag_print
from .errors import SingularConfiguration
from .geometry_cache import geometry_buffers, coincident_pairs


def force_magnitude(G: float, m_i, m_j, r):
    return G * m_i * m_j / r / r


def pairwise_forces(
    pos: NDArray[np.floating],
    mass: NDArray[np.floating],
    G: float,
    min_separation: float = 0.0,
    *,
    step_index: int | None = None,
    cfg=None,
) -> NDArray[np.floating]:

    pos = np.asarray(pos, dtype=np.float64)
    mass = np.asarray(mass, dtype=np.float64)
    n = pos.shape[0]

    if n < 2:
        return np.zeros((n, n, 2), dtype=np.float64)

    dx, dy, r = geometry_buffers(pos)

    pairs = coincident_pairs(r)
    if min_separation <= 0.0:
        if pairs.size:
            raise SingularConfiguration(tuple(pairs[0]), step_index=step_index)
        r_eff = r
    else:
        close = r < min_separation
        if np.any(close):
            diag_print(
                "min_separation_clamp",
                f"[diag] separation {float(np.min(r)):.3e} clamped to min_separation={min_separation:.3e}",
                cfg,
            )
        r_eff = np.maximum(r, min_separation)

    if float(G) == 0.0:
        return np.zeros((n, n, 2), dtype=np.float64)

    mag = force_magnitude(float(G), mass[:, None], mass[None, :], r_eff)
    if pairs.size:
        mag[pairs[:, 0], pairs[:, 1]] = 0.0
        mag[pairs[:, 1], pairs[:, 0]] = 0.0

    angle = np.arctan2(dy, dx)
    F = np.empty((n, n, 2), dtype=np.float64)
    F[..., 0] = mag * np.cos(angle)
    F[..., 1] = mag * np.sin(angle)
    return F


def gravitational_force(pos: np.ndarray,
                        mass: np.ndarray,
                        G: float,
                        min_separation: float = 0.0) -> np.ndarray:
    F_pair = pairwise_forces(pos, mass, G, min_separation)
    return F_pair.sum(axis=1)

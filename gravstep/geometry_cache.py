from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the pairwise geometry shared by the force law and the diagnostics. The geometry_buffers function computes, in one vectorised pass, the separation components from every body i toward every body j (pos[j] - pos[i]) and the Euclidean distance between them. Diagonal distances are set to +inf so a body never interacts with itself and inverse powers of r vanish there. coincident_pairs lists the distinct pairs (i < j) sharing a position. The module assumes (N, 2) float64 position arrays.

"""




__all__ = ["geometry_buffers", "coincident_pairs", "min_separation"]

def geometry_buffers(pos: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pos = np.asarray(pos, dtype=np.float64)

    dx = pos[None, :, 0] - pos[:, None, 0]
    dy = pos[None, :, 1] - pos[:, None, 1]
    r = np.sqrt(dx * dx + dy * dy)

    np.fill_diagonal(r, np.inf)
    return dx, dy, r


def coincident_pairs(r: np.ndarray) -> np.ndarray:
    iu = np.triu_indices(r.shape[0], 1)
    hits = r[iu] == 0.0
    return np.column_stack((iu[0][hits], iu[1][hits]))


def min_separation(pos: np.ndarray) -> float:
    pos = np.asarray(pos, dtype=np.float64)
    if pos.shape[0] < 2:
        return float("inf")
    _, _, r = geometry_buffers(pos)
    return float(np.min(r))

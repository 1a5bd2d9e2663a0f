from __future__ import annotations
from typing import Tuple
import numpy as np

from .errors import NumericOverflow
from .forces import pairwise_forces
from .sim_config import SimConfig
from .step import Step

"""
This central module implements one discrete time step of N-body gravitational dynamics. advance is a pure function of its inputs: it evaluates every pairwise force from the pre-step positions, kicks all velocities by F / m * dt (contributions summed in ascending body order), then drifts every position with the updated velocity (semi-implicit Euler). Inputs are never modified; the result is returned as new arrays, so a failing step leaves the caller's committed state untouched. The Integrator class binds the physical constants of a SimConfig and maps one Step onto the next, incrementing the step index by exactly one.

"""


def advance(
	mass: np.ndarray,
	pos: np.ndarray,
	vel: np.ndarray,
	G: float,
	dt: float,
	min_separation: float = 0.0,
	*,
	check_finite: bool = True,
	step_index: int | None = None,
	cfg: SimConfig | None = None,
) -> Tuple[np.ndarray, np.ndarray]:
	mass = np.asarray(mass, dtype=np.float64)
	pos = np.asarray(pos, dtype=np.float64)
	dt = float(dt)

	F = pairwise_forces(pos, mass, G, min_separation, step_index=step_index, cfg=cfg)

	vel_next = np.array(vel, dtype=np.float64, copy=True)
	m_col = mass[:, None]
	for j in range(mass.size):
		vel_next += F[:, j, :] / m_col * dt

	pos_next = pos + vel_next * dt

	if check_finite:
		if not np.all(np.isfinite(vel_next)):
			raise NumericOverflow("velocity", step_index)
		if not np.all(np.isfinite(pos_next)):
			raise NumericOverflow("position", step_index)

	return pos_next, vel_next


class Integrator:

	def __init__(self, cfg: SimConfig | None = None) -> None:
		self.cfg = (cfg or SimConfig()).validate()

	@property
	def G(self) -> float:
		return self.cfg.G

	@property
	def dt(self) -> float:
		return self.cfg.dt

	def step(self, current: Step) -> Step:
		cfg = self.cfg
		pos_next, vel_next = advance(
			current.mass,
			current.pos,
			current.vel,
			cfg.G,
			cfg.dt,
			cfg.min_separation,
			check_finite=cfg.check_finite,
			step_index=current.step_index,
			cfg=cfg,
		)
		return Step(current.step_index + 1, cfg.dt, current.mass, pos_next, vel_next)

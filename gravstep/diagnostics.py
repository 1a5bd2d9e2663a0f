from __future__ import annotations
import itertools, math
from typing import Iterable, Tuple, TYPE_CHECKING
import numpy as np
from .geometry_cache import geometry_buffers, min_separation
if TYPE_CHECKING:
    from .step import Step

"""
This module computes conserved quantities and health metrics of a committed Step. The Diagnostics class provides kinetic and potential energy, total energy, linear and angular momentum, centre of mass position and velocity, and the minimum pairwise separation; momentum_drift measures the largest deviation of total momentum from its initial value along a sequence of Steps, which is how the approximate conservation of the explicit Euler scheme is checked. The module also hosts diag_print, the rate-limited diagnostic printer used across the package to avoid console spam: each message key prints its first diag_print_limit occurrences and then every diag_print_interval-th one.

"""


_GLOBAL_DIAG_COUNTS = {}


def diag_print(key: str, msg: str, cfg=None) -> None:
	if cfg is None:
		enabled = True
	else:
		enabled = bool(getattr(cfg, "diag_prints", True))
	if not enabled:
		return

	if cfg is None:
		limit = 3
		interval = 1000
	else:
		limit = int(getattr(cfg, "diag_print_limit", 3))
		interval = int(getattr(cfg, "diag_print_interval", 1000))
	if limit < 0:
		limit = 0
	if interval < 1:
		interval = 1

	c = _GLOBAL_DIAG_COUNTS.get(key, 0) + 1
	_GLOBAL_DIAG_COUNTS[key] = c

	if (c <= limit) or (c % interval == 0):
		if c <= limit:
			suffix = ""
		else:
			suffix = f" (occurrence #{c})"
		print(msg + suffix)


def reset_diag_counts() -> None:
	_GLOBAL_DIAG_COUNTS.clear()


class Diagnostics:

	def __init__(self, step: "Step", G: float):
		self.step = step
		self.G = float(G)

	def kinetic_energy(self) -> float:
		s = 0.0
		for b in self.step.bodies:
			s += 0.5 * b.mass * (b.vx * b.vx + b.vy * b.vy)
		return s

	def potential_energy(self) -> float:
		s = 0.0
		G = self.G
		for a, b in itertools.combinations(self.step.bodies, 2):
			dx = b.x - a.x
			dy = b.y - a.y
			r = math.sqrt(dx * dx + dy * dy)
			if r == 0.0:
				return float("-inf")
			s -= G * a.mass * b.mass / r
		return s

	def energy(self) -> float:
		m = self.step.mass
		v = self.step.vel
		T = 0.5 * float(np.sum(m * np.sum(v * v, axis=1)))

		if self.step.n_bodies < 2:
			return T

		_, _, r = geometry_buffers(self.step.pos)
		iu = np.triu_indices(self.step.n_bodies, 1)
		if np.any(r[iu] == 0.0):
			return float("-inf")
		if self.G == 0.0:
			return T
		mprod = (m[:, None] * m[None, :])[iu]
		U = -self.G * float(np.sum(mprod / r[iu]))
		return T + U

	def linear_momentum(self) -> Tuple[float, float]:
		px = 0.0
		py = 0.0
		for b in self.step.bodies:
			px += b.mass * b.vx
			py += b.mass * b.vy
		return px, py

	def angular_momentum(self) -> float:
		s = 0.0
		for b in self.step.bodies:
			s += b.mass * (b.x * b.vy - b.y * b.vx)
		return s

	def center_of_mass(self):
		M = 0.0
		for b in self.step.bodies:
			M += b.mass
		if M == 0.0:
			return (0.0, 0.0), (0.0, 0.0)
		xs = 0.0
		ys = 0.0
		for b in self.step.bodies:
			xs += b.mass * b.x
			ys += b.mass * b.y
		px, py = self.linear_momentum()
		return (xs / M, ys / M), (px / M, py / M)

	def min_separation(self) -> float:
		return min_separation(self.step.pos)

	def summary(self) -> dict:
		px, py = self.linear_momentum()
		(x_cm, y_cm), (vx_cm, vy_cm) = self.center_of_mass()
		return dict(
			step=self.step.step_index,
			time=self.step.simulated_time,
			kinetic=self.kinetic_energy(),
			potential=self.potential_energy(),
			px=px,
			py=py,
			L=self.angular_momentum(),
			x_cm=x_cm,
			y_cm=y_cm,
			vx_cm=vx_cm,
			vy_cm=vy_cm,
			min_sep=self.min_separation(),
		)

	@staticmethod
	def momentum_drift(steps: Iterable["Step"]) -> float:
		"""Largest |P(t) - P(0)| over ``steps``; 0.0 for an empty sequence."""
		p0 = None
		worst = 0.0
		for st in steps:
			p = np.sum(st.mass[:, None] * st.vel, axis=0)
			if p0 is None:
				p0 = p
				continue
			worst = max(worst, float(np.linalg.norm(p - p0)))
		return worst

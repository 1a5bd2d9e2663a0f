"""
This module defines Step, the immutable snapshot of every body at one simulated instant.

A Step owns float64 copies of the mass, position and velocity arrays and flags them
read-only, so neither the integrator nor any sink can alter a committed state. The step
index is 0-based and the simulated time is always derived as step_index * dt rather than
stored. Step.initial builds step 0 from Body values; Step.from_arrays wraps the arrays
produced by the integrator.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple

import numpy as np

from .body import Body
from .body_view import BodyView
from .simulation_validator import SimulationValidator


def _frozen(arr, shape) -> np.ndarray:
	out = np.array(arr, dtype=np.float64, copy=True).reshape(shape)
	out.setflags(write=False)
	return out


class Step:
	__slots__ = ("step_index", "dt", "mass", "pos", "vel", "_views")

	def __init__(self, step_index: int, dt: float, mass: np.ndarray, pos: np.ndarray, vel: np.ndarray):
		self.step_index = int(step_index)
		self.dt = float(dt)
		self.mass = _frozen(mass, (-1,))
		self.pos = _frozen(pos, (-1, 2))
		self.vel = _frozen(vel, (-1, 2))
		self._views = None

	@classmethod
	def initial(cls, bodies: Iterable[Body], dt: float) -> "Step":
		bodies = list(bodies)
		mass = [b.mass for b in bodies]
		pos = [(b.x, b.y) for b in bodies]
		vel = [(b.vx, b.vy) for b in bodies]
		SimulationValidator.check_state(mass, pos, vel)
		return cls(0, dt, mass, pos, vel)

	@classmethod
	def from_arrays(cls, step_index: int, dt: float, mass, pos, vel) -> "Step":
		SimulationValidator.check_state(mass, pos, vel)
		return cls(step_index, dt, mass, pos, vel)

	@property
	def simulated_time(self) -> float:
		return self.step_index * self.dt

	@property
	def n_bodies(self) -> int:
		return int(self.mass.size)

	def __len__(self) -> int:
		return self.n_bodies

	@property
	def bodies(self) -> Tuple[BodyView, ...]:
		if self._views is None:
			self._views = tuple(BodyView(self, i) for i in range(self.n_bodies))
		return self._views

	def body(self, i: int) -> BodyView:
		return self.bodies[i]

	def to_bodies(self) -> List[Body]:
		return [v.to_body() for v in self.bodies]

	def __repr__(self) -> str:
		return (f"Step(step_index={self.step_index}, time={self.simulated_time}, "
				f"n_bodies={self.n_bodies})")

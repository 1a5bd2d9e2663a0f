"""
This module implements NBodySimulation, the driver that owns the current Step and feeds
the integrator.

A simulation is created once from initial conditions, given either as Body objects or as
mass/position/velocity sequences, and an immutable SimConfig. The current Step is
replaced wholesale by every advance, never mutated. steps() yields a lazy, deterministic
sequence starting with the current Step: step 0 reports the initial conditions before
any force is applied, and each following Step is derived from the previous one. The
generator integrates only when the consumer asks for the next Step, so breaking out of
the loop (or calling stop()) needs no cleanup. record() keeps the whole sequence and
run() forwards every Step to a set of sinks, applying the configured error policy:
"abort" re-raises, "stop" reports the failure and ends the run at the last valid Step.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Sequence

import numpy as np

from .body import Body
from .errors import GravstepError
from .integrator import Integrator
from .sim_config import SimConfig
from .simulation_validator import SimulationValidator
from .step import Step


class NBodySimulation:

	def __init__(
		self,
		bodies: Sequence[Body] | None = None,
		config: SimConfig | None = None,
		*,
		masses=None,
		positions=None,
		velocities=None,
	) -> None:
		self.cfg = (config or SimConfig()).validate()
		self._integrator = Integrator(self.cfg)

		mass, pos, vel = self._build_state(bodies, masses, positions, velocities)
		try:
			SimulationValidator.check_state(mass, pos, vel)
		except GravstepError:
			if self.cfg.diag_prints:
				SimulationValidator.report_invalid_state(
					"initial conditions", masses=mass, positions=pos, velocities=vel
				)
			raise

		if self.cfg.center_of_mass_frame:
			vel = self._rest_frame_velocities(mass, vel)

		self._initial = Step(0, self.cfg.dt, mass, pos, vel)
		self._current = self._initial
		self._stop_requested = False

	@staticmethod
	def _rest_frame_velocities(mass, vel) -> np.ndarray:
		m = np.asarray(mass, dtype=np.float64)
		v = np.asarray(vel, dtype=np.float64).reshape(-1, 2)
		v_cm = (m @ v) / float(np.sum(m))
		return v - v_cm

	@staticmethod
	def _build_state(bodies, masses, positions, velocities):
		if bodies is not None:
			bodies = list(bodies)
			mass = [b.mass for b in bodies]
			pos = [(b.x, b.y) for b in bodies]
			vel = [(b.vx, b.vy) for b in bodies]
			return mass, pos, vel

		if masses is None or positions is None:
			return [], np.empty((0, 2)), np.empty((0, 2))
		mass = list(masses)
		pos = [tuple(p) for p in positions]
		if velocities is None or len(velocities) == 0:
			vel = [(0.0, 0.0)] * len(mass)
		else:
			vel = [tuple(v) for v in velocities]
		return mass, pos, vel

	@property
	def current(self) -> Step:
		return self._current

	@property
	def initial(self) -> Step:
		return self._initial

	@property
	def n_bodies(self) -> int:
		return self._current.n_bodies

	@property
	def step_index(self) -> int:
		return self._current.step_index

	@property
	def simulated_time(self) -> float:
		return self._current.simulated_time

	@property
	def G(self) -> float:
		return self.cfg.G

	@property
	def dt(self) -> float:
		return self.cfg.dt

	@property
	def bodies(self):
		return self._current.bodies

	def advance(self) -> Step:
		self._current = self._integrator.step(self._current)
		return self._current

	def stop(self) -> None:
		self._stop_requested = True

	def reset(self) -> None:
		self._current = self._initial
		self._stop_requested = False

	def steps(self, n_steps: int | None = None) -> Iterator[Step]:
		if n_steps is None:
			n_steps = self.cfg.n_steps
		n_steps = int(n_steps)
		self._stop_requested = False
		for _ in range(n_steps):
			yield self._current
			if self._stop_requested:
				return
			self.advance()

	def record(self, n_steps: int | None = None) -> List[Step]:
		if n_steps is None:
			n_steps = self.cfg.n_steps
		if n_steps > self.cfg.history_warn_steps:
			print(
				f"[warning] recording {n_steps} steps of {self.n_bodies} bodies keeps "
				f"~{n_steps * self.n_bodies * 40 / 1e6:.0f} MB in memory"
			)
		return list(self.steps(n_steps))

	def run(self, sinks: Iterable, n_steps: int | None = None) -> Step:
		sinks = list(sinks)
		for sink in sinks:
			sink.attach(self)

		last = self._current
		try:
			for st in self.steps(n_steps):
				for sink in sinks:
					sink.consume(st)
				last = st
		except GravstepError as exc:
			if self.cfg.on_error == "abort":
				raise
			print(f"[error] {exc}; run stopped after step {last.step_index}")
		finally:
			for sink in sinks:
				sink.close()
		return last

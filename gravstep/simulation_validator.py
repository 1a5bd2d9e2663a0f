"""
This module provides validation utilities for N-body simulation states.

The SimulationValidator class offers static methods to check state validity (positive
masses, finite values, matching (N, 2) shapes), raising the matching typed error, and
to report detailed diagnostics for invalid states. The validation runs once when a
simulation or a Step is built from raw arrays; the integrator relies on it and never
re-checks masses during stepping.
"""

from __future__ import annotations
import math
import numpy as np

from .errors import InvalidMass, InvalidState


class SimulationValidator:
	@staticmethod
	def report_invalid_state(
		label: str,
		masses=None,
		positions=None,
		velocities=None,
	) -> None:

		print(f"[invalid] {label}")
		if masses is not None:
			print("masses", masses)
		if positions is not None:
			print("positions", positions)
			for i, pos in enumerate(positions):
				if len(pos) != 2:
					print(f"  position[{i}] has {len(pos)} dimensions (expected 2)")
		if velocities is not None:
			print("velocities", velocities)
			for i, vel in enumerate(velocities):
				if len(vel) != 2:
					print(f"  velocity[{i}] has {len(vel)} dimensions (expected 2)")

	@staticmethod
	def check_state(masses, positions, velocities) -> None:
		m = np.asarray(masses, dtype=float).ravel()
		r = np.asarray(positions, dtype=float)
		v = np.asarray(velocities, dtype=float)

		if m.size == 0:
			raise InvalidState("a simulation needs at least one body")
		if r.ndim != 2 or r.shape != (m.size, 2):
			raise InvalidState(f"positions must have shape ({m.size}, 2), got {r.shape}")
		if v.shape != r.shape:
			raise InvalidState(f"velocities must have shape ({m.size}, 2), got {v.shape}")

		for i, m_i in enumerate(m):
			if not (m_i > 0.0 and math.isfinite(m_i)):
				raise InvalidMass(i, float(m_i))

		if not np.all(np.isfinite(r)):
			raise InvalidState("positions contain non-finite values")
		if not np.all(np.isfinite(v)):
			raise InvalidState("velocities contain non-finite values")

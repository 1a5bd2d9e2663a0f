"""
This module defines the Body class, a simple data container for one point mass at a
single instant of the simulation.

The class stores mass, position x/y and velocity vx/vy as floating-point attributes and
rejects non-positive or non-finite masses and non-finite coordinates on construction,
since the force law is undefined for them. It is the building block for initial
conditions before conversion to the float64 arrays held by a Step. The
class makes no assumptions about units; the gravitational constant in SimConfig decides
them.
"""
from __future__ import annotations
import math
from typing import Tuple

from .errors import InvalidMass, InvalidState

Vec2 = Tuple[float, float]


class Body:
	__slots__ = ("mass", "x", "y", "vx", "vy")

	def __init__(self, mass: float, x: float, y: float, vx: float = 0.0, vy: float = 0.0):
		mass = float(mass)
		if not (mass > 0.0 and math.isfinite(mass)):
			raise InvalidMass(None, mass)
		self.mass = mass
		self.x = float(x)
		self.y = float(y)
		self.vx = float(vx)
		self.vy = float(vy)
		for name in ("x", "y", "vx", "vy"):
			if not math.isfinite(getattr(self, name)):
				raise InvalidState(f"body {name} must be finite, got {getattr(self, name)!r}")

	@classmethod
	def at(cls, position: Vec2) -> "Body":
		"""Unit mass at rest at ``position``."""
		return cls(1.0, position[0], position[1])

	@property
	def position(self) -> Vec2:
		return (self.x, self.y)

	@property
	def velocity(self) -> Vec2:
		return (self.vx, self.vy)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Body):
			return NotImplemented
		return (self.mass, self.x, self.y, self.vx, self.vy) == (
			other.mass, other.x, other.y, other.vx, other.vy
		)

	def __repr__(self) -> str:
		return f"Body(mass={self.mass}, x={self.x}, y={self.y}, vx={self.vx}, vy={self.vy})"

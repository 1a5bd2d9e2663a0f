"""
This module implements BodyView, a read-only proxy providing Body-like access to one
body stored in a Step's arrays.

The class maps attribute access (mass, x, y, vx, vy) to the matching array indices of
the parent Step without copying. There are no setters: a Step is a committed snapshot
and the arrays behind it are flagged read-only, so sinks can read any field but never
change one. to_body converts the view into an independent Body.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Tuple

from .body import Body

if TYPE_CHECKING:
    from .step import Step


class BodyView:
	__slots__ = ("_step", "_i")

	def __init__(self, step: "Step", idx: int) -> None:
		self._step = step
		self._i = int(idx)

	@property
	def index(self) -> int:
		return self._i

	@property
	def mass(self) -> float:
		return float(self._step.mass[self._i])

	@property
	def x(self) -> float:
		return float(self._step.pos[self._i, 0])

	@property
	def y(self) -> float:
		return float(self._step.pos[self._i, 1])

	@property
	def vx(self) -> float:
		return float(self._step.vel[self._i, 0])

	@property
	def vy(self) -> float:
		return float(self._step.vel[self._i, 1])

	@property
	def position(self) -> Tuple[float, float]:
		return (self.x, self.y)

	@property
	def velocity(self) -> Tuple[float, float]:
		return (self.vx, self.vy)

	def to_body(self) -> Body:
		return Body(self.mass, self.x, self.y, self.vx, self.vy)

	def __repr__(self) -> str:
		return (f"Body(mass={self.mass}, x={self.x}, y={self.y}, "
				f"vx={self.vx}, vy={self.vy})")

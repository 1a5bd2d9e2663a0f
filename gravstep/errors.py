"""
This module defines the exception hierarchy raised by the gravstep package.

Every failure is local to one integration step or one construction call: a step that
raises is never committed, so the previously committed Step stays valid and the driver
decides whether to abort the run or stop it cleanly. SingularConfiguration and
NumericOverflow carry enough context (pair indices, step index) for the caller to report
where the run broke down.
"""

from __future__ import annotations
from typing import Tuple


class GravstepError(Exception):
	pass


class InvalidMass(GravstepError, ValueError):
	def __init__(self, index: int | None, mass: float) -> None:
		self.index = index
		self.mass = mass
		if index is None:
			msg = f"mass must be a positive finite number, got {mass!r}"
		else:
			msg = f"body {index}: mass must be a positive finite number, got {mass!r}"
		super().__init__(msg)


class InvalidState(GravstepError, ValueError):
	pass


class InvalidConfig(GravstepError, ValueError):
	pass


class SingularConfiguration(GravstepError):
	def __init__(self, pair: Tuple[int, int], step_index: int | None = None) -> None:
		self.pair = (int(pair[0]), int(pair[1]))
		self.step_index = step_index
		where = "" if step_index is None else f" at step {step_index}"
		super().__init__(
			f"bodies {self.pair[0]} and {self.pair[1]} are coincident{where}; "
			f"gravitational force is undefined"
		)


class NumericOverflow(GravstepError, ArithmeticError):
	def __init__(self, quantity: str, step_index: int | None = None) -> None:
		self.quantity = quantity
		self.step_index = step_index
		where = "" if step_index is None else f" at step {step_index}"
		super().__init__(f"non-finite {quantity}{where}")


__all__ = [
	"GravstepError",
	"InvalidMass",
	"InvalidState",
	"InvalidConfig",
	"SingularConfiguration",
	"NumericOverflow",
]

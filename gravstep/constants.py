from __future__ import annotations

import math
import os
from typing import Final, List, Tuple

from .body import Body

"""
This module holds the reference constants of the three-body run and the helpers that read their environment overrides. GRAVITATIONAL_CONSTANT, TIME_STEP and STEPS are the defaults SimConfig starts from; REFERENCE_POSITIONS are the initial positions of the reference system, all unit masses at rest. env_float and env_int read GRAVSTEP_* variables and fall back to the default when the variable is unset, unparsable or non-positive, so a stray environment value never aborts a run.


"""


def env_float(name: str, default: float) -> float:
	env_val = os.getenv(name, "")
	if env_val.strip() == "":
		return default
	try:
		val = float(env_val)
	except ValueError:
		print(f"[warning] ignoring {name}={env_val!r}: not a number")
		return default
	if not (val > 0.0 and math.isfinite(val)):
		print(f"[warning] ignoring {name}={env_val!r}: must be positive and finite")
		return default
	return val


def env_int(name: str, default: int) -> int:
	env_val = os.getenv(name, "").strip().replace("_", "")
	if env_val == "":
		return default
	if not env_val.isdigit():
		print(f"[warning] ignoring {name}={env_val!r}: not a non-negative integer")
		return default
	return int(env_val)


GRAVITATIONAL_CONSTANT: Final[float] = 6.67430e-11
TIME_STEP: Final[float] = 0.5
STEPS: Final[int] = 100_000
REPORT_STRIDE: Final[int] = 1_000

REFERENCE_POSITIONS: Final[Tuple[Tuple[float, float], ...]] = (
	(0.3089693008, 0.4236727692),
	(-0.5, 0.0),
	(0.5, 0.0),
)


def reference_bodies() -> List[Body]:
	return [Body.at(p) for p in REFERENCE_POSITIONS]


__all__ = [
	"env_float",
	"env_int",
	"GRAVITATIONAL_CONSTANT",
	"TIME_STEP",
	"STEPS",
	"REPORT_STRIDE",
	"REFERENCE_POSITIONS",
	"reference_bodies",
]

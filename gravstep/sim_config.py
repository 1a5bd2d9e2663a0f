from __future__ import annotations
from dataclasses import dataclass, replace
import math

from .constants import (
	GRAVITATIONAL_CONSTANT,
	TIME_STEP,
	STEPS,
	REPORT_STRIDE,
	env_float,
	env_int,
)
from .errors import InvalidConfig

"""
This central configuration module defines all simulation parameters through the frozen SimConfig dataclass. Physical parameters (gravitational constant, time step, minimum separation) are fixed for the lifetime of a simulation, which is why the class is immutable; run parameters cover the step budget, the error policy of the driver, the console and animation strides, and the rate-limited diagnostic printer. Each simulation receives its own instance, so several simulations with independent parameters can coexist. validate rejects physically meaningless values, replace returns a validated modified copy and from_env applies GRAVSTEP_* environment overrides.

"""
_ALLOWED_ON_ERROR = {
	"abort",
	"stop",
}


@dataclass(frozen=True)
class SimConfig:
	G: float = GRAVITATIONAL_CONSTANT
	dt: float = TIME_STEP
	n_steps: int = STEPS
	min_separation: float = 0.0
	check_finite: bool = True
	on_error: str = "abort"
	center_of_mass_frame: bool = False
	report_stride: int = REPORT_STRIDE
	report_body: int = 0
	report_decimals: int = 6
	frame_stride: int = REPORT_STRIDE
	frame_interval_ms: int = 50
	history_warn_steps: int = 1_000_000
	diag_prints: bool = True
	diag_print_limit: int = 3
	diag_print_interval: int = 1000

	def validate(self) -> "SimConfig":
		if not (math.isfinite(self.dt) and self.dt > 0.0):
			raise InvalidConfig(f"dt must be positive and finite, got {self.dt!r}")
		if not math.isfinite(self.G):
			raise InvalidConfig(f"G must be finite, got {self.G!r}")
		if int(self.n_steps) < 0:
			raise InvalidConfig(f"n_steps must be >= 0, got {self.n_steps!r}")
		if not (math.isfinite(self.min_separation) and self.min_separation >= 0.0):
			raise InvalidConfig(
				f"min_separation must be >= 0 and finite, got {self.min_separation!r}"
			)
		if self.on_error not in _ALLOWED_ON_ERROR:
			raise InvalidConfig(
				f"on_error must be one of {sorted(_ALLOWED_ON_ERROR)}, got {self.on_error!r}"
			)
		for name in ("report_stride", "frame_stride", "diag_print_interval"):
			if int(getattr(self, name)) < 1:
				raise InvalidConfig(f"{name} must be >= 1, got {getattr(self, name)!r}")
		if self.report_body < 0:
			raise InvalidConfig(f"report_body must be >= 0, got {self.report_body!r}")
		if self.report_decimals < 0:
			raise InvalidConfig(f"report_decimals must be >= 0, got {self.report_decimals!r}")
		if self.frame_interval_ms <= 0:
			raise InvalidConfig(
				f"frame_interval_ms must be positive, got {self.frame_interval_ms!r}"
			)
		return self

	def replace(self, **changes) -> "SimConfig":
		return replace(self, **changes).validate()

	@classmethod
	def from_env(cls, **overrides) -> "SimConfig":
		base = dict(
			G=env_float("GRAVSTEP_G", GRAVITATIONAL_CONSTANT),
			dt=env_float("GRAVSTEP_DT", TIME_STEP),
			n_steps=env_int("GRAVSTEP_STEPS", STEPS),
		)
		base.update(overrides)
		return cls(**base).validate()

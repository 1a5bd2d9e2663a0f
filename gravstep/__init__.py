"""
This initialization file serves as the main entry point for the gravstep package,
exposing its public API through a flat namespace.

It re-exports the data model (Body, BodyView, Step), the force law and the semi-implicit
Euler integrator, the NBodySimulation driver with its frozen SimConfig, the sinks that
consume produced steps (console reporter, trajectory recorder, animation renderer), the
diagnostics used to check conservation, and the exception hierarchy. Internal module
organisation stays private; users import everything from the package root.
"""

from .errors import (
	GravstepError,
	InvalidMass,
	InvalidState,
	InvalidConfig,
	SingularConfiguration,
	NumericOverflow,
)
from .constants import (
	GRAVITATIONAL_CONSTANT,
	TIME_STEP,
	STEPS,
	REFERENCE_POSITIONS,
	reference_bodies,
)
from .sim_config import SimConfig
from .simulation_validator import SimulationValidator

from .body import Body
from .body_view import BodyView
from .step import Step
from .geometry_cache import geometry_buffers
from .forces import force_magnitude, pairwise_forces, gravitational_force
from .integrator import Integrator, advance
from .simulation import NBodySimulation

from .diagnostics import Diagnostics, diag_print
from .sinks import Sink, ConsoleReporter, TrajectoryRecorder, AnimationSink, make_sink


__version__ = "0.1.0"

__all__ = [
	"GravstepError",
	"InvalidMass",
	"InvalidState",
	"InvalidConfig",
	"SingularConfiguration",
	"NumericOverflow",
	"GRAVITATIONAL_CONSTANT",
	"TIME_STEP",
	"STEPS",
	"REFERENCE_POSITIONS",
	"reference_bodies",
	"SimConfig",
	"SimulationValidator",
	"Body",
	"BodyView",
	"Step",
	"geometry_buffers",
	"force_magnitude",
	"pairwise_forces",
	"gravitational_force",
	"Integrator",
	"advance",
	"NBodySimulation",
	"Diagnostics",
	"diag_print",
	"Sink",
	"ConsoleReporter",
	"TrajectoryRecorder",
	"AnimationSink",
	"make_sink",
]

"""
This module provides the sinks that consume the Steps produced by a simulation.

Every sink implements consume(step) and close(); a simulation run attaches itself first,
so a sink may end the run early through simulation.stop(). Sinks receive committed,
read-only Steps and never modify them. ConsoleReporter prints one body's position at a
fixed stride, TrajectoryRecorder retains Steps in memory and exports them as numpy
arrays or a pandas DataFrame, and AnimationSink renders retained frames into an animated
GIF with matplotlib. make_sink selects one of them by name from a SimConfig.
"""

from __future__ import annotations
import sys
from typing import List, Optional, Sequence, TYPE_CHECKING

import numpy as np
import pandas as pd

from .errors import InvalidConfig
from .sim_config import SimConfig
from .step import Step

if TYPE_CHECKING:
    from .simulation import NBodySimulation


class Sink:
	simulation: Optional["NBodySimulation"] = None

	def attach(self, simulation: "NBodySimulation") -> None:
		self.simulation = simulation

	def consume(self, step: Step) -> None:
		raise NotImplementedError

	def close(self) -> None:
		pass


class ConsoleReporter(Sink):
	def __init__(self, stride: int = 1000, body_index: int = 0, decimals: int = 6, stream=None) -> None:
		if int(stride) < 1:
			raise InvalidConfig(f"stride must be >= 1, got {stride!r}")
		self.stride = int(stride)
		self.body_index = int(body_index)
		self.decimals = int(decimals)
		self.stream = stream

	def format(self, step: Step) -> str:
		if not 0 <= self.body_index < step.n_bodies:
			raise InvalidConfig(
				f"report body {self.body_index} out of range for {step.n_bodies} bodies"
			)
		b = step.body(self.body_index)
		d = self.decimals
		return f"{b.x:.{d}f}, {b.y:.{d}f}"

	def consume(self, step: Step) -> None:
		if step.step_index % self.stride == 0:
			print(self.format(step), file=self.stream or sys.stdout)


class TrajectoryRecorder(Sink):
	def __init__(self, stride: int = 1, limit: int | None = None) -> None:
		if int(stride) < 1:
			raise InvalidConfig(f"stride must be >= 1, got {stride!r}")
		self.stride = int(stride)
		self.limit = None if limit is None else int(limit)
		self.steps: List[Step] = []

	def consume(self, step: Step) -> None:
		if step.step_index % self.stride != 0:
			return
		self.steps.append(step)
		if self.limit is not None and len(self.steps) >= self.limit:
			if self.simulation is not None:
				self.simulation.stop()

	def __len__(self) -> int:
		return len(self.steps)

	def positions(self) -> np.ndarray:
		if not self.steps:
			return np.empty((0, 0, 2), dtype=np.float64)
		return np.stack([s.pos for s in self.steps])

	def velocities(self) -> np.ndarray:
		if not self.steps:
			return np.empty((0, 0, 2), dtype=np.float64)
		return np.stack([s.vel for s in self.steps])

	def times(self) -> np.ndarray:
		return np.array([s.simulated_time for s in self.steps], dtype=np.float64)

	def to_frame(self) -> pd.DataFrame:
		rows = []
		for s in self.steps:
			for b in s.bodies:
				rows.append({
					"step": s.step_index,
					"time": s.simulated_time,
					"body": b.index,
					"mass": b.mass,
					"x": b.x,
					"y": b.y,
					"vx": b.vx,
					"vy": b.vy,
				})
		return pd.DataFrame(rows, columns=["step", "time", "body", "mass", "x", "y", "vx", "vy"])


class AnimationSink(Sink):
	def __init__(
		self,
		path: str,
		stride: int = 1,
		frame_interval_ms: int = 50,
		colors: Sequence[str] | None = None,
		extent: float | None = None,
		dpi: int = 80,
	) -> None:
		if int(stride) < 1:
			raise InvalidConfig(f"stride must be >= 1, got {stride!r}")
		if frame_interval_ms <= 0:
			raise InvalidConfig(f"frame_interval_ms must be positive, got {frame_interval_ms!r}")
		self.path = str(path)
		self.stride = int(stride)
		self.frame_interval_ms = frame_interval_ms
		self.colors = list(colors) if colors is not None else None
		self.extent = extent
		self.dpi = int(dpi)
		self.frames: List[Step] = []
		self.written = False

	def consume(self, step: Step) -> None:
		if step.step_index % self.stride == 0:
			self.frames.append(step)

	def _limits(self) -> float:
		if self.extent is not None:
			return float(self.extent)
		pos = np.stack([s.pos for s in self.frames])
		half = float(np.max(np.abs(pos)))
		if half == 0.0:
			half = 1.0
		return 1.1 * half

	def close(self) -> None:
		if self.written:
			return
		if not self.frames:
			print(f"[warning] no frames collected; {self.path} not written")
			return

		from matplotlib import rcParams
		from matplotlib.animation import PillowWriter
		from matplotlib.backends.backend_agg import FigureCanvasAgg
		from matplotlib.figure import Figure

		colors = self.colors
		if colors is None:
			colors = rcParams["axes.prop_cycle"].by_key()["color"]
		n = self.frames[0].n_bodies
		body_colors = [colors[i % len(colors)] for i in range(n)]

		fig = Figure(figsize=(5, 5))
		FigureCanvasAgg(fig)
		ax = fig.add_subplot(1, 1, 1)
		lim = self._limits()
		ax.set_xlim(-lim, lim)
		ax.set_ylim(-lim, lim)
		ax.set_aspect("equal")
		ax.set_xlabel("x")
		ax.set_ylabel("y")

		first = self.frames[0]
		markers = ax.scatter(first.pos[:, 0], first.pos[:, 1], c=body_colors, s=40)
		label = ax.text(0.02, 0.96, "", transform=ax.transAxes, va="top")

		writer = PillowWriter(fps=1000.0 / self.frame_interval_ms)
		with writer.saving(fig, self.path, self.dpi):
			for st in self.frames:
				markers.set_offsets(st.pos)
				label.set_text(f"t = {st.simulated_time:.1f}")
				writer.grab_frame()

		self.written = True
		print(f"Saved {len(self.frames)} frames to {self.path}")


_SINK_KINDS = {
	"console",
	"record",
	"animate",
}


def make_sink(kind: str, cfg: SimConfig | None = None, path: str | None = None) -> Sink:
	cfg = cfg or SimConfig()
	if kind == "console":
		return ConsoleReporter(cfg.report_stride, cfg.report_body, cfg.report_decimals)
	if kind == "record":
		return TrajectoryRecorder(stride=cfg.report_stride)
	if kind == "animate":
		if path is None:
			raise InvalidConfig("the animate sink needs an output path")
		return AnimationSink(path, stride=cfg.frame_stride, frame_interval_ms=cfg.frame_interval_ms)
	raise InvalidConfig(f"sink kind must be one of {sorted(_SINK_KINDS)}, got {kind!r}")

"""
Command-line entry point running the reference three-body system.

By default it reproduces the original run: 100 000 steps of half a time unit, printing
the first body's position every 1000 steps. --animate switches to the animation sink and
--record prints a per-step summary table from the trajectory recorder instead.
"""

from __future__ import annotations
import argparse
from typing import List, Optional

from .constants import reference_bodies
from .diagnostics import Diagnostics
from .errors import GravstepError
from .sim_config import SimConfig
from .simulation import NBodySimulation
from .sinks import make_sink


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="gravstep",
		description="Integrate the reference three-body system with semi-implicit Euler.",
	)
	parser.add_argument("--steps", type=int, help="number of steps (default: GRAVSTEP_STEPS or 100000)")
	parser.add_argument("--dt", type=float, help="time step (default: GRAVSTEP_DT or 0.5)")
	parser.add_argument("--G", type=float, dest="G", help="gravitational constant (default: GRAVSTEP_G or 6.6743e-11)")
	parser.add_argument("--stride", type=int, default=1000, help="report every K-th step")
	parser.add_argument("--body", type=int, default=0, help="index of the reported body")
	parser.add_argument("--min-separation", type=float, default=0.0,
						help="clamp separations below this value instead of failing on coincident bodies")
	parser.add_argument("--com-frame", action="store_true",
						help="remove the centre-of-mass velocity before integrating")
	parser.add_argument("--on-error", choices=["abort", "stop"], default="abort",
						help="abort with a non-zero status or stop the run at the last valid step")
	group = parser.add_mutually_exclusive_group()
	group.add_argument("--animate", metavar="PATH", help="write an animated GIF instead of printing positions")
	group.add_argument("--record", action="store_true", help="print a diagnostics table of the recorded steps")
	parser.add_argument("--frame-stride", type=int, default=1000, help="keep one animation frame every K steps")
	parser.add_argument("--frame-interval", type=int, default=50, help="animation frame interval in ms")
	return parser


def config_from_args(args: argparse.Namespace) -> SimConfig:
	overrides = dict(
		min_separation=args.min_separation,
		center_of_mass_frame=args.com_frame,
		on_error=args.on_error,
		report_stride=args.stride,
		report_body=args.body,
		frame_stride=args.frame_stride,
		frame_interval_ms=args.frame_interval,
	)
	if args.steps is not None:
		overrides["n_steps"] = args.steps
	if args.dt is not None:
		overrides["dt"] = args.dt
	if args.G is not None:
		overrides["G"] = args.G
	return SimConfig.from_env(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	try:
		cfg = config_from_args(args)
		sim = NBodySimulation(reference_bodies(), cfg)
		if args.animate:
			sink = make_sink("animate", cfg, path=args.animate)
		elif args.record:
			sink = make_sink("record", cfg)
		else:
			sink = make_sink("console", cfg)
		sim.run([sink])
	except GravstepError as exc:
		print(f"[error] {exc}")
		return 1

	if args.record:
		for st in sink.steps:
			d = Diagnostics(st, cfg.G).summary()
			print(
				f"{d['step']:>10d}  t={d['time']:<12.1f} E_kin={d['kinetic']:.6e} "
				f"P=({d['px']:.3e}, {d['py']:.3e}) min_sep={d['min_sep']:.6f}"
			)
	return 0

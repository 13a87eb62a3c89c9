from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from umplot.color import BLUE, RED
from umplot.config import PlotData, SessionConfig, TitlesConfig
from umplot.errors import PlotDataError
from umplot.loader import load_plot_file
from umplot.series import Series, Style
from umplot.session import STATUS_FAILURE, run_interactive_session
from umplot_core.targets import HeadlessTarget, ImageSequenceTarget, RenderTarget


LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="umplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    plot = sub.add_parser("plot", help="Render a JSON plot description headlessly.")
    plot.add_argument("plot_file", type=Path)
    _add_session_args(plot)

    demo = sub.add_parser("demo", help="Render the built-in sample plot.")
    _add_session_args(demo)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "plot":
        try:
            plot_data = load_plot_file(args.plot_file)
        except PlotDataError as exc:
            LOGGER.error("cannot load %s: %s", args.plot_file, exc)
            return STATUS_FAILURE
    elif args.command == "demo":
        plot_data = demo_plot_data()
    else:
        raise RuntimeError(f"unsupported command: {args.command}")

    try:
        config = SessionConfig.from_env(
            width=args.width,
            height=args.height,
            target_fps=args.fps,
            max_frames=args.frames,
        )
    except ValueError as exc:
        LOGGER.error("invalid session settings: %s", exc)
        return STATUS_FAILURE

    target = _build_target(args.snapshot, args.frames_dir)
    status = run_interactive_session(plot_data, target=target, config=config)
    if status == 0 and args.snapshot is not None:
        print(f"wrote snapshot {args.snapshot}")
    return status


def demo_plot_data() -> PlotData:
    xs = np.linspace(0.0, 4.0 * np.pi, 200)
    samples = np.linspace(0.0, 4.0 * np.pi, 25)
    wave = Series(x=xs, y=np.sin(xs), style=Style(kind="line", color=BLUE, width=2.0), name="sin(x)")
    dots = Series(
        x=samples,
        y=0.5 * np.cos(samples),
        style=Style(kind="scatter", color=RED, width=3.0),
        name="0.5 cos(x)",
    )
    return PlotData(
        series=(wave, dots),
        titles=TitlesConfig(graph="UmPlot demo", x="x", y="y"),
    )


def _add_session_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--frames", type=int, default=None, help="Frames to render. Default: UMPLOT_MAX_FRAMES or 1.")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--snapshot", type=Path, default=None, help="Write the last frame to this PNG file.")
    parser.add_argument("--frames-dir", type=Path, default=None, help="Write every frame as PNG into this folder.")


def _build_target(snapshot: Path | None, frames_dir: Path | None) -> RenderTarget:
    if snapshot is not None and frames_dir is not None:
        raise SystemExit("--snapshot and --frames-dir are mutually exclusive")
    if snapshot is not None:
        return ImageSequenceTarget(snapshot, last_only=True)
    if frames_dir is not None:
        return ImageSequenceTarget(frames_dir)
    return HeadlessTarget()

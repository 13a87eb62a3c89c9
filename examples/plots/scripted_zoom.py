from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from umplot import PlotData, Series, SessionConfig, Style, TitlesConfig, run_interactive_session
from umplot.color import BLUE
from umplot_core.core import BUTTON_LEFT, BUTTON_RIGHT, EventInputSource, InputEvent
from umplot_core.targets import ImageSequenceTarget


class ScriptedMouse(EventInputSource):
    """Replays a drag-zoom, a pan and a reset, one step per frame."""

    def __init__(self) -> None:
        super().__init__()
        self._steps: list[list[InputEvent]] = [
            [InputEvent("pointer_move", x=200, y=100)],
            [InputEvent("pointer_down", x=200, y=100, button=BUTTON_LEFT)],
            [InputEvent("pointer_move", x=300, y=200)],
            [InputEvent("pointer_move", x=400, y=300)],
            [InputEvent("pointer_up", x=400, y=300, button=BUTTON_LEFT)],
            [InputEvent("pointer_down", x=300, y=200, button=BUTTON_RIGHT)],
            [InputEvent("pointer_move", x=260, y=220)],
            [InputEvent("pointer_up", x=260, y=220, button=BUTTON_RIGHT)],
            [InputEvent("pointer_down", x=300, y=300, button=BUTTON_LEFT)],
            [InputEvent("pointer_move", x=250, y=250)],
            [InputEvent("pointer_up", x=250, y=250, button=BUTTON_LEFT)],
            [],
        ]

    def sample(self):
        if self._steps:
            self.push_events(self._steps.pop(0))
        else:
            self.push_event(InputEvent("close"))
        return super().sample()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", type=Path, default=Path("zoom_frames"))
    args = parser.parse_args()

    x = np.linspace(-3.0, 3.0, 300)
    plot_data = PlotData(
        series=(Series(x=x, y=np.exp(-x * x), style=Style(color=BLUE, width=2.0), name="gaussian"),),
        titles=TitlesConfig(graph="Drag to zoom, right-drag to pan"),
    )
    status = run_interactive_session(
        plot_data,
        target=ImageSequenceTarget(args.out),
        input_source=ScriptedMouse(),
        config=SessionConfig(target_fps=30),
    )
    print(f"status={status} frames in {args.out}")


if __name__ == "__main__":
    main()

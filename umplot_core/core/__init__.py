from .events import BUTTON_LEFT, BUTTON_RIGHT, ButtonEdges, InputEvent, InputFrame
from .frame_rate_controller import FrameRateController
from .input_source import EventInputSource, InputSource, ScriptedInputSource

__all__ = [
    "BUTTON_LEFT",
    "BUTTON_RIGHT",
    "ButtonEdges",
    "EventInputSource",
    "FrameRateController",
    "InputEvent",
    "InputFrame",
    "InputSource",
    "ScriptedInputSource",
]

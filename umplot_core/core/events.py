from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


EventType = Literal[
    "pointer_move",
    "pointer_down",
    "pointer_up",
    "resize",
    "close",
]

BUTTON_LEFT = 0
BUTTON_RIGHT = 1


@dataclass(frozen=True)
class InputEvent:
    event_type: EventType
    timestamp: float = 0.0
    x: Optional[float] = None
    y: Optional[float] = None
    button: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class ButtonEdges:
    """Per-frame button state: pressed/released are edges, held is the level."""

    pressed: bool = False
    held: bool = False
    released: bool = False


@dataclass(frozen=True)
class InputFrame:
    pointer: tuple[float, float] = (0.0, 0.0)
    delta: tuple[float, float] = (0.0, 0.0)
    zoom: ButtonEdges = ButtonEdges()
    pan: ButtonEdges = ButtonEdges()
    resized_to: tuple[int, int] | None = None
    close_requested: bool = False

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
import torch


@dataclass(frozen=True)
class DisplayFrame:
    index: int
    width: int
    height: int
    rgba: torch.Tensor


def build_display_frame(frame_rgba: np.ndarray, index: int) -> DisplayFrame:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")
    height, width, _ = frame_rgba.shape
    tensor = torch.from_numpy(np.ascontiguousarray(frame_rgba).copy())
    return DisplayFrame(index=index, width=int(width), height=int(height), rgba=tensor)


class RenderTarget(ABC):
    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def present_frame(self, frame: DisplayFrame) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    def pump_events(self) -> None:
        """Optional hook for targets that need explicit event pumping."""
        return

    def should_close(self) -> bool:
        """Optional hook for targets that expose window-close state."""
        return False

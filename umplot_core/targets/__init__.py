from .base import DisplayFrame, RenderTarget, build_display_frame
from .headless import HeadlessTarget
from .image_sequence import ImageSequenceTarget

__all__ = ["DisplayFrame", "HeadlessTarget", "ImageSequenceTarget", "RenderTarget", "build_display_frame"]

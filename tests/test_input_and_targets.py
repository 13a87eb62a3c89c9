from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image
import torch

from umplot_core.core import (
    BUTTON_LEFT,
    BUTTON_RIGHT,
    ButtonEdges,
    EventInputSource,
    InputEvent,
    InputFrame,
    ScriptedInputSource,
)
from umplot_core.targets import HeadlessTarget, ImageSequenceTarget, build_display_frame


class EventInputSourceTests(unittest.TestCase):
    def test_press_hold_release_edges(self) -> None:
        src = EventInputSource()
        src.push_event(InputEvent("pointer_down", x=10, y=20, button=BUTTON_LEFT))
        first = src.sample()
        self.assertEqual(first.zoom, ButtonEdges(pressed=True, held=True, released=False))
        self.assertEqual(first.pointer, (10.0, 20.0))

        src.push_event(InputEvent("pointer_move", x=30, y=25))
        second = src.sample()
        self.assertEqual(second.zoom, ButtonEdges(pressed=False, held=True, released=False))
        self.assertEqual(second.delta, (20.0, 5.0))

        src.push_event(InputEvent("pointer_up", x=30, y=25, button=BUTTON_LEFT))
        third = src.sample()
        self.assertEqual(third.zoom, ButtonEdges(pressed=False, held=False, released=True))

        self.assertEqual(src.sample().zoom, ButtonEdges())

    def test_right_button_drives_pan(self) -> None:
        src = EventInputSource()
        src.push_events(
            [
                InputEvent("pointer_move", x=5, y=5),
                InputEvent("pointer_down", x=5, y=5, button=BUTTON_RIGHT),
            ]
        )
        frame = src.sample()
        self.assertTrue(frame.pan.pressed)
        self.assertFalse(frame.zoom.held)

    def test_click_within_one_frame_reports_both_edges(self) -> None:
        src = EventInputSource()
        src.push_events(
            [
                InputEvent("pointer_down", x=1, y=1, button=BUTTON_LEFT),
                InputEvent("pointer_up", x=1, y=1, button=BUTTON_LEFT),
            ]
        )
        frame = src.sample()
        self.assertTrue(frame.zoom.pressed)
        self.assertTrue(frame.zoom.released)
        self.assertFalse(frame.zoom.held)

    def test_resize_and_close(self) -> None:
        src = EventInputSource()
        src.push_event(InputEvent("resize", width=800, height=600))
        self.assertEqual(src.sample().resized_to, (800, 600))
        self.assertFalse(src.should_close())
        src.push_event(InputEvent("close"))
        self.assertTrue(src.sample().close_requested)
        self.assertTrue(src.should_close())

    def test_invalid_resize_is_ignored_with_warning(self) -> None:
        src = EventInputSource()
        src.push_event(InputEvent("resize", width=0, height=600))
        with self.assertLogs("umplot_core.core.input_source", level="WARNING"):
            frame = src.sample()
        self.assertIsNone(frame.resized_to)

    def test_same_button_for_zoom_and_pan_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            EventInputSource(zoom_button=BUTTON_LEFT, pan_button=BUTTON_LEFT)


class ScriptedInputSourceTests(unittest.TestCase):
    def test_replays_frames_then_requests_close(self) -> None:
        frames = [InputFrame(pointer=(1.0, 2.0)), InputFrame(pointer=(3.0, 4.0))]
        src = ScriptedInputSource(frames)
        self.assertFalse(src.should_close())
        self.assertEqual(src.sample(), frames[0])
        self.assertEqual(src.sample(), frames[1])
        self.assertTrue(src.should_close())
        self.assertEqual(src.sample().pointer, (3.0, 4.0))
        self.assertEqual(src.sampled, 3)


class TargetTests(unittest.TestCase):
    def _rgba(self, w: int = 4, h: int = 3) -> np.ndarray:
        frame = np.zeros((h, w, 4), dtype=np.uint8)
        frame[..., 0] = 200
        frame[..., 3] = 255
        return frame

    def test_build_display_frame_copies_into_tensor(self) -> None:
        rgba = self._rgba()
        frame = build_display_frame(rgba, index=7)
        self.assertEqual((frame.index, frame.width, frame.height), (7, 4, 3))
        self.assertEqual(frame.rgba.dtype, torch.uint8)
        rgba[0, 0, 0] = 1
        self.assertEqual(int(frame.rgba[0, 0, 0]), 200)

    def test_build_display_frame_validates_layout(self) -> None:
        with self.assertRaises(ValueError):
            build_display_frame(np.zeros((3, 4, 4), dtype=np.float32), index=0)
        with self.assertRaises(ValueError):
            build_display_frame(np.zeros((3, 4, 3), dtype=np.uint8), index=0)

    def test_headless_target_requires_start(self) -> None:
        target = HeadlessTarget()
        frame = build_display_frame(self._rgba(), index=0)
        with self.assertRaises(RuntimeError):
            target.present_frame(frame)
        target.start()
        target.present_frame(frame)
        self.assertEqual(target.frames_presented, 1)
        self.assertIs(target.last_frame, frame)
        target.stop()
        self.assertFalse(target.started)

    def test_image_sequence_target_writes_each_frame(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "frames"
            target = ImageSequenceTarget(out)
            target.start()
            target.present_frame(build_display_frame(self._rgba(), index=0))
            target.present_frame(build_display_frame(self._rgba(), index=1))
            target.stop()
            self.assertEqual([p.name for p in target.written], ["frame_00000.png", "frame_00001.png"])
            with Image.open(target.written[0]) as image:
                self.assertEqual(image.size, (4, 3))
                self.assertEqual(image.mode, "RGBA")

    def test_image_sequence_target_last_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "snap" / "last.png"
            target = ImageSequenceTarget(out, last_only=True)
            target.start()
            for i in range(3):
                target.present_frame(build_display_frame(self._rgba(), index=i))
            self.assertEqual(target.written, [])
            target.stop()
            self.assertEqual(target.written, [out])
            self.assertTrue(out.exists())


if __name__ == "__main__":
    unittest.main()

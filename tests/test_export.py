from __future__ import annotations

import datetime as dt
from pathlib import Path
import tempfile
import unittest

import torch
from PIL import Image

from lifegrid_core.render_config import UserConfig
from lifegrid_core.theme_signal import SystemThemeSignal
from lifegrid_render.export import derive_render_config, overlay_message, render_frame, render_image, save_png

NOW = dt.datetime(2026, 10, 18, 12, 0)


class RenderFrameTests(unittest.TestCase):
    def test_frame_shape_and_light_background(self) -> None:
        frame = render_frame(UserConfig(dob="1986-10-18"), 160, 90, now=NOW)
        self.assertEqual(tuple(frame.shape), (90, 160, 4))
        self.assertEqual(frame.dtype, torch.uint8)
        self.assertTrue(torch.equal(frame[0, 0], torch.tensor([248, 250, 252, 255], dtype=torch.uint8)))

    def test_system_theme_uses_signal(self) -> None:
        signal = SystemThemeSignal(provider=lambda: True)
        frame = render_frame(UserConfig(theme="system"), 64, 64, theme_signal=signal, now=NOW)
        self.assertTrue(torch.equal(frame[0, 0], torch.tensor([15, 23, 42, 255], dtype=torch.uint8)))


class RenderImageTests(unittest.TestCase):
    def test_message_overlay_changes_top_band(self) -> None:
        user = UserConfig(dob="1986-10-18", message="Make it count")
        plain = render_image(user, 400, 300, now=NOW, with_message=False)
        annotated = render_image(user, 400, 300, now=NOW, with_message=True)
        self.assertEqual(annotated.size, (400, 300))
        band = (0, 0, 400, 60)
        self.assertNotEqual(plain.crop(band).tobytes(), annotated.crop(band).tobytes())

    def test_background_override_matches_render_frame(self) -> None:
        user = UserConfig(dob="1986-10-18")
        image = render_image(user, 64, 48, now=NOW, background=(10, 20, 30, 255), with_message=False)
        frame = render_frame(user, 64, 48, now=NOW, background=(10, 20, 30, 255))
        self.assertEqual(image.getpixel((0, 0)), (10, 20, 30, 255))
        self.assertEqual(image.tobytes(), frame.numpy().tobytes())

    def test_derived_config_follows_theme_signal(self) -> None:
        signal = SystemThemeSignal(provider=lambda: True)
        config = derive_render_config(UserConfig(theme="system"), theme_signal=signal, now=NOW)
        self.assertEqual(config.theme_mode, "dark")
        self.assertEqual(derive_render_config(UserConfig(theme="system"), now=NOW).theme_mode, "light")

    def test_blank_message_is_skipped(self) -> None:
        image = Image.new("RGBA", (50, 50), (1, 2, 3, 255))
        overlay_message(image, "   ", "light")
        self.assertEqual(image.getpixel((25, 10)), (1, 2, 3, 255))

    def test_save_png_round_trips_size(self) -> None:
        image = render_image(UserConfig(shape="circle"), 120, 80, now=NOW)
        with tempfile.TemporaryDirectory() as tmp:
            path = save_png(image, Path(tmp) / "out" / "grid.png")
            with Image.open(path) as loaded:
                self.assertEqual(loaded.size, (120, 80))
                self.assertEqual(loaded.format, "PNG")


if __name__ == "__main__":
    unittest.main()

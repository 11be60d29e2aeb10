"""Tests for drawing the entry/stop/target guides."""

import cv2
import numpy as np
import pytest

from scalp_analyzer.annotate import annotate_image
from scalp_analyzer.errors import AnnotationWriteError
from scalp_analyzer.mapping import PriceAxisMapping
from scalp_analyzer.types import Levels


def _levels(close, mapping):
    return Levels(
        high=close,
        low=close,
        close=close,
        support=None,
        resistance=None,
        timestamp="2025-01-01T00:00:00+00:00",
        mapping=mapping,
    )


@pytest.fixture
def canvas():
    return np.zeros((200, 300, 3), dtype=np.uint8)


class TestAnnotateImage:
    def test_draws_three_guides(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        out = annotate_image(canvas, _levels(24250, m), m.to_y, tmp_path / "a.png")

        im = cv2.imread(str(out))
        assert im.shape == canvas.shape
        # entry row 100, stop row ~129, target row ~42; sampled right of labels
        assert tuple(im[100, 240]) == (0, 255, 0)
        assert tuple(im[129, 240]) == (0, 0, 255)
        assert tuple(im[42, 240]) == (255, 255, 255)

    def test_lines_respect_side_margins(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        out = annotate_image(canvas, _levels(24250, m), m.to_y, tmp_path / "a.png")

        im = cv2.imread(str(out))
        assert tuple(im[100, 49]) == (0, 0, 0)
        assert tuple(im[100, 50]) == (0, 255, 0)
        assert tuple(im[100, 249]) == (0, 255, 0)
        assert tuple(im[100, 250]) == (0, 0, 0)

    def test_source_image_untouched(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        annotate_image(canvas, _levels(24250, m), m.to_y, tmp_path / "a.png")
        assert not canvas.any()

    def test_offscreen_guides_skipped(self, canvas, tmp_path):
        """A narrow axis pushes stop and target off the image."""
        m = PriceAxisMapping.from_ticks(200, [24000, 24010])
        out = annotate_image(canvas, _levels(24005, m), m.to_y, tmp_path / "a.png")

        im = cv2.imread(str(out))
        assert tuple(im[100, 240]) == (0, 255, 0)
        red = (im[:, :, 2] == 255) & (im[:, :, 1] == 0) & (im[:, :, 0] == 0)
        assert not red.any()

    def test_non_finite_row_skipped(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        out = annotate_image(
            canvas, _levels(24250, m), lambda p: float("nan"), tmp_path / "a.png"
        )
        assert not cv2.imread(str(out)).any()

    @pytest.mark.parametrize("close", [float("nan"), float("inf")])
    def test_non_finite_close_skips_every_guide(self, canvas, tmp_path, close):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        out = annotate_image(canvas, _levels(close, m), m.to_y, tmp_path / "a.png")
        assert not cv2.imread(str(out)).any()

    def test_creates_parent_directories(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        target = tmp_path / "nested" / "deeper" / "a.png"
        annotate_image(canvas, _levels(24250, m), m.to_y, target)
        assert target.exists()

    def test_write_failure_raises(self, canvas, tmp_path):
        m = PriceAxisMapping.from_ticks(200, [24000, 24500])
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        with pytest.raises(AnnotationWriteError):
            annotate_image(canvas, _levels(24250, m), m.to_y, blocker / "a.png")

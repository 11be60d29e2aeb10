"""Shared fixtures: synthetic chart images and a canned OCR reader."""

import numpy as np
import pytest

from scalp_analyzer.ocr.engine import OcrEngine

GRAY = (150, 150, 150)  # neither body-coloured nor dark
DARK = (30, 30, 30)
GREEN = (0, 200, 0)  # BGR
RED = (0, 0, 200)

AXIS_TEXT = "24500\n24400\n24300\n24200\n24100\n24000"


def make_column_image(h, w, bands=()):
    """Gray BGR image with full-width horizontal ``bands`` of (start, stop, colour)."""
    im = np.empty((h, w, 3), dtype=np.uint8)
    im[:] = GRAY
    for start, stop, colour in bands:
        im[start:stop, :] = colour
    return im


@pytest.fixture
def chart_image():
    """200x400 chart: dark wick rows 60-79, green body rows 80-119."""
    return make_column_image(200, 400, [(60, 80, DARK), (80, 120, GREEN)])


@pytest.fixture
def fake_engine():
    engine = OcrEngine("rapid", timeout=5.0, reader=lambda im: AXIS_TEXT)
    yield engine
    engine.shutdown()

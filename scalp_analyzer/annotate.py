# scalp_analyzer/annotate.py
import logging
import math
from collections.abc import Callable
from pathlib import Path

import cv2
import numpy as np

from .errors import AnnotationWriteError
from .signal import STOP_MULT, TARGET2_MULT, format_price
from .types import Levels

logger = logging.getLogger("scalp_analyzer.annotate")

# BGR
GREEN = (0, 255, 0)
RED = (0, 0, 255)
WHITE = (255, 255, 255)

MARGIN_X = 50
LABEL_X = 60
FONT = cv2.FONT_HERSHEY_SIMPLEX
FONT_SCALE = 0.5
FONT_THICKNESS = 1


def _draw_hline(
    im: np.ndarray, y: float | None, color, name: str, price: float
) -> bool:
    """Draw one guide line and its label; skip rows that fall off the image."""
    h, w = im.shape[:2]
    if y is None or not math.isfinite(y) or not math.isfinite(price):
        return False
    iy = math.floor(y + 0.5)
    if iy < 0 or iy >= h:
        return False

    x0 = max(MARGIN_X, 0)
    x1 = min(w - MARGIN_X, w)
    if x1 > x0:
        im[iy, x0:x1] = color

    label = f"{name}: {format_price(price)}"
    # label box top sits 10px above the line, kept inside the image
    label_top = max(0, min(iy - 10, h - 20))
    (_, text_h), _ = cv2.getTextSize(label, FONT, FONT_SCALE, FONT_THICKNESS)
    cv2.putText(
        im,
        label,
        (LABEL_X, label_top + text_h),
        FONT,
        FONT_SCALE,
        WHITE,
        FONT_THICKNESS,
        cv2.LINE_AA,
    )
    return True


def annotate_image(
    im: np.ndarray,
    levels: Levels,
    to_y: Callable[[float], float],
    output_path: str | Path,
) -> Path:
    """
    Draw entry/stop/target guides onto a copy of ``im`` and save it as PNG.

    Parameters
    ----------
    im : np.ndarray
        Original BGR chart; left untouched.
    levels : Levels
        Levels whose close anchors the three guides.
    to_y : Callable[[float], float]
        Price → pixel-row transform for ``im``'s height.
    output_path : str | Path
        Destination file; parent directories are created.

    Raises
    ------
    AnnotationWriteError
        The PNG could not be encoded or written.
    """
    canvas = im.copy()
    close = levels.close
    stop = close * STOP_MULT
    target = close * TARGET2_MULT

    drawn = [
        _draw_hline(canvas, to_y(close), GREEN, "ENTRY", close),
        _draw_hline(canvas, to_y(stop), RED, "SL", stop),
        _draw_hline(canvas, to_y(target), WHITE, "TP", target),
    ]
    logger.debug("Drew %d of 3 guide lines", sum(drawn))

    out_path = Path(output_path)
    ok, buf = cv2.imencode(".png", canvas)
    if not ok:
        raise AnnotationWriteError(f"Failed to encode annotated chart: {out_path}")
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(buf.tobytes())
    except OSError as e:
        raise AnnotationWriteError(
            f"Failed to write annotated chart {out_path}: {e}"
        ) from e
    return out_path

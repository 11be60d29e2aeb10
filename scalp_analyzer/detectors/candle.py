# scalp_analyzer/detectors/candle.py
import numpy as np

from ..config import ScalpConfig
from ..types import CandleGeometry


def _is_body(r: int, g: int, b: int, floor: int) -> bool:
    is_green = g > r and g > b and g > floor
    is_red = r > g and r > b and r > floor
    return is_green or is_red


def detect_latest_candle(
    body: np.ndarray, config: ScalpConfig | None = None
) -> CandleGeometry:
    """
    Estimate the latest candle's rows from one pixel column near the right edge.

    Walks the column top to bottom. Green- or red-dominant pixels are candle
    body; dark pixels are wick. Only the first contiguous body run is used,
    so the scan assumes one isolated candle owns the column.

    Parameters
    ----------
    body : np.ndarray
        BGR crop of the chart body (axis already cut off).
    config : ScalpConfig | None
        Colour thresholds, fallback band and close-row ratio.

    Returns
    -------
    CandleGeometry
        Always returns a geometry; falls back to a mid-chart band when the
        column holds nothing usable.
    """
    config = config or ScalpConfig()
    h, w = body.shape[:2]
    scan_x = min(int(w * config.scan_column_ratio), w - 1)

    high_y, low_y = h, 0
    body_top, body_bottom = h, 0
    in_candle = False

    column = body[:, scan_x].astype(int) if w > 0 else np.empty((0, 3), dtype=int)
    for y, (b, g, r) in enumerate(column[:, :3]):
        is_body = _is_body(r, g, b, config.body_channel_floor)

        if is_body and not in_candle:
            in_candle = True
            body_top = y
        elif not is_body and in_candle:
            body_bottom = y
            break

        if is_body or r + g + b < config.dark_sum_ceiling:
            high_y = min(high_y, y)
            low_y = max(low_y, y)

    if high_y >= low_y:
        high_y = int(h * config.fallback_band_top)
        low_y = int(h * config.fallback_band_bottom)
        body_top, body_bottom = high_y, low_y

    # Known limitation: the 0.3 switch compares absolute rows, so the chosen
    # close depends on where the body sits in the crop.
    if body_top < body_bottom * config.close_body_ratio:
        close_y = body_top
    elif body_bottom > 0:
        close_y = body_bottom
    else:
        close_y = (high_y + low_y) / 2

    return CandleGeometry(high_y=high_y, low_y=low_y, close_y=close_y)

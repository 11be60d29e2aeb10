# scalp_analyzer/validators.py
import logging

from .types import CandleGeometry

logger = logging.getLogger("scalp_analyzer.validators")


def check_candle(candle: CandleGeometry, height: int) -> bool:
    """Warn (never raise) when the detected candle looks implausible."""
    if candle.high_y >= candle.low_y or not (0 <= candle.close_y <= height):
        logger.warning("Candle detection may be inaccurate: %s", candle)
        return False
    return True

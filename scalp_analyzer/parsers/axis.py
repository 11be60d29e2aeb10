# scalp_analyzer/parsers/axis.py
import logging
import re

from ..config import ScalpConfig
from ..errors import InsufficientTicksError
from ..mapping import PriceAxisMapping

logger = logging.getLogger("scalp_analyzer.parsers.axis")

# 4-5 integer digits, optional single decimal digit (e.g. 24350 or 24350.5)
TICK_RE = re.compile(r"\d{4,5}(?:\.\d)?")


def extract_price_ticks(
    text: str, min_price: float = 5000.0, max_price: float = 50000.0
) -> list[float]:
    """Pull axis labels out of OCR text.

    Values outside the exclusive ``(min_price, max_price)`` band are dropped;
    the rest are deduplicated and sorted ascending.
    """
    if not text:
        return []
    prices = [float(m) for m in TICK_RE.findall(text)]
    return sorted({p for p in prices if min_price < p < max_price})


def calibrate(
    text: str, height: int, config: ScalpConfig | None = None
) -> PriceAxisMapping:
    """Build a pixel↔price mapping from the OCR text of the price axis.

    Raises
    ------
    InsufficientTicksError
        Fewer than two ticks survived filtering.
    """
    config = config or ScalpConfig()
    ticks = extract_price_ticks(text, config.min_tick_price, config.max_tick_price)
    logger.debug("Axis OCR yielded %d tick(s): %s", len(ticks), ticks)
    if len(ticks) < 2:
        raise InsufficientTicksError(len(ticks))
    return PriceAxisMapping.from_ticks(height, ticks)

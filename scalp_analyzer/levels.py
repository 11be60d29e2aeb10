# scalp_analyzer/levels.py
from datetime import datetime, timezone

from .mapping import PriceAxisMapping
from .types import CandleGeometry, Levels


def find_nearest_support(
    ticks, price: float, tolerance: float = 0.005
) -> float | None:
    """Highest tick below ``price * (1 + tolerance)``, or None."""
    below = [t for t in ticks if t < price * (1 + tolerance)]
    return max(below) if below else None


def find_nearest_resistance(
    ticks, price: float, tolerance: float = 0.005
) -> float | None:
    """Lowest tick above ``price * (1 - tolerance)``, or None."""
    above = [t for t in ticks if t > price * (1 - tolerance)]
    return min(above) if above else None


def compose_levels(
    mapping: PriceAxisMapping, candle: CandleGeometry, tolerance: float = 0.005
) -> Levels:
    close = mapping.to_price(candle.close_y)
    return Levels(
        high=mapping.to_price(candle.high_y),
        low=mapping.to_price(candle.low_y),
        close=close,
        support=find_nearest_support(mapping.ticks, close, tolerance),
        resistance=find_nearest_resistance(mapping.ticks, close, tolerance),
        timestamp=datetime.now(timezone.utc).isoformat(),
        mapping=mapping,
    )

# scalp_analyzer/signal.py
"""Scalp signal from extracted price levels: pure math, no I/O.

Fixed-percentage bracket around the close:
    stop    0.3% below
    target1 0.3% above
    target2 0.6% above
so the reward/risk ratio is always 1:1.00.

Trend comes from where the close sits against the nearest support, then
resistance. Confidence is STRONG only when the close hugs support; the
resistance side is never considered (kept as-is until the product side
confirms whether that bias is intended).
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from .types import Levels, Signal

STOP_MULT = 0.997
TARGET1_MULT = 1.003
TARGET2_MULT = 1.006
STRONG_SUPPORT_DISTANCE = 0.002

CONFIDENCE_STRONG = 92
CONFIDENCE_WEAK = 78

STRATEGY = "Iron Fortress Scalp (0.3% move in 5-15 min)"
VALID_FOR = "Next 15 minutes"
NOTE = "Enter only if volume spike + candle close above support"
NO_PRICE_NOTE = "Could not determine valid price from chart"

_ACTIONS = {"BULLISH": "BUY", "BEARISH": "SELL", "NEUTRAL": "HOLD"}


def format_price(value: float) -> str:
    """Zero-decimal price string, rounding halves up."""
    return str(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def _hold_signal() -> Signal:
    return Signal(
        action="HOLD",
        entry="0",
        stop_loss="0",
        target1="0",
        target2="0",
        risk_reward="N/A",
        confidence=0,
        strategy="Iron Fortress Scalp",
        valid_for="N/A",
        support="N/A",
        resistance="N/A",
        note=NO_PRICE_NOTE,
    )


def classify_trend(
    price: float, support: float | None, resistance: float | None
) -> str:
    if support is not None and price > support:
        return "BULLISH"
    if resistance is not None and price < resistance:
        return "BEARISH"
    return "NEUTRAL"


def get_scalp_signal(levels: Levels) -> Signal:
    price = levels.close
    if price is None or not math.isfinite(price) or price <= 0:
        return _hold_signal()

    sl = price * STOP_MULT
    tp1 = price * TARGET1_MULT
    tp2 = price * TARGET2_MULT
    rr = (tp1 - price) / (price - sl)

    support = _finite_or_none(levels.support)
    resistance = _finite_or_none(levels.resistance)

    trend = classify_trend(price, support, resistance)

    strong = (
        support is not None
        and abs(price - support) / price < STRONG_SUPPORT_DISTANCE
    )

    return Signal(
        action=_ACTIONS[trend],
        entry=format_price(price),
        stop_loss=format_price(sl),
        target1=format_price(tp1),
        target2=format_price(tp2),
        risk_reward=f"1:{rr:.2f}",
        confidence=CONFIDENCE_STRONG if strong else CONFIDENCE_WEAK,
        strategy=STRATEGY,
        valid_for=VALID_FOR,
        support=format_price(support) if support is not None else "N/A",
        resistance=format_price(resistance) if resistance is not None else "N/A",
        note=NOTE,
    )

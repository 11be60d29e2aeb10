# scalp_analyzer/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .mapping import PriceAxisMapping


@dataclass
class CandleGeometry:
    """Pixel rows of the most recent candle (smaller row = higher price).

    Nominally ``high_y <= close_y <= low_y``; the detector never enforces it.
    """

    high_y: float
    low_y: float
    close_y: float


@dataclass
class Levels:
    """Priced view of one chart.

    Attributes
    ----------
    high, low, close : float
        Prices of the latest candle's wick extremes and close row.
    support : float | None
        Highest axis tick below the close (within tolerance).
    resistance : float | None
        Lowest axis tick above the close (within tolerance).
    timestamp : str
        ISO-8601 UTC time the levels were composed.
    mapping : PriceAxisMapping | None
        Transform used to produce the prices; lets the annotator map derived
        prices back to rows. Not serialized.
    """

    high: float
    low: float
    close: float
    support: float | None
    resistance: float | None
    timestamp: str
    mapping: PriceAxisMapping | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "support": self.support,
            "resistance": self.resistance,
            "timestamp": self.timestamp,
        }


@dataclass
class Signal:
    action: str  # "BUY" | "SELL" | "HOLD"
    entry: str
    stop_loss: str
    target1: str
    target2: str
    risk_reward: str
    confidence: int
    strategy: str
    valid_for: str
    support: str
    resistance: str
    note: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "entry": self.entry,
            "stopLoss": self.stop_loss,
            "target1": self.target1,
            "target2": self.target2,
            "riskReward": self.risk_reward,
            "confidence": self.confidence,
            "strategy": self.strategy,
            "validFor": self.valid_for,
            "support": self.support,
            "resistance": self.resistance,
            "note": self.note,
        }


@dataclass
class ScalpResult:
    """Everything one chart run produces."""

    levels: Levels
    signal: Signal
    annotated_chart: str
    original: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "levels": self.levels.to_dict(),
            "signal": self.signal.to_dict(),
            "annotatedChart": self.annotated_chart,
            "original": self.original,
        }

# scalp_analyzer/mapping.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .errors import InsufficientTicksError


@dataclass(frozen=True)
class PriceAxisMapping:
    """Affine transform between a pixel row (0 = top) and a price.

    Row 0 maps to ``max_price`` and row ``height`` to ``min_price``. The two
    extremes come from the axis crop but the transform is applied against the
    full image height, which assumes the extreme labels span the chart.

    Only valid for the image height it was built against.
    """

    height: int
    min_price: float
    max_price: float
    ticks: tuple[float, ...]

    @classmethod
    def from_ticks(cls, height: int, ticks: Iterable[float]) -> PriceAxisMapping:
        ordered = tuple(sorted(set(ticks)))
        if len(ordered) < 2:
            raise InsufficientTicksError(len(ordered))
        return cls(
            height=height,
            min_price=ordered[0],
            max_price=ordered[-1],
            ticks=ordered,
        )

    @property
    def price_range(self) -> float:
        return self.max_price - self.min_price

    def to_price(self, y: float) -> float:
        ratio = 1 - (y / self.height)  # rows grow downward
        return self.min_price + ratio * self.price_range

    def to_y(self, price: float) -> float:
        ratio = (price - self.min_price) / self.price_range
        return self.height * (1 - ratio)

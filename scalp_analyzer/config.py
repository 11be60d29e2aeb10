# scalp_analyzer/config.py
"""Tunable constants for the chart → levels pipeline.

Every threshold below is instrument- or theme-specific. The defaults were
tuned on NIFTY 50 screenshots with a dark background and green/red candles.
Values are read from the environment (and an optional ``.env`` file) by
:func:`load_config`; ``ScalpConfig()`` alone gives the defaults.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

OCR_ENGINES = ("rapid", "tesseract", "paddle")


@dataclass(frozen=True)
class ScalpConfig:
    """Typed configuration for calibration, detection and output.

    Attributes
    ----------
    min_tick_price, max_tick_price : float
        Exclusive band an OCR'd axis label must fall in to count as a tick.
    axis_fraction : float
        Right-hand share of the image width cropped as the price axis.
    body_fraction : float
        Left-hand share of the image width kept as the chart body.
    scan_column_ratio : float
        Position of the candle scan column inside the chart body.
    body_channel_floor : int
        A dominant green/red channel must exceed this to count as candle body.
    dark_sum_ceiling : int
        ``r + g + b`` below this counts as a wick pixel.
    fallback_band_top, fallback_band_bottom : float
        High/low rows (as fractions of height) used when nothing is detected.
    close_body_ratio : float
        ``body_top < body_bottom * ratio`` picks the body top as the close row.
    level_tolerance : float
        Relative band around the close within which a tick still qualifies
        as support or resistance.
    """

    min_tick_price: float = 5000.0
    max_tick_price: float = 50000.0
    axis_fraction: float = 0.15
    body_fraction: float = 0.90
    scan_column_ratio: float = 0.92
    body_channel_floor: int = 100
    dark_sum_ceiling: int = 300
    fallback_band_top: float = 0.4
    fallback_band_bottom: float = 0.6
    close_body_ratio: float = 0.3
    level_tolerance: float = 0.005
    ocr_engine: str = "rapid"
    ocr_timeout_s: float = 30.0
    output_dir: str = "outputs"
    log_level: str = "INFO"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(
            f"Environment variable {name} must be a number, got {raw!r}"
        ) from None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"Environment variable {name} must be an integer, got {raw!r}"
        ) from None


def load_config(env_path: str | None = None) -> ScalpConfig:
    """Load configuration from environment variables.

    Raises ``ValueError`` naming the variable when a value cannot be parsed,
    when the tick band is empty, or when the OCR engine is unknown.
    """
    load_dotenv(dotenv_path=env_path)
    d = ScalpConfig()

    cfg = ScalpConfig(
        min_tick_price=_env_float("SCALP_MIN_TICK_PRICE", d.min_tick_price),
        max_tick_price=_env_float("SCALP_MAX_TICK_PRICE", d.max_tick_price),
        axis_fraction=_env_float("SCALP_AXIS_FRACTION", d.axis_fraction),
        body_fraction=_env_float("SCALP_BODY_FRACTION", d.body_fraction),
        scan_column_ratio=_env_float("SCALP_SCAN_COLUMN_RATIO", d.scan_column_ratio),
        body_channel_floor=_env_int("SCALP_BODY_CHANNEL_FLOOR", d.body_channel_floor),
        dark_sum_ceiling=_env_int("SCALP_DARK_SUM_CEILING", d.dark_sum_ceiling),
        fallback_band_top=_env_float("SCALP_FALLBACK_BAND_TOP", d.fallback_band_top),
        fallback_band_bottom=_env_float(
            "SCALP_FALLBACK_BAND_BOTTOM", d.fallback_band_bottom
        ),
        close_body_ratio=_env_float("SCALP_CLOSE_BODY_RATIO", d.close_body_ratio),
        level_tolerance=_env_float("SCALP_LEVEL_TOLERANCE", d.level_tolerance),
        ocr_engine=os.environ.get("SCALP_OCR_ENGINE", d.ocr_engine).lower(),
        ocr_timeout_s=_env_float("SCALP_OCR_TIMEOUT_S", d.ocr_timeout_s),
        output_dir=os.environ.get("OUTPUT_PATH", d.output_dir),
        log_level=os.environ.get("LOG_LEVEL", d.log_level),
    )

    if cfg.min_tick_price >= cfg.max_tick_price:
        raise ValueError(
            "SCALP_MIN_TICK_PRICE must be below SCALP_MAX_TICK_PRICE "
            f"({cfg.min_tick_price:g} >= {cfg.max_tick_price:g})"
        )
    if cfg.ocr_engine not in OCR_ENGINES:
        raise ValueError(
            f"SCALP_OCR_ENGINE must be one of {', '.join(OCR_ENGINES)}, "
            f"got {cfg.ocr_engine!r}"
        )
    return cfg

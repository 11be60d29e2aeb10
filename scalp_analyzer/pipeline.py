# scalp_analyzer/pipeline.py
import logging
from pathlib import Path

import numpy as np

from .annotate import annotate_image
from .config import ScalpConfig
from .detectors.candle import detect_latest_candle
from .detectors.heuristic import chart_body_region, price_axis_region
from .levels import compose_levels
from .loaders import load_image
from .mapping import PriceAxisMapping
from .ocr.engine import OcrEngine
from .parsers.axis import calibrate
from .signal import get_scalp_signal
from .types import Levels, ScalpResult
from .validators import check_candle

logger = logging.getLogger("scalp_analyzer.pipeline")


def read_axis(
    image: str | Path | np.ndarray,
    engine: OcrEngine,
    config: ScalpConfig | None = None,
) -> PriceAxisMapping:
    """OCR the price axis only and calibrate it."""
    config = config or ScalpConfig()
    im = load_image(image)
    text = engine.recognize(price_axis_region(im, config.axis_fraction))
    return calibrate(text, im.shape[0], config)


def analyze(
    image: str | Path | np.ndarray,
    output_path: str | Path,
    engine: OcrEngine,
    config: ScalpConfig | None = None,
) -> Levels:
    """
    Chart image → priced levels, writing the annotated chart on the way.

    The axis OCR job is queued first; the candle scan runs while it is
    pending since neither depends on the other.
    """
    config = config or ScalpConfig()
    im = load_image(image)
    h = im.shape[0]

    pending = engine.submit(price_axis_region(im, config.axis_fraction))

    candle = detect_latest_candle(chart_body_region(im, config.body_fraction), config)
    check_candle(candle, h)

    mapping = calibrate(engine.collect(pending), h, config)
    logger.info(
        "Calibrated axis from %d tick(s): %.1f..%.1f",
        len(mapping.ticks),
        mapping.min_price,
        mapping.max_price,
    )

    levels = compose_levels(mapping, candle, config.level_tolerance)
    logger.debug("Levels: %s", levels)

    annotate_image(im, levels, mapping.to_y, output_path)
    return levels


def scalp(
    image: str | Path,
    engine: OcrEngine,
    config: ScalpConfig | None = None,
    output_dir: str | Path | None = None,
) -> ScalpResult:
    """Full run for one chart file: levels, signal and annotated PNG."""
    config = config or ScalpConfig()
    src = Path(image)
    out_dir = Path(output_dir if output_dir is not None else config.output_dir)
    output_path = out_dir / f"annotated_{src.stem}.png"

    levels = analyze(src, output_path, engine, config)
    signal = get_scalp_signal(levels)
    logger.info(
        "Signal %s @ %s (confidence %d)",
        signal.action,
        signal.entry,
        signal.confidence,
    )
    return ScalpResult(
        levels=levels,
        signal=signal,
        annotated_chart=str(output_path),
        original=src.name,
    )

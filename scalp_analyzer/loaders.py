# scalp_analyzer/loaders.py
from pathlib import Path

import cv2
import numpy as np

from .errors import ImageDecodeError


def load_image(img: str | Path | np.ndarray) -> np.ndarray:
    """Read image into a 3-channel BGR np.ndarray."""
    if isinstance(img, np.ndarray):
        if img.ndim == 2:
            return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        if img.shape[2] == 4:
            return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
        return img
    p = Path(img)
    if not p.exists():
        raise FileNotFoundError(p)
    im = cv2.imread(str(p), cv2.IMREAD_COLOR)
    if im is None or im.size == 0:
        raise ImageDecodeError(f"Failed to read image: {p}")
    return im

# scalp_analyzer/detectors/heuristic.py
import numpy as np


def price_axis_region(img: np.ndarray, fraction: float = 0.15) -> np.ndarray:
    """Rightmost ``fraction`` of the image, full height."""
    h, w = img.shape[:2]
    return img[:, int(w * (1 - fraction)) :]


def chart_body_region(img: np.ndarray, fraction: float = 0.90) -> np.ndarray:
    """Leftmost ``fraction`` of the image; keeps the scan off axis decorations."""
    h, w = img.shape[:2]
    return img[:, : int(w * fraction)]

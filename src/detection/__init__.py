from .bridge_detector import (
    Crossing,
    DetectionResult,
    detect_crossings,
    guess_crossing,
    iter_line_features,
)

__all__ = [
    "Crossing", "DetectionResult", "detect_crossings", "guess_crossing",
    "iter_line_features",
]

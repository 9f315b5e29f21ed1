"""
Public landmark interface – re-export the registry and its static
configuration under stable names.
"""

from .config import (
    ISTANBUL_LANDMARKS,
    ShoreHeuristic,
    DEFAULT_HEURISTIC,
    ESTIMATE_SUFFIX,
)
from .registry import (
    Landmark,
    LandmarkRegistry,
    LandmarkConfigError,
    load_landmarks_csv,
    DEFAULT_REGISTRY,
)

__all__ = [
    "ISTANBUL_LANDMARKS", "ShoreHeuristic", "DEFAULT_HEURISTIC", "ESTIMATE_SUFFIX",
    "Landmark", "LandmarkRegistry", "LandmarkConfigError", "load_landmarks_csv",
    "DEFAULT_REGISTRY",
]

"""
Read-only catalogue of named landmarks (bridges, tunnels) and their
bounding regions.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

import pandas as pd

from src.geometry import BoundingRegion
from .config import ISTANBUL_LANDMARKS

logger = logging.getLogger(__name__)

BOUND_KEYS = ("north", "south", "east", "west")


class LandmarkConfigError(ValueError):
    """Raised when a landmark table is incomplete or inconsistent."""


@dataclass(frozen=True)
class Landmark:
    name: str
    region: BoundingRegion


class LandmarkRegistry:
    """Immutable, ordered collection of landmarks."""

    def __init__(self, landmarks: Iterable[Landmark]):
        items = tuple(landmarks)
        seen = set()
        for landmark in items:
            if landmark.name in seen:
                raise LandmarkConfigError(f"Duplicate landmark name: {landmark.name!r}")
            seen.add(landmark.name)
        self._landmarks: Tuple[Landmark, ...] = items

    def __iter__(self) -> Iterator[Landmark]:
        return iter(self._landmarks)

    def __len__(self) -> int:
        return len(self._landmarks)

    def __repr__(self) -> str:
        return f"LandmarkRegistry({[lm.name for lm in self._landmarks]!r})"

    def all(self) -> Tuple[Landmark, ...]:
        return self._landmarks

    def names(self) -> Tuple[str, ...]:
        return tuple(lm.name for lm in self._landmarks)

    def find_by_name_or_substring(self, text: str) -> Optional[Landmark]:
        """
        Return the landmark whose name equals `text`; failing that, the first
        one whose name contains it or is contained in it.

        The last form lets a decorated label such as
        "Galata Köprüsü (estimated)" resolve back to its landmark.
        """
        if not text:
            return None
        for landmark in self._landmarks:
            if landmark.name == text:
                return landmark
        for landmark in self._landmarks:
            if text in landmark.name or landmark.name in text:
                return landmark
        return None

    # ------------------------------------------------------------------
    #  Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "LandmarkRegistry":
        """Build from `{name, bounds: {north, south, east, west}}` records."""
        landmarks = []
        for index, record in enumerate(records):
            name = record.get("name")
            if _is_blank(name) or not str(name).strip():
                raise LandmarkConfigError(f"Landmark #{index} has no name")
            bounds = record.get("bounds") or {}
            landmarks.append(Landmark(name=str(name), region=_region_from_bounds(name, bounds)))
        return cls(landmarks)


def _is_blank(value: Any) -> bool:
    # pandas hands empty CSV cells over as NaN
    return value is None or (not isinstance(value, str) and pd.isna(value))


def _region_from_bounds(name: str, bounds: Dict[str, Any]) -> BoundingRegion:
    missing = [key for key in BOUND_KEYS if _is_blank(bounds.get(key))]
    if missing:
        raise LandmarkConfigError(f"Landmark {name!r} is missing bounds: {missing}")
    try:
        region = BoundingRegion(**{key: float(bounds[key]) for key in BOUND_KEYS})
    except (TypeError, ValueError) as e:
        raise LandmarkConfigError(f"Landmark {name!r} has non-numeric bounds: {e}") from e
    out_of_range = [
        key for key, limit in zip(BOUND_KEYS, (90, 90, 180, 180))
        if not -limit <= getattr(region, key) <= limit
    ]
    if out_of_range:
        raise LandmarkConfigError(f"Landmark {name!r} has bounds outside WGS84 ranges: {out_of_range}")
    if region.north < region.south or region.east < region.west:
        raise LandmarkConfigError(f"Landmark {name!r} has inverted bounds: {bounds}")
    return region


def load_landmarks_csv(csv_path: Union[str, Path]) -> LandmarkRegistry:
    """
    Load a landmark table from CSV.

    Expected columns: name, north, south, east, west. Row order is kept and
    becomes the order detection results are reported in.
    """
    try:
        df = pd.read_csv(csv_path)
    except Exception as e:
        raise LandmarkConfigError(f"Failed to read landmark CSV {csv_path}: {e}") from e

    missing_cols = [col for col in ("name",) + BOUND_KEYS if col not in df.columns]
    if missing_cols:
        raise LandmarkConfigError(f"Missing required columns: {missing_cols}")

    records = [
        {"name": row["name"], "bounds": {key: row[key] for key in BOUND_KEYS}}
        for row in df.to_dict("records")
    ]
    registry = LandmarkRegistry.from_records(records)
    logger.info("Loaded %d landmarks from %s", len(registry), csv_path)
    return registry


DEFAULT_REGISTRY = LandmarkRegistry.from_records(ISTANBUL_LANDMARKS)

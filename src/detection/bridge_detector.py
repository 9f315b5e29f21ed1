"""
Bridge / tunnel detection for a routed path.

The detector is a pure function of the route geometry and a landmark
registry. It never touches the map; callers hand the result to a renderer.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from src.geometry import Coordinate, iter_segments, segment_intersects_region
from src.landmarks import (
    DEFAULT_HEURISTIC,
    DEFAULT_REGISTRY,
    LandmarkRegistry,
    ShoreHeuristic,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Crossing:
    """A landmark the route uses. `estimated` marks a shore-heuristic guess."""

    name: str
    estimated: bool = False
    suffix: str = DEFAULT_HEURISTIC.estimate_suffix

    @property
    def label(self) -> str:
        return f"{self.name}{self.suffix}" if self.estimated else self.name


@dataclass(frozen=True)
class DetectionResult:
    crossings: Tuple[Crossing, ...] = ()

    def __iter__(self) -> Iterator[Crossing]:
        return iter(self.crossings)

    def __len__(self) -> int:
        return len(self.crossings)

    def __bool__(self) -> bool:
        return bool(self.crossings)

    @property
    def names(self) -> List[str]:
        """Display labels, heuristic guesses carrying the estimate suffix."""
        return [crossing.label for crossing in self.crossings]

    @property
    def confirmed(self) -> List[str]:
        return [c.name for c in self.crossings if not c.estimated]

    @property
    def estimated(self) -> Optional[str]:
        return next((c.name for c in self.crossings if c.estimated), None)


# ──────────────────────────────────────────────────────────────────────────────
#  Route geometry parsing
# ──────────────────────────────────────────────────────────────────────────────
def iter_line_features(route_geometry: Any) -> Iterator[List[Coordinate]]:
    """
    Yield the coordinate list of every usable LineString feature.

    Anything that is not a LineString is ignored. A LineString whose
    positions cannot be parsed, or that has fewer than two of them, is
    skipped with a warning.
    """
    if not isinstance(route_geometry, dict):
        logger.warning("Route data is not a mapping; no features to scan")
        return
    features = route_geometry.get("features")
    if not isinstance(features, (list, tuple)) or not features:
        logger.warning("Route data has no features")
        return

    for index, feature in enumerate(features):
        geometry = feature.get("geometry") if isinstance(feature, dict) else None
        if not isinstance(geometry, dict) or geometry.get("type") != "LineString":
            logger.debug("Skipping feature #%d: not a LineString", index)
            continue
        raw = geometry.get("coordinates")
        if not isinstance(raw, (list, tuple)):
            logger.warning("Skipping feature #%d: coordinates missing", index)
            continue
        try:
            points = [Coordinate.from_lnglat(pair) for pair in raw]
        except (TypeError, ValueError) as e:
            logger.warning("Skipping feature #%d: %s", index, e)
            continue
        if len(points) < 2:
            logger.warning("Skipping feature #%d: needs at least 2 points, got %d", index, len(points))
            continue
        logger.debug("LineString #%d has %d coordinates", index, len(points))
        yield points


# ──────────────────────────────────────────────────────────────────────────────
#  Detection
# ──────────────────────────────────────────────────────────────────────────────
def guess_crossing(start: Coordinate, end: Coordinate,
                   heuristic: ShoreHeuristic = DEFAULT_HEURISTIC) -> Optional[str]:
    """
    Guess which crossing joins two points on opposite shores.

    Returns None when both points are on the same shore.
    """
    if heuristic.is_west_shore(start.lng) == heuristic.is_west_shore(end.lng):
        return None
    return heuristic.pick(max(start.lat, end.lat))


def detect_crossings(route_geometry: Any,
                     registry: LandmarkRegistry = DEFAULT_REGISTRY,
                     start: Optional[Coordinate] = None,
                     end: Optional[Coordinate] = None,
                     heuristic: ShoreHeuristic = DEFAULT_HEURISTIC) -> DetectionResult:
    """
    Find the landmarks a route crosses.

    Args:
        route_geometry: GeoJSON-like FeatureCollection returned by the
            routing provider; positions are (lng, lat).
        registry: landmarks to test against.
        start, end: the requested endpoints, used only by the shore
            heuristic. Default to the ends of the route geometry.
        heuristic: shore decision table.

    Returns:
        DetectionResult in registry order. When no bounding box is hit and
        the endpoints sit on opposite shores it holds a single estimated
        crossing instead; otherwise it is empty. A route without a single
        usable LineString is always empty.
    """
    lines = list(iter_line_features(route_geometry))

    # dict keeps insertion order and doubles as a set for de-duplication
    matched: Dict[str, None] = {}
    for points in lines:
        for segment in iter_segments(points):
            for landmark in registry:
                if landmark.name in matched:
                    continue
                if segment_intersects_region(segment, landmark.region):
                    matched[landmark.name] = None
                    logger.info("Route crosses %s", landmark.name)

    if matched:
        crossings = tuple(Crossing(lm.name) for lm in registry if lm.name in matched)
        logger.info("Detected %d crossing(s): %s", len(crossings), [c.name for c in crossings])
        return DetectionResult(crossings)

    # empty or malformed routes never get a guess
    if not lines:
        return DetectionResult()

    logger.info("No landmark bounding box intersected the route")
    start = start if start is not None else lines[0][0]
    end = end if end is not None else lines[-1][-1]

    guess = guess_crossing(start, end, heuristic)
    if guess is None:
        return DetectionResult()

    logger.warning("Route changes shore but no crossing was matched; guessing %s", guess)
    return DetectionResult((Crossing(guess, estimated=True, suffix=heuristic.estimate_suffix),))


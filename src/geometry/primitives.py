"""
Points, segments and rectangles in a flat (x = lng, y = lat) plane.

⚠️  GeoJSON hands us (lng, lat) pairs. Every public type here stores the
    friendlier (lat, lng) order; use `Coordinate.from_lnglat` at the boundary.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Iterator, NamedTuple, Sequence, Tuple

# Denominators with an absolute value at or below this count as parallel.
# 0.0 reproduces the exact-zero check; raise it to treat near-parallel
# segments as non-intersecting too.
PARALLEL_EPSILON = 0.0


# ──────────────────────────────────────────────────────────────────────────────
#  Value types
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position. Raises ValueError when outside the valid range."""

    lat: float
    lng: float

    def __post_init__(self):
        try:
            lat, lng = float(self.lat), float(self.lng)
        except (TypeError, ValueError):
            raise ValueError(f"Coordinates must be numeric: lat={self.lat!r}, lng={self.lng!r}")
        # boundary values (±90 / ±180) are valid
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise ValueError(f"Coordinates out of valid range: lat={lat}, lng={lng}")
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)

    @property
    def x(self) -> float:
        return self.lng

    @property
    def y(self) -> float:
        return self.lat

    @classmethod
    def from_lnglat(cls, pair: Sequence[float]) -> "Coordinate":
        """Build from a GeoJSON position; extra members (altitude) are ignored."""
        if len(pair) < 2:
            raise ValueError(f"GeoJSON position needs at least two members: {pair!r}")
        return cls(lat=pair[1], lng=pair[0])


class Segment(NamedTuple):
    start: Coordinate
    end: Coordinate


@dataclass(frozen=True)
class BoundingRegion:
    """
    Axis-aligned rectangle in lat/lng space.

    Callers are expected to supply north >= south and east >= west; the
    registry loader checks this once, nothing here re-validates it.
    """

    north: float
    south: float
    east: float
    west: float

    def contains(self, point: Coordinate) -> bool:
        """Inclusive of the boundary."""
        return (
            self.south <= point.lat <= self.north
            and self.west <= point.lng <= self.east
        )

    def corners(self) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        """(west-south, west-north, east-north, east-south)"""
        return self._corners

    def edges(self) -> Tuple[Segment, Segment, Segment, Segment]:
        """The four sides, walked corner to corner starting from the west edge."""
        return self._edges

    # Built once per region; cached_property writes to __dict__, which a
    # frozen dataclass still allows.
    @cached_property
    def _corners(self) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        return (
            Coordinate(self.south, self.west),
            Coordinate(self.north, self.west),
            Coordinate(self.north, self.east),
            Coordinate(self.south, self.east),
        )

    @cached_property
    def _edges(self) -> Tuple[Segment, Segment, Segment, Segment]:
        ws, wn, en, es = self._corners
        return (
            Segment(ws, wn),  # west
            Segment(wn, en),  # north
            Segment(en, es),  # east
            Segment(es, ws),  # south
        )

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.north + self.south) / 2, (self.east + self.west) / 2)


# ──────────────────────────────────────────────────────────────────────────────
#  Intersection tests
# ──────────────────────────────────────────────────────────────────────────────
def segments_intersect(a1: Coordinate, a2: Coordinate,
                       b1: Coordinate, b2: Coordinate,
                       epsilon: float = PARALLEL_EPSILON) -> bool:
    """
    True if segment a1–a2 meets segment b1–b2 (end points included).

    Parallel and collinear pairs, including zero-length segments, give a
    zero denominator and are reported as not intersecting.
    """
    denom = (b2.y - b1.y) * (a2.x - a1.x) - (b2.x - b1.x) * (a2.y - a1.y)
    if abs(denom) <= epsilon:
        return False

    ua = ((b2.x - b1.x) * (a1.y - b1.y) - (b2.y - b1.y) * (a1.x - b1.x)) / denom
    ub = ((a2.x - a1.x) * (a1.y - b1.y) - (a2.y - a1.y) * (a1.x - b1.x)) / denom

    return 0 <= ua <= 1 and 0 <= ub <= 1


def segment_intersects_region(segment: Segment, region: BoundingRegion,
                              epsilon: float = PARALLEL_EPSILON) -> bool:
    """True if an end point lies in the region or the segment cuts one of its edges."""
    start, end = segment
    if region.contains(start) or region.contains(end):
        return True
    return any(
        segments_intersect(start, end, edge.start, edge.end, epsilon)
        for edge in region.edges()
    )


def iter_segments(points: Iterable[Coordinate]) -> Iterator[Segment]:
    """Consecutive pairs of a polyline; fewer than two points yield nothing."""
    previous = None
    for point in points:
        if previous is not None:
            yield Segment(previous, point)
        previous = point

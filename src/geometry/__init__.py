"""
Planar geometry helpers used by the crossing detector.
"""

from .primitives import (
    Coordinate,
    Segment,
    BoundingRegion,
    PARALLEL_EPSILON,
    segments_intersect,
    segment_intersects_region,
    iter_segments,
)

__all__ = [
    "Coordinate", "Segment", "BoundingRegion", "PARALLEL_EPSILON",
    "segments_intersect", "segment_intersects_region", "iter_segments",
]

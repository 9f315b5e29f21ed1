"""
Public ingestion interface – re-export the routing client with *stable*
names so tests and main() can import from `src.ingestion`.
"""

from .route_client import (
    RouteClient,
    RoutingProviderError,
    load_route_geojson,
    DEFAULT_PROFILE,
)

__all__ = [
    "RouteClient", "RoutingProviderError", "load_route_geojson", "DEFAULT_PROFILE",
]

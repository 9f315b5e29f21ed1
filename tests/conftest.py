import pytest
from src.geometry import Coordinate, BoundingRegion
from src.landmarks import LandmarkRegistry, DEFAULT_REGISTRY


def _feature_collection(*lines):
    """Build a FeatureCollection from lines of (lat, lng) tuples."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[lng, lat] for lat, lng in line],
                },
            }
            for line in lines
        ],
    }


@pytest.fixture
def make_route():
    """Fixture returning a builder for GeoJSON routes from (lat, lng) lines."""
    return _feature_collection


@pytest.fixture
def istanbul_registry():
    return DEFAULT_REGISTRY


@pytest.fixture
def unit_square():
    """Region spanning lat 0..1, lng 0..1."""
    return BoundingRegion(north=1.0, south=0.0, east=1.0, west=0.0)


@pytest.fixture
def toy_registry():
    """Two separate boxes and one overlapping the first."""
    return LandmarkRegistry.from_records([
        {"name": "Alpha", "bounds": {"north": 1.0, "south": 0.0, "east": 1.0, "west": 0.0}},
        {"name": "Beta", "bounds": {"north": 1.0, "south": 0.0, "east": 4.0, "west": 3.0}},
        {"name": "Gamma", "bounds": {"north": 0.8, "south": 0.2, "east": 1.5, "west": 0.5}},
    ])


@pytest.fixture
def galata_route(make_route):
    """Straight east-west line through Galata Köprüsü's box."""
    return make_route([(41.0195, 28.9700), (41.0195, 28.9770)])


@pytest.fixture
def cross_shore_detour(make_route):
    """
    From the Asian shore in the north to the European shore in the south,
    swinging far west so no landmark box is touched.
    """
    return make_route([
        (41.20, 29.10),
        (41.20, 28.50),
        (40.95, 28.50),
        (40.95, 28.95),
    ])


@pytest.fixture
def sample_route_response(galata_route):
    """What OpenRouteService returns, trimmed to the fields we use."""
    response = dict(galata_route)
    response["features"][0]["properties"] = {
        "segments": [{"distance": 590.2, "duration": 71.4}],
        "summary": {"distance": 590.2, "duration": 71.4},
    }
    response["bbox"] = [28.97, 41.0195, 28.977, 41.0195]
    return response


@pytest.fixture
def start_point():
    return Coordinate(41.0082, 28.9784)


@pytest.fixture
def end_point():
    return Coordinate(41.0351, 28.9895)

"""
Visualization module for routes and detected crossings.
"""
import os
from .folium_mapper import create_route_map, crossings_summary

DEFAULT_OUTPUT_PATH = os.path.join("data", "output", "route_map.html")


def visualize(route_geojson, result, start=None, end=None, output_path=None, **kwargs):
    """
    Render a route and its crossings to an HTML file.

    Args:
        route_geojson: FeatureCollection from the routing provider
        result: DetectionResult for that route
        start, end: requested endpoints
        output_path: Optional path to save the visualization HTML file.
                    Defaults to data/output/route_map.html
        **kwargs: passed through to create_route_map (e.g. registry)

    Returns:
        The path the map was written to.
    """
    if output_path is None:
        output_path = DEFAULT_OUTPUT_PATH

    # Ensure output directory exists
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    m = create_route_map(route_geojson, result, start, end, **kwargs)
    m.save(str(output_path))
    return output_path


__all__ = ["visualize", "create_route_map", "crossings_summary", "DEFAULT_OUTPUT_PATH"]

import html
import logging
from typing import Any, Dict, List, Optional

import folium
import numpy as np
from shapely.geometry import box

from src.detection import DetectionResult
from src.geometry import Coordinate
from src.landmarks import DEFAULT_REGISTRY, Landmark, LandmarkRegistry

logger = logging.getLogger(__name__)

ROUTE_STYLE = {
    "color": "#3388ff",
    "weight": 6,
    "opacity": 0.8,
    "lineJoin": "round",
    "lineCap": "round",
}
HIGHLIGHT_COLOR = "#ff7800"
DEFAULT_CENTER = (41.0082, 28.9784)  # Sultanahmet
NO_CROSSINGS_TEXT = "No crossings found on route."


def _landmark_centroid(landmark: Landmark) -> List[float]:
    """[lat, lon] of the region centre; degenerate (flat) boxes still work."""
    region = landmark.region
    centroid = box(region.west, region.south, region.east, region.north).centroid
    if centroid.is_empty:
        centre = region.center
        return [centre.lat, centre.lng]
    return [centroid.y, centroid.x]


def crossings_summary(result: DetectionResult) -> str:
    """Plain-text crossing list shown in popups and the info panel."""
    if not result:
        return NO_CROSSINGS_TEXT
    lines = [f"Found {len(result)} crossing(s) on route:"]
    lines += [f"- {label}" for label in result.names]
    return "\n".join(lines)


def _info_panel_html(result: DetectionResult) -> str:
    if not result:
        body = f"<p><b>{NO_CROSSINGS_TEXT}</b></p>"
    else:
        items = "".join(f"<li>- {html.escape(label)}</li>" for label in result.names)
        body = f"<p><b>Found {len(result)} crossing(s) on route:</b></p><ul>{items}</ul>"
    return f"""
    <div class="bridge-info" style="position: fixed; bottom: 20px; left: 20px; z-index: 1000;
         background: #dbeafe; border-left: 4px solid #3b82f6; color: #1d4ed8;
         padding: 12px 16px; border-radius: 4px; box-shadow: 0 1px 4px rgba(0,0,0,0.3);">
        {body}
    </div>
    """


def _add_crossing_highlights(m: folium.Map, result: DetectionResult,
                             registry: LandmarkRegistry) -> int:
    """Rectangle + bridge marker per crossing. Returns how many were drawn."""
    layer = folium.FeatureGroup(name="Crossings")
    drawn = 0
    for label in result.names:
        landmark = registry.find_by_name_or_substring(label)
        if landmark is None:
            logger.warning("No landmark region for %r; nothing to highlight", label)
            continue
        region = landmark.region
        popup = f"<b>{html.escape(landmark.name)}</b>"

        folium.Rectangle(
            bounds=[[region.south, region.west], [region.north, region.east]],
            color=HIGHLIGHT_COLOR,
            weight=3,
            fill=True,
            fill_color=HIGHLIGHT_COLOR,
            fill_opacity=0.35,
            popup=popup,
            tooltip=label,
        ).add_to(layer)

        folium.Marker(
            _landmark_centroid(landmark),
            popup=folium.Popup(popup, max_width=300),
            tooltip=label,
            icon=folium.DivIcon(
                html='<div class="bridge-icon" style="font-size: 24px;">🌉</div>',
                icon_size=(30, 30),
                icon_anchor=(15, 15),
            ),
        ).add_to(layer)
        drawn += 1

    layer.add_to(m)
    return drawn


def create_route_map(route_geojson: Optional[Dict[str, Any]],
                     result: DetectionResult,
                     start: Optional[Coordinate] = None,
                     end: Optional[Coordinate] = None,
                     registry: LandmarkRegistry = DEFAULT_REGISTRY,
                     zoom_start: int = 13) -> folium.Map:
    """
    Create a map of a route and the crossings detected on it.

    Args:
        route_geojson: FeatureCollection from the routing provider. May be
            None or empty, in which case only markers are drawn.
        result: output of `detect_crossings`.
        start, end: requested endpoints.
        registry: used to resolve crossing labels back to their regions.
        zoom_start: initial zoom when there is nothing to fit.

    Returns:
        Folium Map object.
    """
    endpoints = [c for c in (start, end) if c is not None]
    if endpoints:
        center = [float(np.mean([c.lat for c in endpoints])), float(np.mean([c.lng for c in endpoints]))]
    else:
        center = list(DEFAULT_CENTER)

    m = folium.Map(location=center, zoom_start=zoom_start, tiles=None)
    folium.TileLayer(
        tiles="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        attr='&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
        name="OpenStreetMap",
        overlay=False,
        control=True,
    ).add_to(m)

    summary = crossings_summary(result)

    if start is not None:
        folium.Marker(
            [start.lat, start.lng],
            popup=folium.Popup("<b>Start</b>", show=True),
            tooltip="Start",
            icon=folium.Icon(color="green", icon="play", prefix="fa"),
        ).add_to(m)
    if end is not None:
        folium.Marker(
            [end.lat, end.lng],
            popup="<b>Destination</b>",
            tooltip="Destination",
            icon=folium.Icon(color="red", icon="flag", prefix="fa"),
        ).add_to(m)

    if route_geojson and route_geojson.get("features"):
        folium.GeoJson(
            route_geojson,
            name="Route",
            style_function=lambda _feature: dict(ROUTE_STYLE),
            popup=folium.Popup(html.escape(summary).replace("\n", "<br>"), max_width=400),
        ).add_to(m)

    drawn = _add_crossing_highlights(m, result, registry)
    logger.info("Highlighted %d of %d crossing(s)", drawn, len(result))

    m.get_root().html.add_child(folium.Element(_info_panel_html(result)))

    if len(endpoints) == 2:
        m.fit_bounds([[start.lat, start.lng], [end.lat, end.lng]], padding=(50, 50))

    folium.LayerControl().add_to(m)
    return m

import os
import tempfile
import folium
from src.detection import Crossing, DetectionResult, detect_crossings
from src.visualization import visualize, create_route_map, crossings_summary


def _children_of_type(parent, cls):
    return [child for child in parent._children.values() if isinstance(child, cls)]


def _crossing_layer(m):
    layers = [g for g in _children_of_type(m, folium.FeatureGroup) if g.layer_name == "Crossings"]
    assert len(layers) == 1
    return layers[0]


def test_create_route_map_basic(galata_route, start_point, end_point):
    """Map has start/end markers, the route and a layer control."""
    result = detect_crossings(galata_route)
    m = create_route_map(galata_route, result, start_point, end_point)

    assert isinstance(m, folium.Map)
    markers = _children_of_type(m, folium.Marker)
    assert len(markers) == 2
    assert len(_children_of_type(m, folium.GeoJson)) == 1
    assert len(_children_of_type(m, folium.LayerControl)) == 1


def test_map_centres_between_endpoints(start_point, end_point):
    m = create_route_map(None, DetectionResult(), start_point, end_point)
    assert m.location[0] == (start_point.lat + end_point.lat) / 2
    assert m.location[1] == (start_point.lng + end_point.lng) / 2


def test_map_without_endpoints_uses_default_centre():
    m = create_route_map({}, DetectionResult())
    assert m.location == [41.0082, 28.9784]


def test_crossings_are_highlighted(galata_route, start_point, end_point):
    result = detect_crossings(galata_route)
    m = create_route_map(galata_route, result, start_point, end_point)

    layer = _crossing_layer(m)
    rectangles = _children_of_type(layer, folium.Rectangle)
    assert len(rectangles) == 1
    assert len(_children_of_type(layer, folium.Marker)) == 1


def test_estimated_crossing_resolves_to_region(start_point, end_point):
    result = DetectionResult((Crossing("Avrasya Tüneli veya Marmaray", estimated=True),))
    m = create_route_map(None, result, start_point, end_point)
    layer = _crossing_layer(m)
    assert len(_children_of_type(layer, folium.Rectangle)) == 1


def test_unknown_crossing_is_skipped(start_point, end_point):
    result = DetectionResult((Crossing("Golden Gate Bridge"),))
    m = create_route_map(None, result, start_point, end_point)
    layer = _crossing_layer(m)
    assert _children_of_type(layer, folium.Rectangle) == []


def test_crossings_summary():
    assert crossings_summary(DetectionResult()) == "No crossings found on route."
    result = DetectionResult((Crossing("Galata Köprüsü"), Crossing("Marmaray")))
    assert crossings_summary(result) == (
        "Found 2 crossing(s) on route:\n- Galata Köprüsü\n- Marmaray"
    )


def test_visualize_writes_html(galata_route, start_point, end_point):
    """Test that the map HTML file is created with the info panel."""
    result = detect_crossings(galata_route)
    with tempfile.TemporaryDirectory() as tmpdir:
        out_path = os.path.join(tmpdir, 'nested', 'route_map.html')
        written = visualize(galata_route, result, start_point, end_point, out_path)
        assert written == out_path
        assert os.path.exists(out_path)
        with open(out_path, 'r', encoding='utf-8') as f:
            html = f.read()

        assert 'leaflet' in html
        assert 'bridge-info' in html
        assert 'bridge-icon' in html
        assert 'Found 1 crossing(s) on route:' in html
        assert 'Galata' in html


def test_visualize_with_no_crossings(make_route, start_point, end_point):
    route = make_route([(41.05, 28.80), (41.05, 28.85)])
    with tempfile.TemporaryDirectory() as tmpdir:
        out_path = os.path.join(tmpdir, 'route_map.html')
        visualize(route, detect_crossings(route), start_point, end_point, out_path)
        with open(out_path, 'r', encoding='utf-8') as f:
            html = f.read()

        assert 'No crossings found on route.' in html
        assert 'bridge-icon' not in html

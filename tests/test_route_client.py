import json
import os
import tempfile
import pytest
import requests
from unittest.mock import Mock
from src.geometry import Coordinate
from src.ingestion import RouteClient, RoutingProviderError, load_route_geojson


@pytest.fixture
def client():
    return RouteClient(api_key="test-key", base_url="http://example.com/", timeout=3)


def test_client_requires_api_key(monkeypatch):
    """Missing key is a configuration error at construction time."""
    monkeypatch.delenv("ORS_API_KEY", raising=False)
    with pytest.raises(ValueError):
        RouteClient(api_key=None)


def test_client_reads_key_from_env(monkeypatch):
    monkeypatch.setenv("ORS_API_KEY", "env-key")
    monkeypatch.setenv("ORS_BASE_URL", "http://ors.local")
    c = RouteClient()
    assert c.api_key == "env-key"
    assert c.directions_url == "http://ors.local/v2/directions/driving-car/geojson"


def test_build_request_uses_lnglat_order():
    payload = RouteClient.build_request(Coordinate(41.0082, 28.9784), Coordinate(41.0351, 28.9895))
    assert payload == {"coordinates": [[28.9784, 41.0082], [28.9895, 41.0351]]}


def test_fetch_route_posts_to_provider(monkeypatch, client, sample_route_response):
    """Test the request shape and that the response is returned untouched."""
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = sample_route_response
    mock_post = Mock(return_value=mock_response)
    monkeypatch.setattr(requests, 'post', mock_post)

    data = client.fetch_route(Coordinate(41.0195, 28.97), Coordinate(41.0195, 28.977))

    assert data == sample_route_response
    args, kwargs = mock_post.call_args
    assert args[0] == "http://example.com/v2/directions/driving-car/geojson"
    assert kwargs["json"] == {"coordinates": [[28.97, 41.0195], [28.977, 41.0195]]}
    assert kwargs["headers"]["Authorization"] == "test-key"
    assert kwargs["timeout"] == 3


def test_fetch_route_wraps_network_errors(monkeypatch, client):
    def mock_post(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, 'post', mock_post)
    with pytest.raises(RoutingProviderError, match="connection refused"):
        client.fetch_route(Coordinate(41.0, 28.9), Coordinate(41.0, 29.1))


def test_fetch_route_rejects_error_status(monkeypatch, client):
    mock_response = Mock()
    mock_response.status_code = 403
    mock_response.json.return_value = {"error": "Access to this API has been disallowed"}
    monkeypatch.setattr(requests, 'post', Mock(return_value=mock_response))

    with pytest.raises(RoutingProviderError, match="403"):
        client.fetch_route(Coordinate(41.0, 28.9), Coordinate(41.0, 29.1))


def test_fetch_route_rejects_invalid_json(monkeypatch, client):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.side_effect = ValueError("Expecting value")
    monkeypatch.setattr(requests, 'post', Mock(return_value=mock_response))

    with pytest.raises(RoutingProviderError):
        client.fetch_route(Coordinate(41.0, 28.9), Coordinate(41.0, 29.1))


def test_fetch_route_rejects_body_without_features(monkeypatch, client):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {"routes": []}
    monkeypatch.setattr(requests, 'post', Mock(return_value=mock_response))

    with pytest.raises(RoutingProviderError, match="no features"):
        client.fetch_route(Coordinate(41.0, 28.9), Coordinate(41.0, 29.1))


def test_load_route_geojson(galata_route):
    with tempfile.NamedTemporaryFile(mode='w', suffix='.geojson', delete=False, encoding='utf-8') as f:
        json.dump(galata_route, f)
        temp_path = f.name

    try:
        assert load_route_geojson(temp_path) == galata_route
    finally:
        os.unlink(temp_path)


def test_load_route_geojson_missing_file():
    with pytest.raises(OSError):
        load_route_geojson("does/not/exist.geojson")

"""
Routing provider client.

Talks to OpenRouteService over HTTP and hands back the GeoJSON
FeatureCollection untouched. Coordinates go in as (lat, lng) and are
converted to the provider's (lng, lat) order here and nowhere else.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
from dotenv import load_dotenv

from src.geometry import Coordinate

# Configure logging
logger = logging.getLogger(__name__)

# Example .env:
# ORS_API_KEY=your-key
# ORS_BASE_URL=https://api.openrouteservice.org
load_dotenv()

DEFAULT_BASE_URL = "https://api.openrouteservice.org"
DEFAULT_PROFILE = "driving-car"
DEFAULT_TIMEOUT = 10  # seconds


class RoutingProviderError(RuntimeError):
    """Network failure or unusable response from the routing provider."""


class RouteClient:
    """OpenRouteService directions client."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 profile: str = DEFAULT_PROFILE, timeout: float = DEFAULT_TIMEOUT):
        self.api_key = api_key or os.getenv("ORS_API_KEY")
        self.base_url = (base_url or os.getenv("ORS_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.profile = profile
        self.timeout = timeout

        if not self.api_key:
            raise ValueError("OpenRouteService API key not found. Set ORS_API_KEY in your .env file.")

    @property
    def directions_url(self) -> str:
        return f"{self.base_url}/v2/directions/{self.profile}/geojson"

    @staticmethod
    def build_request(start: Coordinate, end: Coordinate) -> Dict[str, Any]:
        return {"coordinates": [[start.lng, start.lat], [end.lng, end.lat]]}

    def fetch_route(self, start: Coordinate, end: Coordinate) -> Dict[str, Any]:
        """
        Request a route between two points.

        Returns:
            The provider's GeoJSON FeatureCollection.

        Raises:
            RoutingProviderError: on network errors, non-200 responses or a
                body that is not a FeatureCollection.
        """
        payload = self.build_request(start, end)
        logger.info("Requesting %s route: %s", self.profile, payload["coordinates"])
        try:
            response = requests.post(
                self.directions_url,
                json=payload,
                headers={
                    "Authorization": self.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RoutingProviderError(f"Routing request failed: {e}") from e

        logger.info("Routing provider answered with status %s", response.status_code)
        if response.status_code != 200:
            raise RoutingProviderError(
                f"Routing request failed with status {response.status_code}: {_error_message(response)}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingProviderError(f"Routing provider returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or "features" not in data:
            raise RoutingProviderError("Routing provider response has no features")
        return data


def _error_message(response: requests.Response) -> str:
    """Best-effort extraction of the provider's error text."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error or body)


def load_route_geojson(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a saved provider response from disk."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading route from {path}: {e}")
        raise
    if not isinstance(data, dict):
        raise ValueError(f"Route file {path} does not hold a GeoJSON object")
    logger.info(f"Loaded route with {len(data.get('features', []))} feature(s) from {path}")
    return data

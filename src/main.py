"""
Main script to orchestrate route fetching, crossing detection and map rendering.
"""
import argparse
import importlib
import logging
from typing import Optional

from src.detection import DetectionResult, detect_crossings
from src.geometry import Coordinate
from src.landmarks import DEFAULT_REGISTRY
from src.visualization import DEFAULT_OUTPUT_PATH

# Configure logging
logging.basicConfig(level=logging.INFO)
log = logging.getLogger(__name__)

DEFAULT_START = "41.0082,28.9784"  # Sultanahmet
DEFAULT_END = "41.0351,28.9895"    # Taksim


def parse_latlng(text: str) -> Coordinate:
    """Parse 'lat,lng' into a Coordinate."""
    parts = [p.strip() for p in str(text).split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected LAT,LNG but got {text!r}")
    try:
        return Coordinate(float(parts[0]), float(parts[1]))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Detect Bosphorus bridge and tunnel crossings on a driving route")
    parser.add_argument("--start", type=parse_latlng, default=DEFAULT_START, help="Start point as LAT,LNG")
    parser.add_argument("--end", type=parse_latlng, default=DEFAULT_END, help="End point as LAT,LNG")
    parser.add_argument("--route-file", type=str, default=None,
                        help="Use a saved GeoJSON route instead of calling the routing provider")
    parser.add_argument("--landmarks", type=str, default=None, help="CSV with name,north,south,east,west columns")
    parser.add_argument("--output", type=str, default=DEFAULT_OUTPUT_PATH)
    parser.add_argument("--profile", type=str, default="driving-car")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> Optional[DetectionResult]:
    args = _parse_args(argv)
    log.info("Starting crossing detector with args: %s", args)
    start, end = args.start, args.end

    # ---------- landmark registry ----------
    registry = DEFAULT_REGISTRY
    if getattr(args, "landmarks", None):
        try:
            load_landmarks_csv = importlib.import_module("src.landmarks").load_landmarks_csv
            registry = load_landmarks_csv(args.landmarks)
        except Exception as exc:
            log.error("Landmark load failed: %s", exc)
            return None
    log.info("Using %d landmarks", len(registry))

    # ---------- route ingest ----------
    ingestion = importlib.import_module("src.ingestion")
    try:
        if getattr(args, "route_file", None):
            log.info("Loading route from %s", args.route_file)
            route = ingestion.load_route_geojson(args.route_file)
        else:
            client = ingestion.RouteClient(profile=getattr(args, "profile", "driving-car"))
            route = client.fetch_route(start, end)
    except Exception as exc:
        log.error("Route fetch failed: %s", exc)
        return None

    # ---------- detection ----------
    result = detect_crossings(route, registry, start=start, end=end)

    visualization = importlib.import_module("src.visualization")
    print(visualization.crossings_summary(result))

    # ---------- visualization ----------
    try:
        log.info("Creating visualization at %s", args.output)
        visualization.visualize(route, result, start, end, args.output, registry=registry)
        log.info("Visualization completed successfully")
    except Exception as e:
        log.error("Visualization failed: %s", e)
        return None

    log.info("Processing completed successfully")
    return result


if __name__ == "__main__":
    main()

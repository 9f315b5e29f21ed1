"""Configuration constants for Istanbul's Bosphorus / Golden Horn crossings."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

# ────────────────────────────────────────────────────────────────────
#  Landmark table
# ────────────────────────────────────────────────────────────────────
# Order matters: detection results are reported in this order.
ISTANBUL_LANDMARKS: List[Dict[str, Any]] = [
    {
        "name": "15 Temmuz Şehitler Köprüsü (Boğaziçi Köprüsü)",
        "bounds": {"north": 41.0480, "south": 41.0430, "east": 29.0420, "west": 29.0320},
    },
    {
        "name": "Fatih Sultan Mehmet Köprüsü",
        "bounds": {"north": 41.0940, "south": 41.0890, "east": 29.0610, "west": 29.0530},
    },
    {
        "name": "Yavuz Sultan Selim Köprüsü",
        "bounds": {"north": 41.1950, "south": 41.1850, "east": 29.1300, "west": 29.1100},
    },
    {
        # Degenerate (zero-height) box: only edge crossings can match it
        "name": "Avrasya Tüneli",
        "bounds": {"north": 40.9990, "south": 40.9990, "east": 29.0000, "west": 28.9700},
    },
    {
        "name": "Marmaray",
        "bounds": {"north": 41.0040, "south": 40.9960, "east": 29.0180, "west": 28.9900},
    },
    {
        "name": "Haliç Köprüsü",
        "bounds": {"north": 41.0350, "south": 41.0320, "east": 28.9490, "west": 28.9400},
    },
    {
        "name": "Galata Köprüsü",
        "bounds": {"north": 41.0210, "south": 41.0180, "east": 28.9760, "west": 28.9710},
    },
]

# ────────────────────────────────────────────────────────────────────
#  Shore heuristic
# ────────────────────────────────────────────────────────────────────
# Longitudes strictly below this are on the European (west) shore
BOSPHORUS_DIVIDE_LNG = 29.00

# (exclusive lower latitude bound, landmark label), checked north to south
BOSPHORUS_LATITUDE_BANDS: Tuple[Tuple[float, str], ...] = (
    (41.15, "Yavuz Sultan Selim Köprüsü"),
    (41.08, "Fatih Sultan Mehmet Köprüsü"),
    (40.99, "15 Temmuz Şehitler Köprüsü (Boğaziçi Köprüsü)"),
)

# Two structures serve the southern corridor
BOSPHORUS_SOUTHERN_FALLBACK = "Avrasya Tüneli veya Marmaray"

# Appended to heuristic guesses so they never read as confirmed matches
ESTIMATE_SUFFIX = " (estimated)"


@dataclass(frozen=True)
class ShoreHeuristic:
    """Decision table used when no bounding-box crossing is found."""

    divide_longitude: float = BOSPHORUS_DIVIDE_LNG
    bands: Tuple[Tuple[float, str], ...] = BOSPHORUS_LATITUDE_BANDS
    fallback: str = BOSPHORUS_SOUTHERN_FALLBACK
    estimate_suffix: str = ESTIMATE_SUFFIX

    def is_west_shore(self, lng: float) -> bool:
        return lng < self.divide_longitude

    def pick(self, northernmost_lat: float) -> str:
        for threshold, label in self.bands:
            if northernmost_lat > threshold:
                return label
        return self.fallback


DEFAULT_HEURISTIC = ShoreHeuristic()

"""Static palette data: source colours and display colours per label."""

from __future__ import annotations

# Colours sampled with a colour picker from the downsized road-map image.
# Pick per image: roads may be red in the source but drawn light gray.
ROAD_MAP_COLORS: list[tuple[int, int, int]] = [
    (172, 220, 242),
    (193, 161, 156),
    (199, 207, 190),
    (149, 181, 145),
]
ROAD_MAP_LABELS: list[str] = ["water", "road", "grass", "mountain"]

# What each label is painted as
DISPLAY_COLORS: dict[str, tuple[int, int, int]] = {
    "water": (0, 0, 255),
    "road": (192, 192, 192),
    "grass": (0, 255, 0),
    "mountain": (64, 64, 64),
}

"""
Google Maps URLs for the map tab.

A search term wins over the user's coordinates, which win over a world view.
"""

from urllib.parse import quote

MAPS_BASE = "https://www.google.com/maps"

Coordinates = tuple[float, float]


def embed_url(search: str = "", coords: Coordinates | None = None) -> str:
    """URL for the embedded map iframe."""
    if search.strip():
        return f"{MAPS_BASE}?q={quote(search, safe='')}&output=embed"
    if coords is not None:
        lat, lng = coords
        return f"{MAPS_BASE}?q={lat},{lng}&z=15&output=embed"
    return f"{MAPS_BASE}?q=world&z=2&output=embed"


def external_url(search: str = "", coords: Coordinates | None = None) -> str:
    """URL opening the same place in the Google Maps app or site."""
    if search.strip():
        query = quote(search, safe="")
    elif coords is not None:
        query = f"{coords[0]},{coords[1]}"
    else:
        query = "world"
    return f"{MAPS_BASE}/search/?api=1&query={query}"

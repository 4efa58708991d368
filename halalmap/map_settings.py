"""
Map settings constants for the restaurant map (engine, desktop viewer and web service).
Edit this file to change the default view, zoom limits, tile provider and fetch behaviour.
"""
import os
from typing import List, Tuple

# ---------------------------------------------------------------------------
# Projection / tiles
# ---------------------------------------------------------------------------

TILE_SIZE = 256

# Mercator diverges at the poles; centers are clamped to this latitude.
MAX_LATITUDE = 85.0

# Raster tile provider: {z}/{x}/{y} are filled per tile.
TILE_URL = os.environ.get(
    "HALALMAP_TILE_URL",
    "https://cartodb-basemaps-a.global.ssl.fastly.net/dark_all/{z}/{x}/{y}.png",
)
USER_AGENT = "HalalMap-Viz/1.0"
TILE_TIMEOUT_S = 5

# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

ZOOM_MIN = 3
ZOOM_MAX = 15

# Default view: center of Indonesia
DEFAULT_CENTER: Tuple[float, float] = (-2.5, 118.0)
DEFAULT_ZOOM = 5
DEFAULT_WIDTH_PX = 800
DEFAULT_HEIGHT_PX = 500
# Largest viewport edge the frame API will lay out
MAX_VIEWPORT_PX = 8192

# Zoom used when a restaurant is focused from the map or the list
DETAIL_ZOOM = 12

# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

# Markers further than this outside the viewport are culled
CULL_MARGIN_PX = 50.0
# Hit radius for click/hover on a marker pin
MARKER_HIT_RADIUS_PX = 14.0
# Number of entries in the quick-access list
QUICK_ACCESS_COUNT = 10

# ---------------------------------------------------------------------------
# Entity source
# ---------------------------------------------------------------------------

API_URL = os.environ.get("HALALMAP_API_URL", "http://127.0.0.1:5000")
API_TIMEOUT_S = 10
# Quiet period before a search/filter change triggers a fetch
FETCH_DEBOUNCE_S = 0.3

ALL_PROVINCES = "All Provinces"
ALL_CUISINES = "All Cuisines"

PROVINCES: List[str] = [
    ALL_PROVINCES,
    "Aceh",
    "Bali",
    "Banten",
    "Bengkulu",
    "DI Yogyakarta",
    "DKI Jakarta",
    "Gorontalo",
    "Jambi",
    "Jawa Barat",
    "Jawa Tengah",
    "Jawa Timur",
    "Kalimantan Barat",
    "Kalimantan Selatan",
    "Kalimantan Tengah",
    "Kalimantan Timur",
    "Kalimantan Utara",
    "Kepulauan Bangka Belitung",
    "Kepulauan Riau",
    "Lampung",
    "Maluku",
    "Maluku Utara",
    "Nusa Tenggara Barat",
    "Nusa Tenggara Timur",
    "Papua",
    "Papua Barat",
    "Papua Barat Daya",
    "Papua Pegunungan",
    "Papua Selatan",
    "Papua Tengah",
    "Riau",
    "Sulawesi Barat",
    "Sulawesi Selatan",
    "Sulawesi Tengah",
    "Sulawesi Tenggara",
    "Sulawesi Utara",
    "Sumatera Barat",
    "Sumatera Selatan",
    "Sumatera Utara",
]

CUISINES: List[str] = [
    ALL_CUISINES,
    "Padang",
    "Javanese",
    "Sundanese",
    "Satay",
    "Grilled Chicken",
    "Seafood",
    "Indonesian",
    "Middle Eastern",
    "Indian",
    "Chinese",
    "Japanese",
    "Korean",
    "Western",
]

# ---------------------------------------------------------------------------
# Web service
# ---------------------------------------------------------------------------

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", 5000))

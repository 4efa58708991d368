"""
Shared pytest fixtures for the restaurant map tests.
Ensures project root is on sys.path so halalmap.*, pygame_viz.* and webapp.* import correctly.
"""
import os
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from halalmap.geo.markers import Entity
from halalmap.geo.projection import GeoPoint
from halalmap.geo.viewport import Viewport
from halalmap.interaction.state import MapState


@pytest.fixture
def jakarta():
    """Warung Padang Sederhana, Jakarta (seed restaurant)."""
    return Entity("rst-001", GeoPoint(-6.2088, 106.8456), verified=True,
                  name="Warung Padang Sederhana", address="Jl. Sudirman No. 123, Jakarta Pusat",
                  province="DKI Jakarta", cuisine="Padang", rating=4.8, review_count=1250)


@pytest.fixture
def sample_entities(jakarta):
    return [
        jakarta,
        Entity("rst-002", GeoPoint(-6.9175, 107.6191), verified=True, name="Sate Khas Senayan",
               address="Jl. Asia Afrika No. 45, Bandung", province="Jawa Barat", cuisine="Satay",
               rating=4.6, review_count=890),
        Entity("rst-004", GeoPoint(-8.5134, 115.2630), verified=False, name="Bebek Bengil Ubud",
               address="Jl. Hanoman, Ubud", province="Bali", cuisine="Indonesian",
               rating=4.4, review_count=640),
    ]


@pytest.fixture
def indonesia_viewport():
    """Default view: center of Indonesia, zoom 5, 800x500."""
    return Viewport(GeoPoint(-2.5, 118.0), 5, 800, 500)


@pytest.fixture
def map_state(indonesia_viewport):
    return MapState(viewport=indonesia_viewport)

"""Tests for webapp routes and data loading."""
import importlib.util
import os
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def app_module():
    # Load app by path so we don't rely on webapp package being on path
    app_path = os.path.join(ROOT, "webapp", "app.py")
    spec = importlib.util.spec_from_file_location("webapp_app", app_path)
    mod = importlib.util.module_from_spec(spec)
    sys.modules["webapp_app"] = mod
    spec.loader.exec_module(mod)
    mod.app.config["TESTING"] = True
    return mod


@pytest.fixture
def client(app_module):
    with app_module.app.test_client() as c:
        yield c


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}


def test_api_restaurants_returns_seed_list(client):
    r = client.get("/api/restaurants")
    assert r.status_code == 200
    assert r.content_type and "json" in r.content_type
    data = r.get_json()
    assert len(data) == 6
    first = data[0]
    assert first["id"] == "rst-001"
    assert first["latitude"] == -6.2088 and first["longitude"] == 106.8456


def test_api_restaurants_filters(client):
    data = client.get("/api/restaurants?province=Bali").get_json()
    assert [r["id"] for r in data] == ["rst-004"]
    data = client.get("/api/restaurants?province=All%20Provinces&search=surabaya").get_json()
    assert [r["province"] for r in data] == ["Jawa Timur"]
    data = client.get("/api/restaurants?sort=reviews").get_json()
    assert data[0]["reviewCount"] == max(r["reviewCount"] for r in data)


def test_api_restaurant_by_id(client):
    r = client.get("/api/restaurants/rst-002")
    assert r.status_code == 200
    assert r.get_json()["name"] == "Sate Khas Senayan"
    r = client.get("/api/restaurants/missing")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Restaurant not found"}


def test_api_restaurants_missing_data(client, app_module, monkeypatch):
    monkeypatch.setattr(app_module, "RESTAURANTS_FILE", "does_not_exist.json")
    r = client.get("/api/restaurants")
    assert r.status_code == 500
    assert "error" in r.get_json()


def test_api_provinces(client):
    data = client.get("/api/provinces").get_json()
    assert data["provinces"][0] == "All Provinces"
    assert "DKI Jakarta" in data["provinces"]
    assert data["cuisines"][0] == "All Cuisines"


def test_api_map_frame_default_view(client):
    r = client.get("/api/map/frame")
    assert r.status_code == 200
    data = r.get_json()
    assert data["zoom"] == 5
    assert data["center"] == {"lat": -2.5, "lng": 118.0}
    assert len(data["tiles"]) == 15
    assert data["counts"]["total"] == 6
    assert data["counts"]["pending"] == 2


def test_api_map_frame_focused(client):
    r = client.get("/api/map/frame?lat=-6.2088&lng=106.8456&zoom=12&width=800&height=500&focused=rst-001")
    data = r.get_json()
    assert data["selection"]["focused_id"] == "rst-001"
    marker = next(m for m in data["markers"] if m["id"] == "rst-001")
    assert marker["x"] == pytest.approx(400)
    assert marker["y"] == pytest.approx(250)


def test_api_map_frame_clamps_zoom(client):
    assert client.get("/api/map/frame?zoom=40").get_json()["zoom"] == 15


@pytest.mark.parametrize("query", [
    "zoom=abc", "lat=nan", "width=0", "height=-5", "lng=inf",
    "zoom=15&width=60000&height=60000", "width=1e7", "height=8193",
])
def test_api_map_frame_rejects_bad_params(client, query):
    r = client.get(f"/api/map/frame?{query}")
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_api_map_frame_accepts_largest_viewport(client):
    r = client.get("/api/map/frame?zoom=3&width=8192&height=512")
    assert r.status_code == 200
    assert len(r.get_json()["tiles"]) > 0

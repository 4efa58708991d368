"""
Restaurant map Flask app.
Serves the restaurant list (the entity source used by the map) from data/restaurants.json,
and computes map frames (tiles + markers) for a viewport given in the query string.
"""
import json
import logging
import math
import os
import sys

from flask import Flask, jsonify, request

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA = os.path.join(ROOT, "data")
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from halalmap.data.entity_source import EntityQuery, filter_entities
from halalmap.frame import build_frame
from halalmap.geo.markers import Entity
from halalmap.geo.projection import GeoPoint
from halalmap.geo.viewport import Viewport
from halalmap.interaction.state import MapState, Selection
from halalmap.map_settings import HOST, PORT, PROVINCES, CUISINES, DEFAULT_CENTER, DEFAULT_ZOOM, MAX_VIEWPORT_PX

log = logging.getLogger(__name__)

app = Flask(__name__)

RESTAURANTS_FILE = "restaurants.json"


def _load_json(name: str):
    path = os.path.join(DATA, name)
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        log.warning("Could not read %s: %s", path, exc)
        return None


def _restaurants():
    data = _load_json(RESTAURANTS_FILE)
    if data is None:
        raise FileNotFoundError(RESTAURANTS_FILE)
    return data


@app.route("/api/health")
def api_health():
    return jsonify({"ok": True})


@app.route("/api/restaurants")
def api_restaurants():
    """Restaurant list, optionally filtered by province/search/cuisine and sorted."""
    try:
        query = EntityQuery.from_params(request.args)
        return jsonify(filter_entities(_restaurants(), query))
    except FileNotFoundError:
        log.exception("Restaurant data unavailable")
        return jsonify({"error": "Failed to fetch restaurants"}), 500


@app.route("/api/restaurants/<restaurant_id>")
def api_restaurant(restaurant_id):
    try:
        records = _restaurants()
    except FileNotFoundError:
        log.exception("Restaurant data unavailable")
        return jsonify({"error": "Internal server error"}), 500
    for r in records:
        if str(r.get("id")) == restaurant_id:
            return jsonify(r)
    return jsonify({"error": "Restaurant not found"}), 404


@app.route("/api/provinces")
def api_provinces():
    return jsonify({"provinces": PROVINCES, "cuisines": CUISINES})


@app.route("/api/map/frame")
def api_map_frame():
    """Tiles and markers for the viewport in the query string (lat, lng, zoom, width, height)."""
    try:
        lat = float(request.args.get("lat", DEFAULT_CENTER[0]))
        lng = float(request.args.get("lng", DEFAULT_CENTER[1]))
        zoom = int(request.args.get("zoom", DEFAULT_ZOOM))
        width = float(request.args.get("width", 800))
        height = float(request.args.get("height", 500))
    except (TypeError, ValueError) as exc:
        return jsonify({"error": f"Invalid parameters: {exc}"}), 400
    if not all(math.isfinite(v) for v in (lat, lng, width, height)):
        return jsonify({"error": "Invalid parameters: values must be finite"}), 400
    if width <= 0 or height <= 0:
        return jsonify({"error": "width and height must be positive"}), 400
    if width > MAX_VIEWPORT_PX or height > MAX_VIEWPORT_PX:
        return jsonify({"error": f"width and height must not exceed {MAX_VIEWPORT_PX}"}), 400

    try:
        records = filter_entities(_restaurants(), EntityQuery.from_params(request.args))
    except FileNotFoundError:
        log.exception("Restaurant data unavailable")
        return jsonify({"error": "Failed to fetch restaurants"}), 500

    entities = []
    for r in records:
        try:
            entities.append(Entity.from_record(r))
        except (KeyError, TypeError):
            log.debug("Skipping malformed restaurant record %r", r)
    state = MapState(
        viewport=Viewport(center=GeoPoint(lat, lng), zoom=zoom, width_px=width, height_px=height),
        selection=Selection(focused_id=request.args.get("focused") or None),
    )
    return jsonify(build_frame(state, entities).to_dict())


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app.run(host=HOST, port=PORT, debug=False)


if __name__ == "__main__":
    main()
